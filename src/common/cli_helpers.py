"""Common CLI helper utilities."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools and the API server."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def save_text_local(
    text: str,
    prefix: str,
    timestamp: datetime,
    output_dir: str = "output",
    suffix: str = ".xml",
) -> Path:
    """Save a rendered document to a local file.

    Args:
        text: Document body.
        prefix: Filename prefix (e.g., "sportas").
        timestamp: Timestamp to include in filename.
        output_dir: Directory to save to (default: "output").
        suffix: File extension including the dot.

    Returns:
        Path to the created file.
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    filename = f"{prefix}_{timestamp.strftime('%Y_%m_%d_%H_%M')}{suffix}"
    filepath = output_path / filename
    filepath.write_text(text, encoding="utf-8")
    return filepath
