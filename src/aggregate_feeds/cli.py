"""CLI for building feeds once, without the API server."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone

from aggregate_feeds.config import load_config
from aggregate_feeds.services import build_services
from common.cli_helpers import save_text_local, setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build category RSS feeds from the news wire"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (test/prod). Defaults to NEWSWIRE_CONFIG or 'prod'",
    )
    parser.add_argument(
        "--category",
        default="all",
        help="Lowercased output category, 'all' for every category, or 'feed' for the combined feed.",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Write one XML file per feed here instead of printing to stdout.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()

    config = load_config(args.config)
    services = build_services(config)
    aggregator = services.aggregator

    # Feeds share one pipeline run; scraped articles are cached between renders
    if args.category == "all":
        targets: list[str | None] = list(aggregator.categories)
    elif args.category == "feed":
        targets = [None]
    else:
        try:
            targets = [aggregator.resolve_category(args.category)]
        except KeyError:
            logger.error(
                "Unknown category: %s. Valid categories: %s",
                args.category,
                ", ".join(c.lower() for c in aggregator.categories),
            )
            return 1

    items = aggregator.build_items()
    now = datetime.now(timezone.utc)
    for category in targets:
        xml = aggregator.render(items, category)
        if args.output_dir:
            path = save_text_local(xml, (category or "feed").lower(), now, args.output_dir)
            logger.info("Saved %s feed to %s", category or "combined", path)
        else:
            sys.stdout.write(xml)

    return 0


if __name__ == "__main__":
    sys.exit(main())
