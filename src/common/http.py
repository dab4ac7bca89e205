"""HTTP fetching helpers."""

import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "newswire-rss/1.0 (RSS aggregator)"


def fetch_text(url: str, timeout: float, user_agent: str = DEFAULT_USER_AGENT) -> str:
    """GET a URL and return its body as text.

    Raises requests.HTTPError on non-2xx responses. Bodies served without a
    charset are decoded as UTF-8.
    """
    response = requests.get(
        url,
        timeout=timeout,
        headers={"User-Agent": user_agent},
    )
    response.raise_for_status()

    if "charset" not in response.headers.get("Content-Type", "").lower():
        response.encoding = "utf-8"

    logger.debug("Fetched %s (%d bytes)", url, len(response.content))
    return response.text
