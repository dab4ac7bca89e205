"""Helper functions for feed aggregation and rendering."""

import re
from pathlib import PurePosixPath
from urllib.parse import urlparse

# Wire descriptions open with the lead image, e.g. <img src="https://sc.bns.lt/docs/..." alt="" />
_DESCRIPTION_IMG_RE = re.compile(r'<img\s+src="([^"]+)"')


def featured_image_from_description(description: str | None) -> str | None:
    '''Return the first image src in an item's description HTML.'''
    if not description or not description.strip():
        return None
    match = _DESCRIPTION_IMG_RE.search(description)
    return match.group(1) if match else None


def image_media_type(url: str) -> str:
    '''Media type for an image URL from its file extension (jpg maps to jpeg).'''
    extension = PurePosixPath(urlparse(url).path).suffix.lstrip(".").lower()
    if not extension:
        return "image/jpeg"
    if extension == "jpg":
        extension = "jpeg"
    return f"image/{extension}"


def is_excluded_topic(title: str, excluded: list[str]) -> bool:
    '''True if the topic title contains any excluded substring.'''
    return any(name in title for name in excluded)
