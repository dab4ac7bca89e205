"""RSS feed endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from aggregate_feeds.services import Services
from feeds_api.dependencies import get_services

RSS_MEDIA_TYPE = "application/rss+xml; charset=utf-8"

router = APIRouter(tags=["feeds"])


# Sync handlers: a cache miss runs the blocking pipeline in FastAPI's threadpool
@router.get("/feed")
def combined_feed(services: Annotated[Services, Depends(get_services)]):
    """Every selected item, regardless of output category."""
    return Response(content=services.aggregator.get_cached_feed(None), media_type=RSS_MEDIA_TYPE)


@router.get("/{category}")
def category_feed(category: str, services: Annotated[Services, Depends(get_services)]):
    """Feed for one output category, addressed by its lowercased name."""
    try:
        resolved = services.aggregator.resolve_category(category)
    except KeyError:
        raise HTTPException(status_code=404, detail="Category not found")

    return Response(content=services.aggregator.get_cached_feed(resolved), media_type=RSS_MEDIA_TYPE)
