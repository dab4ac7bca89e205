"""Health check endpoint."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from aggregate_feeds.services import Services
from common import cache_keys
from feeds_api.dependencies import get_services
from feeds_api.models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(services: Annotated[Services, Depends(get_services)]):
    keys = [cache_keys.feed()] + [cache_keys.feed(c) for c in services.aggregator.categories]
    return HealthResponse(
        status=200,
        cachedFeed=any(services.cache.contains(key) for key in keys),
        lastRefreshUtc=services.health.last_refresh_utc,
        uptimeUtc=datetime.now(timezone.utc),
    )
