"""Response models for the feeds API."""

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness plus cache and refresh state."""

    status: int
    cachedFeed: bool
    lastRefreshUtc: datetime | None = None
    uptimeUtc: datetime
