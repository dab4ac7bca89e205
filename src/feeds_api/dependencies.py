"""Shared FastAPI dependencies."""

from fastapi import Request

from aggregate_feeds.services import Services


def get_services(request: Request) -> Services:
    """Dependency to get the process-wide services built at startup."""
    return request.app.state.services
