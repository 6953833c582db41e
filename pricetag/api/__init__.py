"""API module exports."""

from pricetag.api.deps import AppSettings, TagService
from pricetag.api.routes import health_router, tags_router

__all__ = [
    # Routers
    "health_router",
    "tags_router",
    # Dependencies
    "AppSettings",
    "TagService",
]
