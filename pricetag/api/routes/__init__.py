"""Routes module exports."""

from pricetag.api.routes.health import router as health_router
from pricetag.api.routes.tags import router as tags_router

__all__ = [
    "health_router",
    "tags_router",
]
