"""Services module exports."""

from pricetag.services.feed import ProductFeed, ProductRecord, get_product_feed
from pricetag.services.image_cache import CacheWriteResult, ImageCache, cache_key, get_image_cache
from pricetag.services.renderer import render_price_tag
from pricetag.services.tags import PriceTagService, RenderRequest, TagResult, get_price_tag_service
from pricetag.services.validation import (
    Validated,
    validate_height,
    validate_product_id,
    validate_width,
)

__all__ = [
    # Feed
    "ProductFeed",
    "ProductRecord",
    "get_product_feed",
    # Cache
    "CacheWriteResult",
    "ImageCache",
    "cache_key",
    "get_image_cache",
    # Rendering
    "render_price_tag",
    # Price tags
    "PriceTagService",
    "RenderRequest",
    "TagResult",
    "get_price_tag_service",
    # Validation
    "Validated",
    "validate_height",
    "validate_product_id",
    "validate_width",
]
