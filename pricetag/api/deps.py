"""API dependencies for FastAPI routes."""

from typing import Annotated

from fastapi import Depends

from pricetag.core.config import Settings, get_settings
from pricetag.services.tags import PriceTagService, get_price_tag_service

# Type aliases for cleaner route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
TagService = Annotated[PriceTagService, Depends(get_price_tag_service)]
