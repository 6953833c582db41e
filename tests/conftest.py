"""Test configuration and fixtures.

Provides isolated test fixtures for:
- A product feed and cache directory under pytest's tmp_path
- A price tag service with an instrumented renderer
- HTTP client with dependency overrides
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pricetag.core.config import Settings, get_settings
from pricetag.main import app
from pricetag.services.feed import ProductFeed
from pricetag.services.image_cache import ImageCache
from pricetag.services.renderer import render_price_tag
from pricetag.services.tags import PriceTagService, get_price_tag_service

ATOM_NS = "http://www.w3.org/2005/Atom"
VENDOR_NS = "http://base.google.com/ns/1.0"

FEED_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="{ATOM_NS}" xmlns:g="{VENDOR_NS}">
  <title>Test store</title>
  <entry>
    <id>tag:store,2024:atom-id-only</id>
    <title>Atom id only</title>
    <g:price>$1.00</g:price>
  </entry>
  <entry>
    <title>Widget</title>
    <g:id>sku-123</g:id>
    <g:price>$19.99</g:price>
  </entry>
  <entry>
    <title>Widget duplicate</title>
    <g:id>sku-123</g:id>
    <g:price>$99.99</g:price>
  </entry>
  <entry>
    <title>Gadget</title>
    <g:id>SKU_456</g:id>
    <g:price>129.00 EUR</g:price>
  </entry>
  <entry>
    <title>Empty price</title>
    <g:id>sku-empty</g:id>
    <g:price></g:price>
  </entry>
  <entry>
    <title>No price</title>
    <g:id>sku-noprice</g:id>
  </entry>
</feed>
"""


class CountingRenderer:
    """Wraps the real renderer and counts calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, int, int]] = []

    def __call__(self, price: str, width: int, height: int, font_path: Path | None) -> bytes:
        self.calls.append((price, width, height))
        return render_price_tag(price, width, height, font_path)

    @property
    def count(self) -> int:
        return len(self.calls)


# =============================================================================
# Filesystem Fixtures
# =============================================================================

@pytest.fixture
def feed_file(tmp_path: Path) -> Path:
    """Write the sample product feed."""
    path = tmp_path / "product_feed.xml"
    path.write_text(FEED_XML, encoding="utf-8")
    return path


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def test_settings(feed_file: Path, cache_dir: Path) -> Settings:
    """Create test settings pointing at tmp_path, using Pillow's default font."""
    return Settings(
        feed_path=feed_file,
        cache_dir=cache_dir,
        font_path=None,
        debug=True,
    )


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def renderer() -> CountingRenderer:
    return CountingRenderer()


@pytest.fixture
def feed(test_settings: Settings) -> ProductFeed:
    return ProductFeed(test_settings.feed_path, test_settings.feed_namespace)


@pytest.fixture
def image_cache(test_settings: Settings) -> ImageCache:
    return ImageCache(test_settings.cache_dir, test_settings.cache_expiration_seconds)


@pytest.fixture
def tag_service(
    test_settings: Settings,
    feed: ProductFeed,
    image_cache: ImageCache,
    renderer: CountingRenderer,
) -> PriceTagService:
    return PriceTagService(
        settings=test_settings,
        feed=feed,
        cache=image_cache,
        renderer=renderer,
    )


# =============================================================================
# HTTP Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    tag_service: PriceTagService,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with service and settings overrides."""
    app.dependency_overrides[get_price_tag_service] = lambda: tag_service
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
