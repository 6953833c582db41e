"""Price tag request orchestration.

Flow per request:

    parse -> validate (id, w, h) -> feed lookup -> cache key -> cache get
        hit:  serve cached bytes
        miss: render -> best-effort cache put -> serve fresh bytes

Validation and lookup failures end the request before the cache or the
renderer is touched.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pricetag.core.config import Settings, get_settings
from pricetag.core.exceptions import ErrorKind, FeedUnavailableError, RenderError
from pricetag.core.logging import bound_request, get_logger
from pricetag.services.feed import ProductFeed, ProductRecord, get_product_feed
from pricetag.services.image_cache import ImageCache, cache_key, get_image_cache
from pricetag.services.renderer import render_price_tag
from pricetag.services.validation import validate_height, validate_product_id, validate_width

logger = get_logger(__name__)

PNG_MEDIA_TYPE = "image/png"

Renderer = Callable[[str, int, int, Path | None], bytes]


@dataclass(frozen=True)
class RenderRequest:
    """A validated price tag request."""

    product_id: str
    width: int
    height: int


@dataclass(frozen=True)
class TagResult:
    """Outcome of a price tag request: image bytes or an error kind."""

    content: bytes | None = None
    error: ErrorKind | None = None
    media_type: str = PNG_MEDIA_TYPE
    cache_hit: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error else None

    @classmethod
    def failure(cls, error: ErrorKind) -> "TagResult":
        return cls(error=error, media_type="text/plain")


class PriceTagService:
    """Serves price tag images for feed products."""

    def __init__(
        self,
        settings: Settings,
        feed: ProductFeed,
        cache: ImageCache,
        renderer: Renderer = render_price_tag,
    ) -> None:
        self._settings = settings
        self._feed = feed
        self._cache = cache
        self._renderer = renderer

    @property
    def feed(self) -> ProductFeed:
        return self._feed

    @property
    def cache(self) -> ImageCache:
        return self._cache

    def parse_request(
        self,
        raw_id: str | None,
        raw_width: str | None,
        raw_height: str | None,
    ) -> RenderRequest | ErrorKind:
        """Validate raw query parameters into a ``RenderRequest``."""
        product_id = raw_id.strip() if raw_id is not None else ""
        if not product_id:
            return ErrorKind.MISSING_ID

        id_result = validate_product_id(product_id)
        if not id_result.ok:
            return id_result.error  # type: ignore[return-value]

        width_result = validate_width(
            raw_width, self._settings.max_width, self._settings.fallback_width
        )
        if not width_result.ok:
            return width_result.error  # type: ignore[return-value]

        height_result = validate_height(
            raw_height, self._settings.max_height, self._settings.fallback_height
        )
        if not height_result.ok:
            return height_result.error  # type: ignore[return-value]

        return RenderRequest(
            product_id=id_result.value,  # type: ignore[arg-type]
            width=width_result.value,  # type: ignore[arg-type]
            height=height_result.value,  # type: ignore[arg-type]
        )

    def key_for(self, product: ProductRecord, request: RenderRequest) -> str:
        size = (request.width, request.height) if self._settings.cache_key_includes_size else None
        return cache_key(product.id, product.price, size)

    def handle(
        self,
        raw_id: str | None,
        raw_width: str | None = None,
        raw_height: str | None = None,
    ) -> TagResult:
        """Run one price tag request to completion."""
        with bound_request(raw_id=raw_id, raw_width=raw_width, raw_height=raw_height):
            return self._handle(raw_id, raw_width, raw_height)

    def _handle(
        self,
        raw_id: str | None,
        raw_width: str | None,
        raw_height: str | None,
    ) -> TagResult:
        request = self.parse_request(raw_id, raw_width, raw_height)
        if isinstance(request, ErrorKind):
            logger.info("Rejected price tag request", error=request.value)
            return TagResult.failure(request)

        try:
            product = self._feed.find_product(request.product_id)
        except FeedUnavailableError:
            return TagResult.failure(ErrorKind.FEED_UNAVAILABLE)
        if product is None:
            logger.info("Product not found", product_id=request.product_id)
            return TagResult.failure(ErrorKind.PRODUCT_NOT_FOUND)

        key = self.key_for(product, request)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit", product_id=product.id, key=key)
            return TagResult(content=cached, cache_hit=True)

        try:
            image = self._renderer(
                product.price, request.width, request.height, self._settings.font_path
            )
        except RenderError as e:
            logger.error(
                "Price tag render failed",
                product_id=product.id,
                price=product.price,
                error=e.detail,
            )
            return TagResult.failure(ErrorKind.RENDER_ERROR)

        written = self._cache.put(key, image)
        if not written.ok:
            logger.warning(
                "Cache write failed",
                product_id=product.id,
                key=key,
                error=written.error.detail,  # type: ignore[union-attr]
            )

        logger.info(
            "Rendered price tag",
            product_id=product.id,
            width=request.width,
            height=request.height,
            cached=written.ok,
        )
        return TagResult(content=image, cache_hit=False)


def get_price_tag_service() -> PriceTagService:
    """Build the price tag service from the process-wide collaborators."""
    return PriceTagService(
        settings=get_settings(),
        feed=get_product_feed(),
        cache=get_image_cache(),
    )
