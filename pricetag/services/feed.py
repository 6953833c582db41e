"""Product feed lookup.

Reads an Atom feed whose entries carry the product id and price in a
vendor namespace (Google Merchant by default):

    <feed xmlns="http://www.w3.org/2005/Atom" xmlns:g="http://base.google.com/ns/1.0">
      <entry>
        <g:id>sku-123</g:id>
        <g:price>$19.99</g:price>
      </entry>
    </feed>

The feed is parsed once on first lookup and indexed by id. The index is
never refreshed for the life of the ``ProductFeed`` object.
"""

import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pricetag.core.config import get_settings
from pricetag.core.exceptions import FeedUnavailableError
from pricetag.core.logging import get_logger

logger = get_logger(__name__)

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"


@dataclass(frozen=True)
class ProductRecord:
    """A product as listed in the feed."""

    id: str
    price: str


class ProductFeed:
    """Read-only product lookup over an Atom feed file."""

    def __init__(self, path: Path | str, namespace: str) -> None:
        self._path = Path(path)
        self._namespace = namespace
        self._index: dict[str, ProductRecord] | None = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _field(self, entry: ET.Element, name: str) -> str | None:
        element = entry.find(f"{{{self._namespace}}}{name}")
        if element is None:
            return None
        return element.text or ""

    def _parse(self) -> dict[str, ProductRecord]:
        try:
            root = ET.parse(self._path).getroot()
        except (OSError, ET.ParseError) as e:
            logger.error("Failed to load product feed", path=str(self._path), error=str(e))
            raise FeedUnavailableError(f"{self._path}: {e}") from e

        index: dict[str, ProductRecord] = {}
        for entry in root.iter(f"{{{ATOM_NAMESPACE}}}entry"):
            product_id = self._field(entry, "id")
            if product_id is None:
                continue
            # First entry wins for duplicate ids
            if product_id not in index:
                index[product_id] = ProductRecord(
                    id=product_id,
                    price=self._field(entry, "price") or "",
                )

        logger.info("Product feed loaded", path=str(self._path), products=len(index))
        return index

    def _load(self) -> dict[str, ProductRecord]:
        if self._index is None:
            with self._lock:
                if self._index is None:
                    self._index = self._parse()
        return self._index

    def find_product(self, product_id: str) -> ProductRecord | None:
        """Return the first entry whose vendor id equals ``product_id``.

        Raises:
            FeedUnavailableError: If the feed cannot be read or parsed
        """
        return self._load().get(product_id)

    def check_health(self) -> bool:
        """Check that the feed can be loaded."""
        try:
            self._load()
            return True
        except FeedUnavailableError:
            return False


@lru_cache
def get_product_feed() -> ProductFeed:
    """Get the process-wide product feed."""
    settings = get_settings()
    return ProductFeed(settings.feed_path, settings.feed_namespace)
