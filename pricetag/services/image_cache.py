"""Filesystem cache for rendered price tags.

Entries are ``<directory>/<key>.png``; the file mtime is the freshness
timestamp. Writes go to a temp file in the same directory and are
published with ``os.replace`` so readers never see a partial entry.
Concurrent misses for the same key may both write; the last one wins.
"""

import hashlib
import os
import tempfile
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pricetag.core.config import get_settings
from pricetag.core.exceptions import CacheWriteError
from pricetag.core.logging import get_logger

logger = get_logger(__name__)

CACHE_EXPIRATION_TIME = 7 * 24 * 60 * 60
CACHE_FILE_SUFFIX = ".png"


def cache_key(product_id: str, price: str, size: tuple[int, int] | None = None) -> str:
    """Derive the cache key for a product at its current price.

    Without ``size`` this is ``md5("<id>-<price>")``; with it the
    dimensions are appended as ``-<w>x<h>``.
    """
    source = f"{product_id}-{price}"
    if size is not None:
        width, height = size
        source = f"{source}-{width}x{height}"
    return hashlib.md5(source.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CacheWriteResult:
    """Outcome of a best-effort cache write."""

    path: Path
    error: CacheWriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ImageCache:
    """Time-expiring PNG cache backed by a directory."""

    def __init__(
        self,
        directory: Path | str,
        expiration_seconds: int = CACHE_EXPIRATION_TIME,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._directory = Path(directory)
        self._expiration = expiration_seconds
        self._clock = clock

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def expiration_seconds(self) -> int:
        return self._expiration

    def path_for(self, key: str) -> Path:
        return self._directory / f"{key}{CACHE_FILE_SUFFIX}"

    def get(self, key: str) -> bytes | None:
        """Return cached bytes if the entry exists and has not expired."""
        path = self.path_for(key)
        try:
            age = self._clock() - path.stat().st_mtime
            if age >= self._expiration:
                logger.debug("Cache entry expired", key=key, age=round(age, 1))
                return None
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug("Cache get failed", key=key, error=str(e))
            return None

    def put(self, key: str, data: bytes) -> CacheWriteResult:
        """Store ``data`` under ``key``, replacing any previous entry."""
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            now = self._clock()
            os.utime(tmp_name, (now, now))
            os.replace(tmp_name, path)
            return CacheWriteResult(path=path)
        except OSError as e:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            return CacheWriteResult(path=path, error=CacheWriteError(f"{path}: {e}"))

    def check_health(self) -> bool:
        """Check that the cache directory exists (or can be created) and is writable."""
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cache directory unavailable", directory=str(self._directory), error=str(e))
            return False
        return os.access(self._directory, os.W_OK)


@lru_cache
def get_image_cache() -> ImageCache:
    """Get the process-wide image cache."""
    settings = get_settings()
    return ImageCache(settings.cache_dir, settings.cache_expiration_seconds)
