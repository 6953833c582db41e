"""Query parameter validation.

Validators are pure and never raise: each returns a ``Validated`` holding
either the accepted value or the ``ErrorKind`` describing the rejection.
"""

import re
from dataclasses import dataclass
from typing import Generic, TypeVar

from pricetag.core.exceptions import ErrorKind

T = TypeVar("T")

MAX_WIDTH = 2000
MAX_HEIGHT = 1000
FALLBACK_WIDTH = 1000
FALLBACK_HEIGHT = 1415

_DISALLOWED_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Validated(Generic[T]):
    """Outcome of validating one parameter."""

    value: T | None = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def accept(cls, value: T) -> "Validated[T]":
        return cls(value=value)

    @classmethod
    def reject(cls, error: ErrorKind) -> "Validated[T]":
        return cls(error=error)


def sanitize_product_id(raw: str) -> str:
    """Strip every character outside ``[A-Za-z0-9_-]``."""
    return _DISALLOWED_ID_CHARS.sub("", raw)


def validate_product_id(raw: str | None) -> Validated[str]:
    """Accept ``raw`` only if sanitizing it is a no-op and leaves something."""
    if raw is None:
        return Validated.reject(ErrorKind.INVALID_ID)
    sanitized = sanitize_product_id(raw)
    if not sanitized or sanitized != raw:
        return Validated.reject(ErrorKind.INVALID_ID)
    return Validated.accept(sanitized)


def _parse_int(raw: str | int, max_digits: int) -> int | None:
    """Parse a decimal integer, giving up on strings longer than ``max_digits``."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = raw.strip()
    if not _INTEGER.fullmatch(text):
        return None
    if len(text.lstrip("+-").lstrip("0")) > max_digits:
        return None
    return int(text)


def _validate_dimension(
    raw: str | int | None,
    maximum: int,
    fallback: int,
    error: ErrorKind,
) -> Validated[int]:
    # An absent parameter takes the fallback as-is, even above ``maximum``
    if raw is None:
        return Validated.accept(fallback)
    value = _parse_int(raw, len(str(maximum)))
    if value is None or not 1 <= value <= maximum:
        return Validated.reject(error)
    return Validated.accept(value)


def validate_width(
    raw: str | int | None,
    max_width: int = MAX_WIDTH,
    fallback: int = FALLBACK_WIDTH,
) -> Validated[int]:
    """Validate the ``w`` parameter: an integer in ``[1, max_width]``."""
    return _validate_dimension(raw, max_width, fallback, ErrorKind.INVALID_WIDTH)


def validate_height(
    raw: str | int | None,
    max_height: int = MAX_HEIGHT,
    fallback: int = FALLBACK_HEIGHT,
) -> Validated[int]:
    """Validate the ``h`` parameter: an integer in ``[1, max_height]``."""
    return _validate_dimension(raw, max_height, fallback, ErrorKind.INVALID_HEIGHT)
