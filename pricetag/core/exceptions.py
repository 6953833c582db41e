"""Error kinds, custom exception classes and exception handlers."""

from enum import Enum

from fastapi import HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from pricetag.core.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Every way a price tag request can fail."""

    MISSING_ID = "missing_id"
    INVALID_ID = "invalid_id"
    INVALID_WIDTH = "invalid_width"
    INVALID_HEIGHT = "invalid_height"
    PRODUCT_NOT_FOUND = "product_not_found"
    FEED_UNAVAILABLE = "feed_unavailable"
    RENDER_ERROR = "render_error"
    CACHE_WRITE_ERROR = "cache_write_error"
    INTERNAL_ERROR = "internal_error"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self]


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_ID: "No product ID provided in the string query",
    ErrorKind.INVALID_ID: "Invalid product ID.",
    ErrorKind.INVALID_WIDTH: "Invalid width value.",
    ErrorKind.INVALID_HEIGHT: "Invalid height value.",
    ErrorKind.PRODUCT_NOT_FOUND: "Product not found.",
    ErrorKind.FEED_UNAVAILABLE: "Product feed unavailable.",
    ErrorKind.RENDER_ERROR: "Unable to render price tag.",
    ErrorKind.CACHE_WRITE_ERROR: "Cache write failed.",
    ErrorKind.INTERNAL_ERROR: "An internal error occurred. Please try again later.",
}

ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.MISSING_ID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_WIDTH: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_HEIGHT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FEED_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.RENDER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.CACHE_WRITE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """Base application exception.

    ``message`` is the fixed, client-safe text for ``kind``; ``detail``
    holds internal context for logs only.
    """

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(
        self,
        detail: str = "",
        kind: ErrorKind | None = None,
        status_code: int | None = None,
    ):
        if kind is not None:
            self.kind = kind
        self.detail = detail
        self.message = self.kind.message
        self.status_code = status_code or self.kind.status_code
        super().__init__(detail or self.message)


class FeedUnavailableError(AppError):
    """The product feed could not be read or parsed."""

    kind = ErrorKind.FEED_UNAVAILABLE


class RenderError(AppError):
    """The price tag could not be rendered."""

    kind = ErrorKind.RENDER_ERROR


class CacheWriteError(AppError):
    """A rendered tag could not be stored (non-fatal, logged only)."""

    kind = ErrorKind.CACHE_WRITE_ERROR


async def app_exception_handler(request: Request, exc: AppError) -> PlainTextResponse:
    """Handle application exceptions."""
    logger.warning(
        "Application exception",
        kind=exc.kind.value,
        status_code=exc.status_code,
        detail=exc.detail,
        path=str(request.url),
    )

    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def http_exception_handler(request: Request, exc: HTTPException) -> PlainTextResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=str(request.url),
    )

    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Handle unhandled exceptions."""
    logger.exception(
        "Unhandled exception",
        exc_info=exc,
        path=str(request.url),
    )

    return PlainTextResponse(
        ErrorKind.INTERNAL_ERROR.message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
