"""Price tag image endpoint."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from pricetag.api.deps import AppSettings, TagService
from pricetag.services.tags import PNG_MEDIA_TYPE

router = APIRouter(tags=["Price Tags"])


@router.get(
    "/",
    summary="Render a product price tag",
    response_class=Response,
    responses={
        200: {
            "description": "Transparent PNG with the product price centered",
            "content": {PNG_MEDIA_TYPE: {}},
        },
        400: {"description": "Missing or invalid parameter", "content": {"text/plain": {}}},
        404: {"description": "Product not found", "content": {"text/plain": {}}},
        503: {"description": "Product feed unavailable", "content": {"text/plain": {}}},
    },
)
async def get_price_tag(
    service: TagService,
    settings: AppSettings,
    product_id: Annotated[str | None, Query(alias="id")] = None,
    width: Annotated[str | None, Query(alias="w")] = None,
    height: Annotated[str | None, Query(alias="h")] = None,
) -> Response:
    """
    Render the price tag for a feed product.

    - **id**: product identifier, letters, digits, `-` and `_` only
    - **w**: canvas width in pixels (1-2000, default 1000)
    - **h**: canvas height in pixels (1-1000, default 1415)

    Errors are returned as plain text.
    """
    # Rendering and file I/O block, keep them off the event loop
    result = await run_in_threadpool(service.handle, product_id, width, height)

    if not result.ok:
        status_code = (
            status.HTTP_200_OK
            if settings.legacy_error_status
            else result.error.status_code  # type: ignore[union-attr]
        )
        return PlainTextResponse(result.message, status_code=status_code)

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"X-Cache": "HIT" if result.cache_hit else "MISS"},
    )
