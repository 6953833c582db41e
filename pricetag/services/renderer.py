"""Price tag rendering with Pillow."""

import io
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont

from pricetag.core.exceptions import RenderError

PRICE_COLOR = "#f0f0e9"
PRICE_FONT_SIZE_RATIO = 1
TRANSPARENT = (0, 0, 0, 0)
MIN_RASTER_SIZE = 1


def font_size_for(price: str, width: int) -> float:
    """Font size that shrinks with the price length and grows with the canvas."""
    if not price:
        raise RenderError("Cannot size an empty price")
    return width * PRICE_FONT_SIZE_RATIO / len(price)


def load_font(font_path: Path | str | None, size: float) -> ImageFont.FreeTypeFont:
    """Load the label font at ``size`` pixels, or Pillow's default font without a path."""
    if font_path is None:
        return ImageFont.load_default(size=size)
    return ImageFont.truetype(str(font_path), size)


def render_price_tag(
    price: str,
    width: int,
    height: int,
    font_path: Path | str | None = None,
) -> bytes:
    """Render ``price`` centered on a transparent ``width`` x ``height`` PNG.

    Raises:
        RenderError: If the price is empty or the font cannot be used
    """
    size = font_size_for(price, width)

    try:
        canvas = Image.new("RGBA", (width, height), TRANSPARENT)
        draw = ImageDraw.Draw(canvas)

        if size < MIN_RASTER_SIZE:
            # Too small to rasterize; the label stays blank but the font must still load
            load_font(font_path, MIN_RASTER_SIZE)
        else:
            font = load_font(font_path, size)
            # Center on the ink box so proportional fonts line up too
            left, top, right, bottom = draw.textbbox((0, 0), price, font=font)
            x = (width - (left + right)) / 2
            y = (height - (top + bottom)) / 2
            draw.text((x, y), price, fill=ImageColor.getrgb(PRICE_COLOR), font=font)

        buffer = io.BytesIO()
        canvas.save(buffer, format="PNG")
    except (OSError, ValueError) as e:
        raise RenderError(f"Failed to render {price!r} at {width}x{height}: {e}") from e

    return buffer.getvalue()
