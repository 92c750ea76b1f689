"""Vertical CODE128 barcode rendering.

The barcode is drawn horizontally first, then rotated 90 degrees clockwise
onto a second, fixed-height canvas so the bars run vertically next to the
QR code. The rotation is purely geometric and does not change the data.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass

import barcode
from barcode.errors import BarcodeError
from PIL import Image, ImageDraw

from ..errors import EncodingError
from ..models import FoodItem
from .image import to_data_uri


@dataclass(frozen=True)
class BarcodeStyle:
    module_width: int = 2    # Pixels per narrowest bar
    bar_height: int = 128
    margin: int = 5          # Quiet margin on every side
    padding: int = 10        # Added to the rotated canvas width
    canvas_height: int = 128
    dark: str = "#000000"
    light: str = "#FFFFFF"


def barcode_text(item: FoodItem) -> str:
    """Product code and price concatenated without a separator."""
    return f"{item.code}{item.price}"


def _code128_modules(text: str) -> str:
    """Return the CODE128 module pattern as a string of ``0``/``1``."""
    if not text.isascii():
        raise EncodingError(
            f"Karakter di luar himpunan CODE128: {text!r}"
        )
    try:
        code128 = barcode.get_barcode_class("code128")
        return code128(text).build()[0]
    except (BarcodeError, KeyError, ValueError) as e:
        raise EncodingError(f"Gagal membuat barcode untuk {text!r}: {e}") from e


def render_horizontal(text: str, style: BarcodeStyle | None = None) -> Image.Image:
    """Draw the barcode left to right with no human-readable text."""
    style = style or BarcodeStyle()
    modules = _code128_modules(text)

    width = len(modules) * style.module_width + 2 * style.margin
    height = style.bar_height + 2 * style.margin
    image = Image.new("RGB", (width, height), style.light)
    draw = ImageDraw.Draw(image)

    x = style.margin
    for bit, run in itertools.groupby(modules):
        run_width = len(list(run)) * style.module_width
        if bit == "1":
            draw.rectangle(
                [x, style.margin, x + run_width - 1, style.margin + style.bar_height - 1],
                fill=style.dark,
            )
        x += run_width
    return image


def rotate_vertical(
    horizontal: Image.Image, style: BarcodeStyle | None = None
) -> Image.Image:
    """Rotate a horizontal barcode 90 degrees clockwise onto a fixed canvas.

    The canvas is ``horizontal.height + padding`` wide and ``canvas_height``
    tall. The rotated barcode is centred on it; whatever falls outside the
    canvas is clipped.
    """
    style = style or BarcodeStyle()
    canvas = Image.new(
        "RGB",
        (horizontal.height + style.padding, style.canvas_height),
        style.light,
    )
    rotated = horizontal.transpose(Image.Transpose.ROTATE_270)
    offset = (
        (canvas.width - rotated.width) // 2,
        (canvas.height - rotated.height) // 2,
    )
    canvas.paste(rotated, offset)
    return canvas


def render_vertical_barcode(
    text: str, style: BarcodeStyle | None = None
) -> Image.Image:
    style = style or BarcodeStyle()
    return rotate_vertical(render_horizontal(text, style), style)


def vertical_barcode_data_uri(
    item: FoodItem, style: BarcodeStyle | None = None
) -> str:
    """Render the item's vertical barcode as a PNG data URI."""
    return to_data_uri(render_vertical_barcode(barcode_text(item), style))
