"""QR code rendering with the ``qrcode`` library."""

from __future__ import annotations

from dataclasses import dataclass

import qrcode
from PIL import Image
from qrcode.exceptions import DataOverflowError

from ..errors import EncodingError
from .image import to_data_uri

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


@dataclass(frozen=True)
class QRStyle:
    size: int = 300       # Output width and height in pixels
    margin: int = 2       # Quiet zone in modules
    dark: str = "#000000"
    light: str = "#FFFFFF"
    error_correction: str = "M"


def render_qr(payload: str, style: QRStyle | None = None) -> Image.Image:
    """Render a payload as a square RGB QR code image.

    The smallest QR version that fits the payload is used. The symbol is drawn
    at one pixel per module and scaled to ``style.size`` with nearest-neighbour
    resampling, so identical input always gives identical pixels.

    Raises:
        EncodingError: If the payload does not fit in a QR code, or the symbol
            has more modules than the target size has pixels.
    """
    style = style or QRStyle()
    try:
        level = _ERROR_CORRECTION[style.error_correction.upper()]
    except KeyError:
        raise EncodingError(
            f"Tingkat koreksi galat tidak dikenal: {style.error_correction!r}"
        ) from None

    qr = qrcode.QRCode(
        version=None,
        error_correction=level,
        box_size=1,
        border=style.margin,
    )
    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise EncodingError(
            f"Payload terlalu panjang untuk kode QR ({len(payload)} karakter)"
        ) from e

    modules = qr.modules_count + 2 * style.margin
    if modules > style.size:
        raise EncodingError(
            f"Kode QR versi {qr.version} butuh {modules} modul, "
            f"lebih besar dari {style.size}px"
        )

    img = qr.make_image(fill_color=style.dark, back_color=style.light)
    symbol = img.get_image().convert("RGB")
    return symbol.resize((style.size, style.size), Image.Resampling.NEAREST)


def qr_data_uri(payload: str, style: QRStyle | None = None) -> str:
    """Render a payload and return it as a PNG data URI."""
    return to_data_uri(render_qr(payload, style))
