"""Raster rendering of QR codes and vertical CODE128 barcodes."""

from .image import from_data_uri, to_data_uri
from .linear import (
    BarcodeStyle,
    barcode_text,
    render_horizontal,
    render_vertical_barcode,
    rotate_vertical,
    vertical_barcode_data_uri,
)
from .qr import QRStyle, qr_data_uri, render_qr

__all__ = [
    "QRStyle",
    "render_qr",
    "qr_data_uri",
    "BarcodeStyle",
    "barcode_text",
    "render_horizontal",
    "rotate_vertical",
    "render_vertical_barcode",
    "vertical_barcode_data_uri",
    "to_data_uri",
    "from_data_uri",
]
