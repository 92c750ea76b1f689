"""Food coupon codes: QR and vertical barcode issuance with expiry tracking."""

from .config import (
    CouponConfig,
    CountdownConfig,
    KuponConfig,
    OutletDefaults,
    load_config,
)
from .errors import ClipboardError, EncodingError, KuponError, ValidationError
from .expiry import ExpiryState, ExpiryTracker, format_remaining, watch
from .identifier import generate_id
from .lifecycle import CouponIssuer
from .models import FoodItem, GeneratedCode, OutletInfo
from .payload import decode_payload, encode_payload
from .render import (
    BarcodeStyle,
    QRStyle,
    qr_data_uri,
    render_qr,
    render_vertical_barcode,
    vertical_barcode_data_uri,
)

__all__ = [
    "FoodItem",
    "OutletInfo",
    "GeneratedCode",
    "CouponIssuer",
    "generate_id",
    "encode_payload",
    "decode_payload",
    "QRStyle",
    "render_qr",
    "qr_data_uri",
    "BarcodeStyle",
    "render_vertical_barcode",
    "vertical_barcode_data_uri",
    "ExpiryState",
    "ExpiryTracker",
    "format_remaining",
    "watch",
    "KuponError",
    "ValidationError",
    "EncodingError",
    "ClipboardError",
    "KuponConfig",
    "CouponConfig",
    "OutletDefaults",
    "CountdownConfig",
    "load_config",
]
