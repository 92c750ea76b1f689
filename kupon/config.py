"""TOML configuration loader for coupon issuance and rendering."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .render.linear import BarcodeStyle
from .render.qr import QRStyle

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

CONFIG_ENV = "KUPON_CONFIG"


@dataclass
class CouponConfig:
    validity_hours: float = 48
    description: str = "Tersedia selama jam buka"
    placeholder_image: str = "/unnamed.png"


@dataclass
class OutletDefaults:
    """Values written over every outlet at issuance; only name/address pass through."""

    distance: str = "1km"
    is_open: bool = True
    operating_hours: str = "00:00-23:59"
    total_outlets: int = 99


@dataclass
class CountdownConfig:
    interval_seconds: float = 1.0


@dataclass
class KuponConfig:
    coupon: CouponConfig = field(default_factory=CouponConfig)
    outlet: OutletDefaults = field(default_factory=OutletDefaults)
    qr: QRStyle = field(default_factory=QRStyle)
    barcode: BarcodeStyle = field(default_factory=BarcodeStyle)
    countdown: CountdownConfig = field(default_factory=CountdownConfig)


def load_config(path: str | Path | None = None) -> KuponConfig:
    """Load configuration from a TOML file.

    When no path is given, the ``KUPON_CONFIG`` environment variable is
    consulted. Falls back to defaults if the file doesn't exist.
    """
    raw: dict = {}

    if path is None:
        path = os.environ.get(CONFIG_ENV) or None

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli diperlukan pada Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cpn = raw.get("coupon", {})
    out = raw.get("outlet", {})
    qr = raw.get("qr", {})
    bar = raw.get("barcode", {})
    cnt = raw.get("countdown", {})

    coupon_defaults = CouponConfig()
    outlet_defaults = OutletDefaults()
    qr_defaults = QRStyle()
    bar_defaults = BarcodeStyle()

    validity_hours = cpn.get("validity_hours", coupon_defaults.validity_hours)
    if validity_hours <= 0:
        raise ValueError(
            f"validity_hours harus lebih besar dari 0: {validity_hours}"
        )

    return KuponConfig(
        coupon=CouponConfig(
            validity_hours=validity_hours,
            description=cpn.get("description", coupon_defaults.description),
            placeholder_image=cpn.get(
                "placeholder_image", coupon_defaults.placeholder_image
            ),
        ),
        outlet=OutletDefaults(
            distance=out.get("distance", outlet_defaults.distance),
            is_open=out.get("is_open", outlet_defaults.is_open),
            operating_hours=out.get(
                "operating_hours", outlet_defaults.operating_hours
            ),
            total_outlets=out.get("total_outlets", outlet_defaults.total_outlets),
        ),
        qr=QRStyle(
            size=qr.get("size", qr_defaults.size),
            margin=qr.get("margin", qr_defaults.margin),
            dark=qr.get("dark", qr_defaults.dark),
            light=qr.get("light", qr_defaults.light),
            error_correction=qr.get(
                "error_correction", qr_defaults.error_correction
            ),
        ),
        barcode=BarcodeStyle(
            module_width=bar.get("module_width", bar_defaults.module_width),
            bar_height=bar.get("bar_height", bar_defaults.bar_height),
            margin=bar.get("margin", bar_defaults.margin),
            padding=bar.get("padding", bar_defaults.padding),
            canvas_height=bar.get("canvas_height", bar_defaults.canvas_height),
            dark=bar.get("dark", bar_defaults.dark),
            light=bar.get("light", bar_defaults.light),
        ),
        countdown=CountdownConfig(
            interval_seconds=cnt.get("interval_seconds", 1.0),
        ),
    )
