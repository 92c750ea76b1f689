"""Data models for food items, outlets and issued coupon codes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class FoodItem:
    """A single food item the coupon can be redeemed for."""

    code: str              # Product identifier
    name: str
    price: int             # Whole rupiah, no minor unit
    description: str | None = None
    image: str | None = None  # Data URI or external reference


@dataclass(frozen=True)
class OutletInfo:
    """The outlet where the coupon is redeemed."""

    name: str
    address: str
    distance: str = "1km"
    is_open: bool = True
    operating_hours: str = "00:00-23:59"
    total_outlets: int = 99


@dataclass(frozen=True)
class GeneratedCode:
    """One issuance of a coupon code.

    A refresh produces a new instance; instances are never updated in place.
    """

    id: str
    food_item: FoodItem
    outlet_info: OutletInfo
    qr_code: str  # data:image/png;base64,...
    generated_at: datetime
    expires_at: datetime

    @property
    def validity(self) -> timedelta:
        return self.expires_at - self.generated_at

    def to_dict(self) -> dict:
        """Return a JSON-ready representation with ISO-8601 timestamps."""
        return {
            "id": self.id,
            "food_item": asdict(self.food_item),
            "outlet_info": asdict(self.outlet_info),
            "qr_code": self.qr_code,
            "generated_at": self.generated_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }
