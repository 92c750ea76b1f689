"""Coupon issuance and refresh."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable

from .config import CouponConfig, KuponConfig, OutletDefaults
from .identifier import generate_id
from .models import FoodItem, GeneratedCode, OutletInfo
from .payload import encode_payload
from .render.qr import QRStyle, qr_data_uri

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CouponIssuer:
    """Issues and refreshes coupon codes for one item at one outlet.

    Issuance canonicalizes its input before encoding: outlet distance, open
    state, operating hours and outlet count are always replaced with the
    configured defaults, and the item description is replaced with a fixed
    text. Only the outlet name and address are taken from the caller.
    """

    def __init__(
        self,
        config: KuponConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        config = config or KuponConfig()
        self._coupon: CouponConfig = config.coupon
        self._outlet: OutletDefaults = config.outlet
        self._qr_style: QRStyle = config.qr
        self._clock = clock or _utcnow
        self._rng = rng

    @property
    def validity(self) -> timedelta:
        return timedelta(hours=self._coupon.validity_hours)

    def canonical_item(self, item: FoodItem) -> FoodItem:
        return replace(
            item,
            image=item.image or self._coupon.placeholder_image,
            description=self._coupon.description,
        )

    def canonical_outlet(self, outlet: OutletInfo) -> OutletInfo:
        return OutletInfo(
            name=outlet.name,
            address=outlet.address,
            distance=self._outlet.distance,
            is_open=self._outlet.is_open,
            operating_hours=self._outlet.operating_hours,
            total_outlets=self._outlet.total_outlets,
        )

    async def issue(self, item: FoodItem, outlet: OutletInfo) -> GeneratedCode:
        """Issue a new code for an item at an outlet.

        Raises:
            EncodingError: If the payload cannot be rendered as a QR code.
        """
        return await self._issue(item, outlet, generated_at=self._clock())

    async def refresh(self, current: GeneratedCode) -> GeneratedCode:
        """Issue a replacement for ``current`` from its item and outlet.

        ``current`` is left untouched. The replacement always has a different
        id and a strictly later ``generated_at``.
        """
        generated_at = max(
            self._clock(), current.generated_at + timedelta(microseconds=1)
        )
        code = await self._issue(
            current.food_item,
            current.outlet_info,
            generated_at=generated_at,
            previous_id=current.id,
        )
        logger.info("Kupon %s diperbarui menjadi %s", current.id, code.id)
        return code

    async def _issue(
        self,
        item: FoodItem,
        outlet: OutletInfo,
        *,
        generated_at: datetime,
        previous_id: str | None = None,
    ) -> GeneratedCode:
        code_id = generate_id(self._rng)
        while code_id == previous_id:
            code_id = generate_id(self._rng)

        food_item = self.canonical_item(item)
        outlet_info = self.canonical_outlet(outlet)

        payload = encode_payload(food_item, outlet_info, generated_at)
        logger.debug("Payload %s: %d karakter", code_id, len(payload))
        qr_code = await asyncio.to_thread(qr_data_uri, payload, self._qr_style)

        expires_at = generated_at + self.validity
        logger.info(
            "Kupon %s diterbitkan untuk %s, berlaku sampai %s",
            code_id,
            food_item.code,
            expires_at.isoformat(),
        )
        return GeneratedCode(
            id=code_id,
            food_item=food_item,
            outlet_info=outlet_info,
            qr_code=qr_code,
            generated_at=generated_at,
            expires_at=expires_at,
        )
