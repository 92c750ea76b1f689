"""Shared fixtures for kupon tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kupon.models import FoodItem, GeneratedCode, OutletInfo
from kupon.render.qr import qr_data_uri

T0 = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def item() -> FoodItem:
    return FoodItem(code="ABC123", name="Kopi Susu", price=15000)


@pytest.fixture
def outlet() -> OutletInfo:
    return OutletInfo(name="Outlet A", address="Jl. Mawar 1")


@pytest.fixture
def generated(item, outlet) -> GeneratedCode:
    return GeneratedCode(
        id="K0P1SU5U0",
        food_item=FoodItem(
            code=item.code,
            name=item.name,
            price=item.price,
            description="Tersedia selama jam buka",
            image="/unnamed.png",
        ),
        outlet_info=outlet,
        qr_code=qr_data_uri('{"code":"ABC123"}'),
        generated_at=T0,
        expires_at=T0 + timedelta(hours=48),
    )


class FakeClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
