"""Tests for coupon issuance and refresh."""

import random
from dataclasses import replace
from datetime import timedelta
from unittest.mock import patch

import pytest

from kupon.config import CouponConfig, KuponConfig
from kupon.errors import EncodingError
from kupon.lifecycle import CouponIssuer
from kupon.models import FoodItem, OutletInfo
from kupon.payload import decode_payload
from kupon.render.image import from_data_uri

from conftest import T0


@pytest.fixture
def issuer(clock) -> CouponIssuer:
    return CouponIssuer(clock=clock, rng=random.Random(7))


class TestIssue:
    @pytest.mark.asyncio
    async def test_issue_example(self, issuer, item, outlet):
        code = await issuer.issue(item, outlet)

        assert code.outlet_info.total_outlets == 99
        assert code.outlet_info.is_open is True
        assert code.food_item.description == "Tersedia selama jam buka"
        assert code.qr_code.startswith("data:image/png;base64,")
        assert from_data_uri(code.qr_code).size == (300, 300)
        assert len(code.id) == 9

    @pytest.mark.asyncio
    async def test_validity_window_is_48_hours(self, issuer, item, outlet):
        code = await issuer.issue(item, outlet)
        assert code.generated_at == T0
        assert code.expires_at - code.generated_at == timedelta(hours=48)
        assert code.validity == timedelta(hours=48)
        assert code.expires_at > code.generated_at

    @pytest.mark.asyncio
    async def test_outlet_fields_overwritten(self, issuer, item):
        outlet = OutletInfo(
            name="Outlet B",
            address="Jl. Kenanga 9",
            distance="12km",
            is_open=False,
            operating_hours="08:00-17:00",
            total_outlets=3,
        )
        code = await issuer.issue(item, outlet)
        assert code.outlet_info == OutletInfo(
            name="Outlet B",
            address="Jl. Kenanga 9",
            distance="1km",
            is_open=True,
            operating_hours="00:00-23:59",
            total_outlets=99,
        )

    @pytest.mark.asyncio
    async def test_description_forced_and_image_defaulted(self, issuer, outlet):
        item = FoodItem(code="R1", name="Roti", price=8000, description="Lembut")
        code = await issuer.issue(item, outlet)
        assert code.food_item.description == "Tersedia selama jam buka"
        assert code.food_item.image == "/unnamed.png"
        assert item.description == "Lembut"  # input untouched

    @pytest.mark.asyncio
    async def test_image_kept_when_given(self, issuer, outlet):
        item = FoodItem(code="R1", name="Roti", price=8000, image="https://cdn/roti.jpg")
        code = await issuer.issue(item, outlet)
        assert code.food_item.image == "https://cdn/roti.jpg"

    @pytest.mark.asyncio
    async def test_empty_image_defaulted(self, issuer, outlet):
        item = FoodItem(code="R1", name="Roti", price=8000, image="")
        code = await issuer.issue(item, outlet)
        assert code.food_item.image == "/unnamed.png"

    @pytest.mark.asyncio
    async def test_qr_payload_contents(self, issuer, item, outlet):
        captured = []

        def fake_render(payload, style):
            captured.append(payload)
            return "data:image/png;base64,AAAA"

        with patch("kupon.lifecycle.qr_data_uri", side_effect=fake_render):
            code = await issuer.issue(item, outlet)

        assert code.qr_code == "data:image/png;base64,AAAA"
        data = decode_payload(captured[0])
        assert data == {
            "code": "ABC123",
            "name": "Kopi Susu",
            "price": 15000,
            "outlet": "Outlet A",
            "timestamp": "2026-10-18T09:30:00.000Z",
        }

    @pytest.mark.asyncio
    async def test_encoding_error_propagates(self, issuer, item, outlet):
        with patch(
            "kupon.lifecycle.qr_data_uri",
            side_effect=EncodingError("terlalu panjang"),
        ):
            with pytest.raises(EncodingError, match="terlalu panjang"):
                await issuer.issue(item, outlet)

    @pytest.mark.asyncio
    async def test_oversized_payload_raises(self, issuer, outlet):
        item = FoodItem(code="X", name="N" * 4000, price=1)
        with pytest.raises(EncodingError):
            await issuer.issue(item, outlet)

    @pytest.mark.asyncio
    async def test_configured_constants(self, clock, item, outlet):
        config = KuponConfig(
            coupon=CouponConfig(
                validity_hours=1,
                description="Berlaku hari ini",
                placeholder_image="/kosong.png",
            )
        )
        code = await CouponIssuer(config, clock=clock).issue(item, outlet)
        assert code.expires_at - code.generated_at == timedelta(hours=1)
        assert code.food_item.description == "Berlaku hari ini"
        assert code.food_item.image == "/kosong.png"


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_replaces_record(self, issuer, clock, item, outlet):
        first = await issuer.issue(item, outlet)
        snapshot = replace(first)
        clock.advance(minutes=5)

        second = await issuer.refresh(first)

        assert second is not first
        assert first == snapshot
        assert second.id != first.id
        assert second.generated_at == T0 + timedelta(minutes=5)
        assert second.expires_at == second.generated_at + timedelta(hours=48)
        assert second.food_item == first.food_item
        assert second.outlet_info == first.outlet_info

    @pytest.mark.asyncio
    async def test_refresh_generated_at_strictly_later_with_frozen_clock(
        self, issuer, item, outlet
    ):
        first = await issuer.issue(item, outlet)
        second = await issuer.refresh(first)
        third = await issuer.refresh(second)
        assert first.generated_at < second.generated_at < third.generated_at

    @pytest.mark.asyncio
    async def test_refresh_redraws_colliding_id(self, issuer, item, outlet):
        with patch(
            "kupon.lifecycle.generate_id",
            side_effect=["AAAAAAAAA", "AAAAAAAAA", "BBBBBBBBB"],
        ):
            first = await issuer.issue(item, outlet)
            second = await issuer.refresh(first)
        assert first.id == "AAAAAAAAA"
        assert second.id == "BBBBBBBBB"

    @pytest.mark.asyncio
    async def test_refresh_new_payload_timestamp(self, issuer, clock, item, outlet):
        first = await issuer.issue(item, outlet)
        clock.advance(seconds=30)
        second = await issuer.refresh(first)
        assert second.qr_code != first.qr_code
