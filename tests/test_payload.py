"""Tests for the QR payload encoder."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from kupon.errors import EncodingError
from kupon.models import FoodItem, OutletInfo
from kupon.payload import (
    build_payload,
    decode_payload,
    encode_payload,
    format_timestamp,
)

from conftest import T0


class TestFormatTimestamp:
    def test_utc_with_milliseconds_and_z(self):
        assert format_timestamp(T0) == "2026-10-18T09:30:00.000Z"

    def test_converts_other_timezones(self):
        wib = timezone(timedelta(hours=7))
        moment = datetime(2026, 10, 18, 16, 30, 0, 250000, tzinfo=wib)
        assert format_timestamp(moment) == "2026-10-18T09:30:00.250Z"

    def test_naive_is_treated_as_utc(self):
        assert format_timestamp(datetime(2026, 1, 2, 3, 4, 5)) == (
            "2026-01-02T03:04:05.000Z"
        )


class TestEncodePayload:
    def test_round_trip(self, item, outlet):
        """Decoding reproduces code, name, price and outlet name exactly."""
        data = decode_payload(encode_payload(item, outlet, T0))
        assert data["code"] == "ABC123"
        assert data["name"] == "Kopi Susu"
        assert data["price"] == 15000
        assert data["outlet"] == "Outlet A"
        assert data["timestamp"] == "2026-10-18T09:30:00.000Z"

    def test_compact_and_deterministic(self, item, outlet):
        text = encode_payload(item, outlet, T0)
        assert text == encode_payload(item, outlet, T0)
        assert "\", " not in text
        assert "\": " not in text
        assert list(json.loads(text)) == [
            "code", "name", "price", "outlet", "timestamp",
        ]

    def test_omits_address_description_and_image(self, outlet):
        item = FoodItem(
            code="X1",
            name="Roti",
            price=0,
            description="enak",
            image="data:image/png;base64,AAAA",
        )
        data = build_payload(item, outlet, T0)
        assert "address" not in data
        assert "description" not in data
        assert "image" not in data
        assert "Jl. Mawar 1" not in encode_payload(item, outlet, T0)

    def test_non_ascii_kept_verbatim(self):
        item = FoodItem(code="NS01", name="Nasi Goreng Spesial – Pedas", price=25000)
        outlet = OutletInfo(name="Gerai Café", address="Jl. Melati 2")
        text = encode_payload(item, outlet, T0)
        assert "Café" in text
        assert decode_payload(text)["name"] == "Nasi Goreng Spesial – Pedas"


class TestDecodePayload:
    def test_invalid_json(self):
        with pytest.raises(EncodingError, match="JSON"):
            decode_payload("not json")

    def test_not_an_object(self):
        with pytest.raises(EncodingError, match="objek"):
            decode_payload("[1, 2]")

    def test_missing_keys(self):
        with pytest.raises(EncodingError, match="price"):
            decode_payload('{"code":"A","name":"B","outlet":"C","timestamp":"t"}')
