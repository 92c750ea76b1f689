"""Canonical payload embedded in the QR code."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from .errors import EncodingError
from .models import FoodItem, OutletInfo

PAYLOAD_KEYS = ("code", "name", "price", "outlet", "timestamp")


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_payload(
    item: FoodItem, outlet: OutletInfo, timestamp: datetime
) -> dict:
    """Build the payload record.

    Address, description and image are left out to keep the QR code small.
    """
    return {
        "code": item.code,
        "name": item.name,
        "price": item.price,
        "outlet": outlet.name,
        "timestamp": format_timestamp(timestamp),
    }


def encode_payload(
    item: FoodItem, outlet: OutletInfo, timestamp: datetime
) -> str:
    """Serialize the payload to compact JSON text."""
    return json.dumps(
        build_payload(item, outlet, timestamp),
        ensure_ascii=False,
        separators=(",", ":"),
    )


def decode_payload(text: str) -> dict:
    """Parse payload text produced by :func:`encode_payload`.

    Raises:
        EncodingError: If the text is not a payload object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EncodingError(f"Payload bukan JSON yang valid: {e}") from e

    if not isinstance(data, dict):
        raise EncodingError("Payload harus berupa objek JSON")
    missing = [key for key in PAYLOAD_KEYS if key not in data]
    if missing:
        raise EncodingError(f"Payload tidak lengkap: {', '.join(missing)}")
    return data
