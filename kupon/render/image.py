"""PNG data-URI helpers for rendered codes."""

from __future__ import annotations

import base64
import io

from PIL import Image

from ..errors import EncodingError

_PNG_PREFIX = "data:image/png;base64,"


def to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_uri(image: Image.Image) -> str:
    """Encode an image as an inline ``data:image/png;base64,...`` URI."""
    encoded = base64.b64encode(to_png_bytes(image)).decode("ascii")
    return f"{_PNG_PREFIX}{encoded}"


def from_data_uri(uri: str) -> Image.Image:
    """Decode a PNG data URI back into an image."""
    if not uri.startswith(_PNG_PREFIX):
        raise EncodingError("Bukan data URI PNG")
    raw = base64.b64decode(uri[len(_PNG_PREFIX):])
    image = Image.open(io.BytesIO(raw))
    image.load()
    return image
