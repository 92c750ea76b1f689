"""Short issuance identifiers."""

from __future__ import annotations

import random
import string

ID_LENGTH = 9
ID_ALPHABET = string.digits + string.ascii_uppercase

_rng = random.Random()


def generate_id(rng: random.Random | None = None, length: int = ID_LENGTH) -> str:
    """Return a random uppercase alphanumeric identifier.

    Not cryptographically secure and not checked for uniqueness; with 36**9
    possible values collisions within a session are negligible.
    """
    source = rng or _rng
    return "".join(source.choices(ID_ALPHABET, k=length))
