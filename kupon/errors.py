"""Exception types raised by the coupon core and its collaborators."""

from __future__ import annotations


class KuponError(Exception):
    """Base class for all kupon errors."""


class ValidationError(KuponError):
    """Raised by input collectors when a field fails validation.

    The core never raises this itself; it trusts validated input.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class EncodingError(KuponError):
    """Raised when a payload cannot be rendered as a QR code or barcode."""


class ClipboardError(KuponError):
    """Raised when copying text to the system clipboard fails."""
