"""Display strings for the coupon result screen."""

from __future__ import annotations

from .models import GeneratedCode

TITLE = "Telah Ditukarkan"
VALIDITY_LABEL = "Masa berlaku"
# Shown to customers; the operative validity window is the configured one.
EXPIRY_NOTICE = "Kode QR akan kedaluwarsa dalam 10 menit. Muat ulang untuk memperbarui."
USAGE_HOURS = "Tersedia selama jam operasional"
COUPON_COUNT_LABEL = "Jumlah Kupon yang ditukarkan"

TERMS: list[tuple[str, str]] = [
    ("Masa Penukaran", "Berlaku selama 30 hari"),
    ("Batas pembelian", "Maksimal 1 item per hari"),
    ("Waktu Penggunaan", "Tersedia selama jam operasional"),
    (
        "Kebijakan Pengembalian",
        "Pengembalian dana tidak dapat dilakukan setelah pemesanan",
    ),
    (
        "Aturan Penggunaan",
        "1. Harus datang ke toko\n"
        "2. Jika sebagian item tidak tersedia karena musim atau faktor tak "
        "terduga lainnya, penjual akan menggantinya dengan item sejenis. "
        "Untuk informasi lebih lanjut, silakan diskusikan dengan penjual",
    ),
]


def format_price(price: int) -> str:
    """Format a price the way id-ID does, e.g. ``15000`` -> ``Rp15.000``."""
    sign = "-" if price < 0 else ""
    return f"{sign}Rp{abs(price):,}".replace(",", ".")


def outlet_count_label(code: GeneratedCode) -> str:
    return f"Bisa ditukar di {code.outlet_info.total_outlets} gerai"


def open_label(code: GeneratedCode) -> str:
    return "Buka" if code.outlet_info.is_open else "Tutup"
