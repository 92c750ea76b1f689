"""CLI entry point for issuing coupon codes."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import KuponConfig, load_config
from .display import format_price, open_label, outlet_count_label
from .errors import EncodingError, ValidationError
from .expiry import watch
from .lifecycle import CouponIssuer
from .models import FoodItem, GeneratedCode, OutletInfo
from .payload import decode_payload
from .render.image import from_data_uri
from .render.linear import barcode_text, render_vertical_barcode


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="kupon",
        description="Kupon makanan — terbitkan kode QR dan barcode untuk satu item",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path file konfigurasi (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Tampilkan log debug"
    )

    sub = parser.add_subparsers(dest="command")

    # issue
    issue_parser = sub.add_parser("issue", help="Terbitkan kode kupon baru")
    issue_parser.add_argument("--code", required=True, help="Kode produk")
    issue_parser.add_argument("--name", required=True, help="Nama makanan")
    issue_parser.add_argument("--price", type=int, required=True, help="Harga")
    issue_parser.add_argument("--outlet", required=True, help="Nama outlet")
    issue_parser.add_argument("--address", required=True, help="Alamat outlet")
    issue_parser.add_argument("--image", default=None, help="URL/data URI gambar")
    issue_parser.add_argument("--json", action="store_true", help="Keluaran JSON")
    issue_parser.add_argument(
        "--qr", type=str, default=None, metavar="FILE", help="Simpan kode QR (PNG)"
    )
    issue_parser.add_argument(
        "--barcode", type=str, default=None, metavar="FILE",
        help="Simpan barcode vertikal (PNG)",
    )
    issue_parser.add_argument(
        "--pdf", type=str, default=None, metavar="FILE",
        help="Simpan kupon sebagai PDF",
    )
    issue_parser.add_argument(
        "--copy", action="store_true", help="Salin kode produk ke clipboard"
    )
    issue_parser.add_argument(
        "--watch", action="store_true", help="Tampilkan hitung mundur"
    )

    # barcode
    barcode_parser = sub.add_parser("barcode", help="Buat barcode vertikal saja")
    barcode_parser.add_argument("--code", required=True, help="Kode produk")
    barcode_parser.add_argument("--price", type=int, required=True, help="Harga")
    barcode_parser.add_argument(
        "--output", "-o", type=str, default="barcode.png", metavar="FILE"
    )

    # decode
    decode_parser = sub.add_parser("decode", help="Uraikan payload kode QR")
    decode_parser.add_argument("payload", help="Teks payload JSON")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)

    try:
        match args.command:
            case "issue":
                asyncio.run(_cmd_issue(config, args))
            case "barcode":
                _cmd_barcode(config, args)
            case "decode":
                _cmd_decode(args)
    except ValidationError as e:
        for message in e.errors.values():
            print(message, file=sys.stderr)
        sys.exit(2)
    except EncodingError as e:
        print(f"Gagal membuat kode: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


def validate_input(item: FoodItem, outlet: OutletInfo) -> None:
    """Check the fields the coupon core relies on.

    Raises:
        ValidationError: With one message per invalid field.
    """
    errors: dict[str, str] = {}
    if not item.code.strip():
        errors["code"] = "Kode produk wajib diisi"
    if not item.name.strip():
        errors["name"] = "Nama makanan wajib diisi"
    if item.price < 0:
        errors["price"] = "Harga tidak boleh negatif"
    if not outlet.name.strip():
        errors["outlet"] = "Nama outlet wajib diisi"
    if not outlet.address.strip():
        errors["address"] = "Alamat outlet wajib diisi"
    if errors:
        raise ValidationError(errors)


async def _cmd_issue(config: KuponConfig, args) -> None:
    item = FoodItem(
        code=args.code.strip(),
        name=args.name.strip(),
        price=args.price,
        image=args.image,
    )
    outlet = OutletInfo(name=args.outlet.strip(), address=args.address.strip())
    validate_input(item, outlet)

    issuer = CouponIssuer(config)
    code = await issuer.issue(item, outlet)

    if args.json:
        print(json.dumps(code.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_code(code)

    if args.qr:
        from_data_uri(code.qr_code).save(args.qr)
        print(f"Kode QR disimpan: {args.qr}")
    if args.barcode:
        _save_barcode(code.food_item, args.barcode, config)
        print(f"Barcode disimpan: {args.barcode}")
    if args.pdf:
        from .pdf import generate_pdf

        try:
            path = generate_pdf(code, args.pdf, barcode_style=config.barcode)
            print(f"PDF disimpan: {path}")
        except ImportError as e:
            print(f"Gagal membuat PDF: {e}", file=sys.stderr)
    if args.copy:
        from .clipboard import copy_code

        if copy_code(code):
            print("Kode disalin ke clipboard")
        else:
            print("Gagal menyalin kode", file=sys.stderr)

    if args.watch:
        await watch(
            code.expires_at,
            lambda text: print(f"\rMasa berlaku {text}", end="", flush=True),
            interval=config.countdown.interval_seconds,
        )
        print()


def _cmd_barcode(config: KuponConfig, args) -> None:
    item = FoodItem(code=args.code, name=args.code, price=args.price)
    _save_barcode(item, args.output, config)
    print(f"Barcode disimpan: {args.output}")


def _cmd_decode(args) -> None:
    data = decode_payload(args.payload)
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _save_barcode(item: FoodItem, path: str, config: KuponConfig) -> None:
    image = render_vertical_barcode(barcode_text(item), config.barcode)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    image.save(path)


def _print_code(code: GeneratedCode) -> None:
    item = code.food_item
    outlet = code.outlet_info
    print(f"🎟  Kupon {code.id}")
    print(f"   {item.name} — {format_price(item.price)}")
    print(f"   Kode: {item.code}")
    print(f"   Berlaku sampai: {code.expires_at.isoformat(timespec='seconds')}")
    print(f"📍 {outlet.name} ({outlet.distance})")
    print(f"   {outlet.address}")
    print(f"   {open_label(code)} · {outlet.operating_hours}")
    print(f"   {outlet_count_label(code)}")
