"""Printable coupon sheet using ReportLab."""

from __future__ import annotations

import io
from datetime import datetime, timezone
from pathlib import Path
from xml.sax.saxutils import escape

from . import display
from .expiry import format_remaining
from .models import GeneratedCode
from .render.image import from_data_uri, to_png_bytes
from .render.linear import BarcodeStyle, barcode_text, render_vertical_barcode


def generate_pdf(
    code: GeneratedCode,
    output_path: str | Path,
    barcode_style: BarcodeStyle | None = None,
    now: datetime | None = None,
) -> Path:
    """Generate a one-page PDF coupon for an issued code.

    Args:
        code: The issued code to render.
        output_path: Where to save the PDF file.
        barcode_style: Style for the vertical barcode.
        now: Reference time for the printed countdown.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
        EncodingError: If the barcode cannot be rendered.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A6
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Image,
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError(
            "reportlab diperlukan: pip install 'kupon[pdf]'"
        )

    now = now or datetime.now(timezone.utc)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A6,
        leftMargin=8 * mm,
        rightMargin=8 * mm,
        topMargin=8 * mm,
        bottomMargin=8 * mm,
        title=f"Kupon {code.id}",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "CouponTitle",
        parent=styles["Title"],
        fontSize=14,
        leading=18,
    )
    heading_style = ParagraphStyle(
        "CouponHeading",
        parent=styles["Heading3"],
        fontSize=10,
        leading=13,
        spaceBefore=2 * mm,
    )
    body_style = ParagraphStyle(
        "CouponBody",
        parent=styles["Normal"],
        fontSize=7,
        leading=9,
    )
    muted_style = ParagraphStyle(
        "CouponMuted",
        parent=body_style,
        textColor=colors.grey,
    )
    price_style = ParagraphStyle(
        "CouponPrice",
        parent=styles["Normal"],
        fontName="Helvetica-Bold",
        fontSize=11,
        leading=14,
    )

    item = code.food_item
    outlet = code.outlet_info
    remaining = format_remaining(code.expires_at, now)

    elements: list = []
    elements.append(Paragraph(display.TITLE, title_style))
    elements.append(
        Paragraph(f"{display.VALIDITY_LABEL} {remaining}", muted_style)
    )
    elements.append(Spacer(1, 2 * mm))

    elements.append(Paragraph(escape(item.name), heading_style))
    elements.append(Paragraph(display.USAGE_HOURS, muted_style))
    elements.append(Paragraph(display.format_price(item.price), price_style))
    elements.append(
        Paragraph(f"{display.COUPON_COUNT_LABEL}: 1", body_style)
    )
    elements.append(Spacer(1, 3 * mm))

    qr_png = to_png_bytes(from_data_uri(code.qr_code))
    barcode_png = to_png_bytes(
        render_vertical_barcode(barcode_text(item), barcode_style)
    )
    codes = Table(
        [[
            Image(io.BytesIO(qr_png), width=32 * mm, height=32 * mm),
            Image(io.BytesIO(barcode_png), width=16 * mm, height=32 * mm),
        ]],
        colWidths=[38 * mm, 22 * mm],
    )
    codes.setStyle(TableStyle([
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("BOX", (0, 0), (-1, -1), 0.5, colors.lightgrey),
    ]))
    elements.append(codes)
    elements.append(Spacer(1, 2 * mm))
    elements.append(Paragraph(display.EXPIRY_NOTICE, muted_style))
    elements.append(
        Paragraph(
            f"Kode <font name='Courier-Bold'>{escape(item.code)}</font>",
            body_style,
        )
    )
    elements.append(Paragraph(f"ID {code.id}", muted_style))

    elements.append(Paragraph(display.outlet_count_label(code), heading_style))
    elements.append(
        Paragraph(
            f"<b>{escape(outlet.name)}</b> ({escape(outlet.distance)})",
            body_style,
        )
    )
    elements.append(Paragraph(escape(outlet.address), muted_style))
    elements.append(
        Paragraph(
            f"{display.open_label(code)} · {escape(outlet.operating_hours)}",
            body_style,
        )
    )

    elements.append(Paragraph("Syarat dan Ketentuan", heading_style))
    for heading, text in display.TERMS:
        elements.append(Paragraph(f"<b>{heading}</b>", body_style))
        for line in text.splitlines():
            elements.append(Paragraph(line, muted_style))

    doc.build(elements)
    return output_path
