"""Top-level label generation with default and error fallbacks."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping

from barcode_service import BarcodeService, CodeEncoder
from config import DEFAULT_CODE, FALLBACK_PAGE_SIZE, LabelSettings
from label_templates import RenderContext
from label_types import (
    Box,
    ComposedPage,
    DrawImage,
    DrawText,
    GeneratedLabel,
    LabelOutcome,
    LabelRequest,
    PlacedElement,
    RenderResult,
)
from label_templates.utils import LINE_HEIGHT
from layout_model import ElementType, LayoutParseError, parse_layout
from page_composer import compose_page
from pdf_output import render_pdf

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = 10.0
ERROR_MARGIN = 20.0
ERROR_COLOR = "#FF0000"
CAPTION_COLOR = "#666666"


def label_filename(now: datetime | None = None) -> str:
    """Return ``label-YYYYMMDD-HHMMSS.pdf`` for the given (UTC) time."""

    moment = now or datetime.now(timezone.utc)
    return f"label-{moment:%Y%m%d-%H%M%S}.pdf"


def generate_label(
    request: LabelRequest,
    layout_json: str | None,
    *,
    encoder: CodeEncoder | None = None,
    settings: LabelSettings | None = None,
    now: datetime | None = None,
) -> GeneratedLabel:
    """Render ``request`` with ``layout_json``; never raises.

    Missing, empty or malformed layouts and composition failures produce the
    built-in default label. If that cannot be built either, the result is a
    page showing the error message.
    """

    settings = settings or LabelSettings()
    encoder = encoder or BarcodeService()
    filename = label_filename(now)

    try:
        layout = parse_layout(layout_json)
    except LayoutParseError as exc:
        logger.warning("Layout could not be parsed, using default label: %s", exc)
        layout = None

    if layout is None or layout.is_empty:
        logger.info("No custom layout found, using default label")
        return _default_or_error(request.data, encoder, settings, filename)

    logger.info("Using custom layout with %d elements", len(layout.elements))
    context = RenderContext(
        record=request.data,
        encoder=encoder,
        qr_error_correction=settings.qr_error_correction,
    )
    try:
        content = render_pdf(compose_page(layout, context))
    except Exception as exc:
        logger.warning("Custom layout failed, using default label: %s", exc)
        return _default_or_error(request.data, encoder, settings, filename)

    logger.info("PDF generated: %d bytes", len(content))
    return GeneratedLabel(content=content, filename=filename, outcome=LabelOutcome.CUSTOM)


def _default_or_error(
    record: Mapping[str, str],
    encoder: CodeEncoder,
    settings: LabelSettings,
    filename: str,
) -> GeneratedLabel:
    try:
        content = render_pdf(compose_default_label(record, encoder, settings))
    except Exception as exc:
        logger.exception("Default label generation failed")
        content = render_pdf(compose_error_label(str(exc)))
        return GeneratedLabel(content=content, filename=filename, outcome=LabelOutcome.ERROR)
    return GeneratedLabel(content=content, filename=filename, outcome=LabelOutcome.DEFAULT)


def compose_default_label(
    record: Mapping[str, str],
    encoder: CodeEncoder,
    settings: LabelSettings,
) -> ComposedPage:
    """Single-column label: name, price, barcode, QR code and code caption.

    Encoder errors propagate so the caller can switch to the error label.
    """

    product_name = record.get("ProductName", "Sample Product")
    price = record.get("Price", "99.99")
    code = record.get("Code", DEFAULT_CODE)

    barcode_png = encoder.encode_linear(code)
    qr_png = encoder.encode_2d(code, settings.qr_error_correction)

    page_width, page_height = FALLBACK_PAGE_SIZE
    content_width = page_width - 2 * DEFAULT_MARGIN
    items: list[PlacedElement] = []
    cursor = DEFAULT_MARGIN

    def place(name: str, kind: ElementType, gap: float, height: float,
              result: RenderResult, width: float = content_width,
              right_align: bool = False) -> None:
        nonlocal cursor
        cursor += gap
        left = DEFAULT_MARGIN + (content_width - width if right_align else 0.0)
        items.append(
            PlacedElement(
                element_id=f"default-{name}",
                kind=kind,
                box=Box(left, cursor, width, height),
                result=result,
            )
        )
        cursor += height

    place("name", ElementType.TEXT, 0.0, 14 * LINE_HEIGHT,
          RenderResult.drawn(DrawText(product_name, font_size=14, bold=True)))
    place("price", ElementType.TEXT, 5.0, 12 * LINE_HEIGHT,
          RenderResult.drawn(DrawText(f"{settings.currency_symbol}{price}", font_size=12)))
    place("barcode", ElementType.BARCODE, 10.0, 40.0,
          RenderResult.drawn(DrawImage(barcode_png)))
    place("qrcode", ElementType.QRCODE, 5.0, 40.0,
          RenderResult.drawn(DrawImage(qr_png)), width=40.0, right_align=True)
    place("code", ElementType.TEXT, 5.0, 8 * LINE_HEIGHT,
          RenderResult.drawn(DrawText(code, font_size=8, color=CAPTION_COLOR)))

    return ComposedPage(
        width=page_width,
        height=page_height,
        background=None,
        items=tuple(items),
    )


def compose_error_label(message: str) -> ComposedPage:
    page_width, page_height = FALLBACK_PAGE_SIZE
    box = Box(
        ERROR_MARGIN,
        ERROR_MARGIN,
        page_width - 2 * ERROR_MARGIN,
        page_height - 2 * ERROR_MARGIN,
    )
    return ComposedPage(
        width=page_width,
        height=page_height,
        background=None,
        items=(
            PlacedElement(
                element_id="error",
                kind=ElementType.TEXT,
                box=box,
                result=RenderResult.drawn(
                    DrawText(
                        f"Error generating label: {message}",
                        font_size=12,
                        color=ERROR_COLOR,
                    )
                ),
            ),
        ),
    )
