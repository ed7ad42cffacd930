"""Barcode and QR code elements."""

from __future__ import annotations

import logging

from data_binding import resolve_code_payload
from label_types import Box, DrawImage, DrawText, RenderResult
from layout_model import LayoutElement
from .base import ElementRenderer, RenderContext

logger = logging.getLogger(__name__)

FALLBACK_FONT_SIZE = 8.0


def _text_fallback(element: LayoutElement, payload: str, exc: Exception) -> RenderResult:
    logger.warning(
        "Encoding %s element %s failed, drawing payload as text: %s",
        element.type_name,
        element.id,
        exc,
    )
    return RenderResult.fallback(
        f"encoder failed: {exc}",
        DrawText(payload, font_size=FALLBACK_FONT_SIZE),
    )


class BarcodeRenderer(ElementRenderer):
    """CODE_128 barcode stretched to fill the element box."""

    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        payload = resolve_code_payload(element, context.record)
        try:
            png_bytes = context.encoder.encode_linear(payload)
        except Exception as exc:
            return _text_fallback(element, payload, exc)
        return RenderResult.drawn(DrawImage(png_bytes))


class QrCodeRenderer(ElementRenderer):
    """QR code stretched to fill the element box."""

    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        payload = resolve_code_payload(element, context.record)
        try:
            png_bytes = context.encoder.encode_2d(
                payload,
                context.qr_error_correction,
            )
        except Exception as exc:
            return _text_fallback(element, payload, exc)
        return RenderResult.drawn(DrawImage(png_bytes))
