"""Static and per-request images carried as base64 payloads."""

from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO

from PIL import Image

from data_binding import resolve_image_payload
from label_types import Box, DrawImage, RenderResult
from layout_model import LayoutElement
from .base import ElementRenderer, RenderContext
from .utils import placeholder

logger = logging.getLogger(__name__)

MISSING_BACKGROUND = "#F0F0F0"
ERROR_BACKGROUND = "#FFE0E0"


def decode_image_payload(payload: str) -> bytes:
    """Decode base64 image text, dropping any ``data:`` URI prefix.

    Raises ``ValueError`` or ``OSError`` when the payload is not a readable
    image.
    """

    _, _, encoded = payload.rpartition(",")
    compact = "".join(encoded.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 image data: {exc}") from exc
    if not raw:
        raise ValueError("Image payload is empty.")

    with Image.open(BytesIO(raw)) as img:
        img.load()
    return raw


class ImageRenderer(ElementRenderer):
    missing_caption = "[Image]"
    by_element_id = False

    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        payload = resolve_image_payload(
            element,
            context.record,
            by_element_id=self.by_element_id,
        )
        if payload is None:
            return placeholder(
                self.missing_caption,
                MISSING_BACKGROUND,
                "no image data",
            )

        try:
            raw = decode_image_payload(payload)
        except (ValueError, OSError) as exc:
            logger.warning(
                "Image element %s could not be decoded: %s",
                element.id,
                exc,
            )
            return placeholder(
                "[Image Error]",
                ERROR_BACKGROUND,
                f"image decode failed: {exc}",
                font_size=8.0,
            )
        return RenderResult.drawn(DrawImage(raw))


class DynamicImageRenderer(ImageRenderer):
    """Image looked up in the record under the element's own id."""

    missing_caption = "[Dynamic Image]"
    by_element_id = True
