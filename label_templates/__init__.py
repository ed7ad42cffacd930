"""Renderer lookup for layout element types."""

from __future__ import annotations

from typing import Iterable

from layout_model import ElementType
from .base import ElementRenderer, RenderContext
from .codes import BarcodeRenderer, QrCodeRenderer
from .images import DynamicImageRenderer, ImageRenderer
from .shapes import LineRenderer, RectangleRenderer
from .text import TextRenderer
from .unknown import UnknownRenderer, error_result

_RENDERERS: dict[ElementType, ElementRenderer] = {
    ElementType.TEXT: TextRenderer(),
    ElementType.BARCODE: BarcodeRenderer(),
    ElementType.QRCODE: QrCodeRenderer(),
    ElementType.IMAGE: ImageRenderer(),
    ElementType.DYNAMIC_IMAGE: DynamicImageRenderer(),
    ElementType.RECTANGLE: RectangleRenderer(),
    ElementType.LINE: LineRenderer(),
    ElementType.UNKNOWN: UnknownRenderer(),
}


def get_renderer(kind: ElementType) -> ElementRenderer:
    """Return the renderer registered for ``kind``."""

    return _RENDERERS[kind]


def list_element_types() -> Iterable[str]:
    """Return the recognised element type tags."""

    return sorted(kind.value for kind in _RENDERERS if kind is not ElementType.UNKNOWN)


__all__ = [
    "ElementRenderer",
    "RenderContext",
    "error_result",
    "get_renderer",
    "list_element_types",
]
