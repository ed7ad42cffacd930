"""Text elements bound to the data record."""

from __future__ import annotations

from data_binding import resolve_text, text_style
from label_types import Box, DrawText, RenderResult
from layout_model import LayoutElement
from .base import ElementRenderer, RenderContext


class TextRenderer(ElementRenderer):
    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        style = text_style(element.properties)
        return RenderResult.drawn(
            DrawText(
                resolve_text(element.properties, context.record),
                font_size=style.font_size,
                color=style.color,
                bold=style.bold,
                italic=style.italic,
                align=style.align,
            )
        )
