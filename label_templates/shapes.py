"""Rectangles and lines."""

from __future__ import annotations

from data_binding import box_style, line_style
from label_types import Box, FillBox, RenderResult
from layout_model import LayoutElement
from .base import ElementRenderer, RenderContext


class RectangleRenderer(ElementRenderer):
    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        style = box_style(element.properties)
        has_border = style.border_width > 0
        return RenderResult.drawn(
            FillBox(
                fill=style.fill,
                stroke=style.border_color if has_border else None,
                stroke_width=style.border_width if has_border else 0.0,
            )
        )


class LineRenderer(ElementRenderer):
    """A thin bar along the top of the box, as tall as the line width."""

    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        style = line_style(element.properties)
        return RenderResult.drawn(
            FillBox(fill=style.color, height=max(style.width, 0.0))
        )
