from __future__ import annotations

import logging

from label_types import Box, DrawText, RenderResult
from layout_model import LayoutElement
from .base import ElementRenderer, RenderContext

logger = logging.getLogger(__name__)

DIAGNOSTIC_COLOR = "#FF0000"


class UnknownRenderer(ElementRenderer):
    """Marks an element whose type tag is not recognised."""

    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        logger.warning(
            "Element %s has unknown type '%s'", element.id, element.type_name
        )
        return RenderResult.fallback(
            f"unknown element type '{element.type_name}'",
            DrawText(
                f"[Unknown: {element.type_name}]",
                font_size=8.0,
                color=DIAGNOSTIC_COLOR,
            ),
        )


def error_result(reason: str) -> RenderResult:
    """Marker drawn in place of an element whose renderer failed outright."""

    return RenderResult.fallback(
        reason,
        DrawText("[Error]", font_size=8.0, color=DIAGNOSTIC_COLOR),
    )
