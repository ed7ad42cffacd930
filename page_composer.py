"""Order, place and render the elements of a layout into one page."""

from __future__ import annotations

import logging

from config import FALLBACK_PAGE_SIZE
from data_binding import is_usable_color, rotation
from label_templates import RenderContext, error_result, get_renderer
from label_types import Box, ComposedPage, PlacedElement
from layout_model import LayoutElement, TemplateLayout

logger = logging.getLogger(__name__)

_WHITE = {"#FFFFFF", "#FFF", "WHITE"}


def page_size_for(layout: TemplateLayout) -> tuple[float, float]:
    fallback_width, fallback_height = FALLBACK_PAGE_SIZE
    width = layout.width if layout.width > 0 else fallback_width
    height = layout.height if layout.height > 0 else fallback_height
    return width, height


def page_background(layout: TemplateLayout) -> str | None:
    """Return the fill for the page, or ``None`` to leave it unpainted."""

    color = (layout.background_color or "").strip()
    if not color or color.upper() in _WHITE:
        return None
    if not is_usable_color(color):
        logger.warning("Ignoring unusable background color '%s'", color)
        return None
    return color


def paint_order(elements: tuple[LayoutElement, ...]) -> list[LayoutElement]:
    # sorted() is stable, so equal z-indexes keep document order.
    return sorted(elements, key=lambda element: element.z_index)


def element_box(element: LayoutElement) -> Box:
    return Box(
        x=element.x,
        y=element.y,
        width=element.width,
        height=element.height,
        rotation=rotation(element.properties),
    )


def compose_page(layout: TemplateLayout, context: RenderContext) -> ComposedPage:
    """Build the painter's-order draw list for ``layout``.

    Each element renders in isolation; a renderer that raises is replaced by
    an error marker so sibling elements still draw.
    """

    width, height = page_size_for(layout)
    items: list[PlacedElement] = []
    for element in paint_order(layout.elements):
        box = element_box(element)
        kind = element.kind
        try:
            result = get_renderer(kind).render(element, box, context)
        except Exception as exc:
            logger.warning(
                "Rendering %s element %s failed: %s",
                element.type_name,
                element.id,
                exc,
            )
            result = error_result(f"renderer failed: {exc}")
        items.append(
            PlacedElement(
                element_id=element.id,
                kind=kind,
                box=box,
                result=result,
            )
        )

    return ComposedPage(
        width=width,
        height=height,
        background=page_background(layout),
        items=tuple(items),
    )
