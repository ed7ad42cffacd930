"""Draw a composed page onto a single-page PDF."""

from __future__ import annotations

import logging
from dataclasses import replace
from io import BytesIO

from reportlab.lib.colors import toColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import getAscent
from reportlab.pdfgen import canvas

from label_templates import error_result
from label_templates.utils import (
    LINE_HEIGHT,
    font_name_for,
    text_block_height,
    wrap_text_to_width,
)
from label_types import Box, ComposedPage, DrawImage, DrawText, FillBox, PlacedElement

logger = logging.getLogger(__name__)


def render_pdf(page: ComposedPage) -> bytes:
    """Return PDF bytes for ``page``.

    Layout coordinates have their origin at the top-left; PDF space starts at
    the bottom-left, so every element is translated to its flipped origin and
    drawn with ``y`` going negative inside its box.
    """

    buffer = BytesIO()
    # invariant output keeps identical input byte-identical
    canvas_obj = canvas.Canvas(
        buffer,
        pagesize=(page.width, page.height),
        invariant=1,
    )

    if page.background:
        canvas_obj.saveState()
        canvas_obj.setFillColor(toColor(page.background))
        canvas_obj.rect(0, 0, page.width, page.height, stroke=0, fill=1)
        canvas_obj.restoreState()

    for item in page.items:
        try:
            _draw_item(canvas_obj, page.height, item)
        except Exception as exc:
            logger.warning(
                "Drawing %s element %s failed: %s",
                item.kind,
                item.element_id,
                exc,
            )
            marker = replace(item, result=error_result(f"drawing failed: {exc}"))
            _draw_item(canvas_obj, page.height, marker)

    canvas_obj.showPage()
    canvas_obj.save()
    return buffer.getvalue()


def _draw_item(
    canvas_obj: canvas.Canvas,
    page_height: float,
    item: PlacedElement,
) -> None:
    box = item.box
    canvas_obj.saveState()
    try:
        canvas_obj.translate(box.x, page_height - box.y)
        if box.rotation:
            # positive degrees turn clockwise on the page
            canvas_obj.rotate(-box.rotation)

        for instruction in item.result.instructions:
            if isinstance(instruction, FillBox):
                _draw_fill_box(canvas_obj, box, instruction)
            elif isinstance(instruction, DrawImage):
                _draw_image(canvas_obj, box, instruction)
            elif isinstance(instruction, DrawText):
                _draw_text(canvas_obj, box, instruction)
    finally:
        canvas_obj.restoreState()


def _draw_fill_box(canvas_obj: canvas.Canvas, box: Box, fill_box: FillBox) -> None:
    height = box.height if fill_box.height is None else fill_box.height
    if box.width <= 0 or height <= 0:
        return

    stroke = bool(fill_box.stroke) and fill_box.stroke_width > 0
    fill = bool(fill_box.fill)
    if not stroke and not fill:
        return

    canvas_obj.saveState()
    try:
        if fill:
            canvas_obj.setFillColor(toColor(fill_box.fill))
        if stroke:
            canvas_obj.setStrokeColor(toColor(fill_box.stroke))
            canvas_obj.setLineWidth(fill_box.stroke_width)
        canvas_obj.rect(
            0,
            -height,
            box.width,
            height,
            stroke=1 if stroke else 0,
            fill=1 if fill else 0,
        )
    finally:
        canvas_obj.restoreState()


def _draw_image(canvas_obj: canvas.Canvas, box: Box, image: DrawImage) -> None:
    if box.is_empty:
        return
    canvas_obj.drawImage(
        ImageReader(BytesIO(image.data)),
        0,
        -box.height,
        width=box.width,
        height=box.height,
        mask="auto",
    )


def _draw_text(canvas_obj: canvas.Canvas, box: Box, text: DrawText) -> None:
    font_name = font_name_for(text.bold, text.italic)
    if box.width > 0:
        lines = list(
            wrap_text_to_width(
                text=text.text,
                font_name=font_name,
                font_size=text.font_size,
                max_width_pt=box.width,
            )
        )
    else:
        lines = text.text.splitlines()
    if not lines:
        return

    top = 0.0
    if text.valign == "middle":
        block = text_block_height(len(lines), text.font_size)
        top = max((box.height - block) / 2.0, 0.0)

    ascent = getAscent(font_name, text.font_size)
    line_gap = text.font_size * LINE_HEIGHT

    canvas_obj.saveState()
    try:
        canvas_obj.setFont(font_name, text.font_size)
        canvas_obj.setFillColor(toColor(text.color))
        for index, line in enumerate(lines):
            baseline = -(top + ascent + index * line_gap)
            if text.align == "center":
                canvas_obj.drawCentredString(box.width / 2.0, baseline, line)
            elif text.align == "right":
                canvas_obj.drawRightString(box.width, baseline, line)
            else:
                canvas_obj.drawString(0, baseline, line)
    finally:
        canvas_obj.restoreState()
