"""Shared helpers for element renderers and the PDF output stage."""

from __future__ import annotations

from typing import Iterable, List

from reportlab.pdfbase.pdfmetrics import stringWidth

from label_types import DrawText, FillBox, RenderResult

_FONT_NAMES = {
    (False, False): "Helvetica",
    (True, False): "Helvetica-Bold",
    (False, True): "Helvetica-Oblique",
    (True, True): "Helvetica-BoldOblique",
}

LINE_HEIGHT = 1.2


def font_name_for(bold: bool, italic: bool) -> str:
    """Return the built-in PDF font matching the requested weight and slant."""

    return _FONT_NAMES[(bool(bold), bool(italic))]


def wrap_text_to_width(
    text: str,
    font_name: str,
    font_size: float,
    max_width_pt: float,
) -> Iterable[str]:
    """Wrap text into lines that fit within the specified width.

    Explicit line breaks in ``text`` always start a new line.
    """

    if not text or max_width_pt <= 0:
        return []

    lines: List[str] = []
    for paragraph in text.splitlines():
        lines.extend(
            _wrap_paragraph(paragraph, font_name, font_size, max_width_pt)
        )
    return lines


def _wrap_paragraph(
    text: str,
    font_name: str,
    font_size: float,
    max_width_pt: float,
) -> List[str]:
    words = text.split()
    if not words:
        return [""]

    lines: List[str] = []
    current: List[str] = []
    for word in words:
        tentative = " ".join(current + [word]) if current else word
        if stringWidth(tentative, font_name, font_size) <= max_width_pt:
            current.append(word)
            continue

        if current:
            lines.append(" ".join(current))
            current = [word]
            if stringWidth(word, font_name, font_size) <= max_width_pt:
                continue
            current = []

        # single word exceeds width; perform character-level wrap
        partial = ""
        for ch in word:
            candidate = partial + ch
            if stringWidth(candidate, font_name, font_size) > max_width_pt:
                if partial:
                    lines.append(partial)
                partial = ch
            else:
                partial = candidate
        if partial:
            current = [partial]

    if current:
        lines.append(" ".join(current))
    return lines


def text_block_height(line_count: int, font_size: float) -> float:
    if line_count <= 0:
        return 0.0
    return line_count * font_size * LINE_HEIGHT


def placeholder(
    caption: str,
    background: str,
    reason: str,
    font_size: float = 10.0,
) -> RenderResult:
    """Tinted box with a centred caption, used when an element cannot draw."""

    return RenderResult.fallback(
        reason,
        FillBox(fill=background),
        DrawText(
            caption,
            font_size=font_size,
            align="center",
            valign="middle",
        ),
    )
