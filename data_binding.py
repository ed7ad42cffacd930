"""Resolve what an element displays from its properties and the data record."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from reportlab.lib.colors import Color, toColor

from config import (
    DEFAULT_CODE,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
)
from layout_model import LayoutElement

DATA_FIELD_KEY = "dataField"


@dataclass(frozen=True)
class TextStyle:
    font_size: float
    color: str
    bold: bool
    italic: bool
    align: str


@dataclass(frozen=True)
class BoxStyle:
    fill: str
    border_color: str
    border_width: float


@dataclass(frozen=True)
class LineStyle:
    color: str
    width: float


def property_text(properties: Mapping[str, Any], key: str) -> str | None:
    """Return the property as text, or ``None`` when absent or null."""

    value = properties.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def bound_value(
    properties: Mapping[str, Any],
    record: Mapping[str, str],
    key: str = DATA_FIELD_KEY,
) -> str | None:
    """Look up the record field named by the ``key`` property."""

    field_name = property_text(properties, key)
    if field_name is None:
        return None
    return record.get(field_name)


def resolve_text(properties: Mapping[str, Any], record: Mapping[str, str]) -> str:
    """Bound field, then ``content``, then ``text``, then the sample text."""

    value = bound_value(properties, record)
    if value is not None:
        return value
    for key in ("content", "text"):
        literal = property_text(properties, key)
        if literal is not None:
            return literal
    return DEFAULT_TEXT


def resolve_code_payload(element: LayoutElement, record: Mapping[str, str]) -> str:
    """Payload for barcode and QR elements; empty values count as absent."""

    value = bound_value(element.properties, record)
    if value:
        return value
    literal = property_text(element.properties, "data")
    if literal:
        return literal
    return DEFAULT_CODE


def resolve_image_payload(
    element: LayoutElement,
    record: Mapping[str, str],
    *,
    by_element_id: bool = False,
) -> str | None:
    """Return the encoded image text for an image element, if any.

    Dynamic images look up the record by their own id first so a single
    request can carry a distinct picture per placeholder.
    """

    candidates: list[str | None] = []
    if by_element_id:
        candidates.append(record.get(element.id))
    candidates.append(bound_value(element.properties, record))
    if by_element_id:
        candidates.append(property_text(element.properties, "data"))
    candidates.append(property_text(element.properties, "imageData"))
    candidates.append(property_text(element.properties, "src"))

    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate
    return None


def parse_number(value: Any) -> float | None:
    """Permissively parse text or numbers; ``None`` when unparsable."""

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def number_property(
    properties: Mapping[str, Any],
    keys: Iterable[str],
    default: float,
) -> float:
    """First parsable value among ``keys``, else ``default``."""

    for key in keys:
        number = parse_number(properties.get(key))
        if number is not None:
            return number
    return default


def font_size(properties: Mapping[str, Any]) -> float:
    size = number_property(properties, ("fontSize",), DEFAULT_FONT_SIZE)
    return min(max(size, MIN_FONT_SIZE), MAX_FONT_SIZE)


def color_property(
    properties: Mapping[str, Any],
    keys: Iterable[str],
    default: str,
) -> str:
    """First present color among ``keys``; unusable colors fall back."""

    for key in keys:
        value = property_text(properties, key)
        if value is None or not value.strip():
            continue
        value = value.strip()
        return value if is_usable_color(value) else default
    return default


def is_usable_color(value: str) -> bool:
    """True when reportlab reads ``value`` as a finite colour."""

    try:
        parsed = toColor(value)
    except (ValueError, TypeError, AssertionError):
        return False
    if not isinstance(parsed, Color):
        return False
    return all(math.isfinite(part) for part in parsed.rgba())


def _flag(properties: Mapping[str, Any], key: str, expected: str) -> bool:
    value = property_text(properties, key)
    return value is not None and value.strip().lower() == expected


def text_style(properties: Mapping[str, Any]) -> TextStyle:
    align = (
        property_text(properties, "alignment")
        or property_text(properties, "textAlign")
        or "left"
    ).strip().lower()
    if align not in {"left", "center", "right"}:
        align = "left"
    return TextStyle(
        font_size=font_size(properties),
        color=color_property(properties, ("color",), "#000000"),
        bold=_flag(properties, "fontWeight", "bold"),
        italic=_flag(properties, "fontStyle", "italic"),
        align=align,
    )


def box_style(properties: Mapping[str, Any]) -> BoxStyle:
    return BoxStyle(
        fill=color_property(properties, ("fillColor", "fill"), "#CCCCCC"),
        border_color=color_property(properties, ("borderColor", "stroke"), "#000000"),
        border_width=number_property(properties, ("borderWidth", "strokeWidth"), 1.0),
    )


def line_style(properties: Mapping[str, Any]) -> LineStyle:
    return LineStyle(
        color=color_property(properties, ("color", "stroke"), "#000000"),
        width=number_property(properties, ("width", "strokeWidth", "borderWidth"), 1.0),
    )


def rotation(properties: Mapping[str, Any]) -> float:
    return number_property(properties, ("rotation",), 0.0)


def missing_required_fields(
    required_fields: Iterable[str],
    record: Mapping[str, str],
) -> list[str]:
    """Required names absent from the record, in declaration order."""

    missing: list[str] = []
    for name in required_fields:
        if name not in record and name not in missing:
            missing.append(name)
    return missing
