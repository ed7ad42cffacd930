"""Layout documents describing where label elements are placed."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Mapping


class LayoutParseError(ValueError):
    """Raised when a layout document is not valid JSON or not an object."""


class ElementType(StrEnum):
    TEXT = "text"
    BARCODE = "barcode"
    QRCODE = "qrcode"
    IMAGE = "image"
    DYNAMIC_IMAGE = "dynamic-image"
    RECTANGLE = "rectangle"
    LINE = "line"
    UNKNOWN = "unknown"


# Tags emitted by the designer front end that share a renderer.
_TYPE_ALIASES: dict[str, ElementType] = {
    "dynamic-text": ElementType.TEXT,
    "product-code": ElementType.TEXT,
    "logo": ElementType.IMAGE,
}


def element_type_for(tag: str) -> ElementType:
    """Map a raw ``type`` tag onto the closed set of element types."""

    key = (tag or "").strip().lower()
    if key in _TYPE_ALIASES:
        return _TYPE_ALIASES[key]
    if key in ElementType._value2member_map_ and key != ElementType.UNKNOWN:
        return ElementType(key)
    return ElementType.UNKNOWN


@dataclass(frozen=True)
class LayoutElement:
    """One positioned drawable unit.

    ``type_name`` keeps the tag exactly as authored so unknown tags can be
    reported and the layout serialized back unchanged.
    """

    id: str
    type_name: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    z_index: int = 0
    properties: Mapping[str, Any] = field(default_factory=dict)
    style: Mapping[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> ElementType:
        return element_type_for(self.type_name)


@dataclass(frozen=True)
class TemplateLayout:
    width: float = 0.0
    height: float = 0.0
    background_color: str = "#FFFFFF"
    elements: tuple[LayoutElement, ...] = ()
    settings: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.elements


def parse_layout(text: str | None) -> TemplateLayout | None:
    """Parse a layout document, returning ``None`` when it carries no layout.

    Field names are matched case-insensitively and unknown fields are ignored.
    ``None``, blank text and ``"{}"`` all mean "no custom layout". Malformed
    JSON raises :class:`LayoutParseError`.
    """

    if text is None or not text.strip():
        return None

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LayoutParseError(f"Layout is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise LayoutParseError("Layout is nested too deeply.") from exc

    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise LayoutParseError(
            f"Layout must be a JSON object, got {type(payload).__name__}."
        )
    if not payload:
        return None
    return layout_from_dict(payload)


def layout_from_dict(payload: Mapping[str, Any]) -> TemplateLayout:
    fields = _casefold_keys(payload)

    elements: list[LayoutElement] = []
    raw_elements = fields.get("elements")
    if isinstance(raw_elements, list):
        for index, raw in enumerate(raw_elements):
            if isinstance(raw, dict):
                elements.append(_element_from_dict(raw, index))

    background = fields.get("backgroundcolor")
    settings = fields.get("settings")
    return TemplateLayout(
        width=_as_float(fields.get("width")),
        height=_as_float(fields.get("height")),
        background_color=(
            background.strip()
            if isinstance(background, str) and background.strip()
            else "#FFFFFF"
        ),
        elements=tuple(elements),
        settings=dict(settings) if isinstance(settings, dict) else {},
    )


def _element_from_dict(raw: Mapping[str, Any], index: int) -> LayoutElement:
    fields = _casefold_keys(raw)

    element_id = fields.get("id")
    if element_id is None or not str(element_id).strip():
        element_id = f"element-{index}"

    properties = fields.get("properties")
    style = fields.get("style")
    type_tag = fields.get("type")
    return LayoutElement(
        id=str(element_id),
        type_name=str(type_tag) if type_tag is not None else "",
        x=_as_float(fields.get("x")),
        y=_as_float(fields.get("y")),
        width=max(_as_float(fields.get("width")), 0.0),
        height=max(_as_float(fields.get("height")), 0.0),
        z_index=_as_int(fields.get("zindex")),
        properties=dict(properties) if isinstance(properties, dict) else {},
        style=dict(style) if isinstance(style, dict) else {},
    )


def layout_to_dict(layout: TemplateLayout) -> dict[str, Any]:
    return {
        "width": layout.width,
        "height": layout.height,
        "backgroundColor": layout.background_color,
        "elements": [
            {
                "id": element.id,
                "type": element.type_name,
                "x": element.x,
                "y": element.y,
                "width": element.width,
                "height": element.height,
                "zIndex": element.z_index,
                "properties": dict(element.properties),
                "style": dict(element.style),
            }
            for element in layout.elements
        ],
        "settings": dict(layout.settings),
    }


def layout_to_json(layout: TemplateLayout) -> str:
    return json.dumps(layout_to_dict(layout))


def _casefold_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    # First spelling wins when a document repeats a key in another case.
    folded: dict[str, Any] = {}
    for key, value in payload.items():
        folded.setdefault(str(key).lower(), value)
    return folded


def _as_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def _as_int(value: Any, default: int = 0) -> int:
    number = _as_float(value, float(default))
    return int(number)
