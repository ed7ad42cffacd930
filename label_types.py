from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping, Union

from layout_model import ElementType


@dataclass(frozen=True)
class LabelRequest:
    """Data record and template reference for one generation call."""

    template_id: int | None = None
    data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # The record is read-only for the whole rendering pass.
        object.__setattr__(
            self,
            "data",
            MappingProxyType({str(k): str(v) for k, v in (self.data or {}).items()}),
        )


@dataclass(frozen=True)
class Box:
    """Element box in page units, top-left origin, ``y`` growing downward."""

    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", max(self.width, 0.0))
        object.__setattr__(self, "height", max(self.height, 0.0))

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class DrawText:
    text: str
    font_size: float = 12.0
    color: str = "#000000"
    bold: bool = False
    italic: bool = False
    align: str = "left"
    valign: str = "top"


@dataclass(frozen=True)
class DrawImage:
    """Raster image scaled to fill the element box."""

    data: bytes


@dataclass(frozen=True)
class FillBox:
    """Solid box with an optional border.

    ``height`` overrides the element height, measured from the box top.
    """

    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 0.0
    height: float | None = None


DrawInstruction = Union[DrawText, DrawImage, FillBox]


@dataclass(frozen=True)
class RenderResult:
    """Immutable drawing instructions produced for one element."""

    instructions: tuple[DrawInstruction, ...]
    degraded: bool = False
    reason: str = ""

    @classmethod
    def drawn(cls, *instructions: DrawInstruction) -> "RenderResult":
        return cls(instructions=tuple(instructions))

    @classmethod
    def fallback(cls, reason: str, *instructions: DrawInstruction) -> "RenderResult":
        return cls(instructions=tuple(instructions), degraded=True, reason=reason)


@dataclass(frozen=True)
class PlacedElement:
    element_id: str
    kind: ElementType
    box: Box
    result: RenderResult


@dataclass(frozen=True)
class ComposedPage:
    width: float
    height: float
    background: str | None
    items: tuple[PlacedElement, ...]


class LabelOutcome(StrEnum):
    CUSTOM = "custom"
    DEFAULT = "default"
    ERROR = "error"


@dataclass(frozen=True)
class GeneratedLabel:
    content: bytes
    filename: str
    outcome: LabelOutcome
    mimetype: str = "application/pdf"
