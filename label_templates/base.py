"""Abstract base class for element renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping

from barcode_service import BarcodeService, CodeEncoder
from label_types import Box, RenderResult
from layout_model import LayoutElement


@dataclass(frozen=True)
class RenderContext:
    """Per-call inputs shared by every renderer on a page."""

    record: Mapping[str, str] = field(default_factory=dict)
    encoder: CodeEncoder = field(default_factory=BarcodeService)
    qr_error_correction: str = "Q"


class ElementRenderer(ABC):
    """Turns one element into drawing instructions for its box.

    Renderers only describe drawing; the box is fixed by the composer and
    expected failures are returned as fallback results, not raised.
    """

    @abstractmethod
    def render(
        self,
        element: LayoutElement,
        box: Box,
        context: RenderContext,
    ) -> RenderResult:
        """Return the instructions for ``element`` inside ``box``."""
