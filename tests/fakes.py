"""Test doubles shared by the rendering tests."""

from __future__ import annotations

import base64
from io import BytesIO

from PIL import Image


def png_bytes(size: tuple[int, int] = (4, 2), color: str = "black") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def png_data_uri(size: tuple[int, int] = (4, 2)) -> str:
    encoded = base64.b64encode(png_bytes(size)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


class RecordingEncoder:
    """Returns a tiny PNG and remembers what it was asked to encode."""

    def __init__(self) -> None:
        self.linear_calls: list[str] = []
        self.qr_calls: list[tuple[str, str]] = []

    def encode_linear(self, text: str) -> bytes:
        self.linear_calls.append(text)
        return png_bytes((30, 10))

    def encode_2d(self, text: str, error_correction: str = "Q") -> bytes:
        self.qr_calls.append((text, error_correction))
        return png_bytes((10, 10))


class FailingEncoder:
    def encode_linear(self, text: str) -> bytes:
        raise ValueError(f"cannot encode {text!r}")

    def encode_2d(self, text: str, error_correction: str = "Q") -> bytes:
        raise ValueError(f"cannot encode {text!r}")
