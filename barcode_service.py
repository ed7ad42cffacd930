"""Barcode and QR encoders producing PNG rasters."""

from __future__ import annotations

from io import BytesIO
from typing import Protocol

import qrcode
from barcode import Code128
from barcode.writer import ImageWriter
from PIL import Image
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)

from config import BARCODE_RASTER_SIZE

_QR_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

# Writer options in millimetres; the result is resampled to BARCODE_RASTER_SIZE.
_BARCODE_OPTIONS = {
    "module_width": 0.2,
    "module_height": 10.0,
    "quiet_zone": 1.0,
    "write_text": False,
    "dpi": 300,
}


class CodeEncoder(Protocol):
    def encode_linear(self, text: str) -> bytes:
        """Return PNG bytes of a CODE_128 barcode for ``text``."""

    def encode_2d(self, text: str, error_correction: str = "Q") -> bytes:
        """Return PNG bytes of a QR code for ``text``."""


class BarcodeService:
    """Default encoder backed by python-barcode and qrcode."""

    def __init__(
        self,
        raster_size: tuple[int, int] = BARCODE_RASTER_SIZE,
        qr_box_size: int = 10,
        qr_border: int = 2,
    ) -> None:
        self.raster_size = raster_size
        self.qr_box_size = qr_box_size
        self.qr_border = qr_border

    def encode_linear(self, text: str) -> bytes:
        if not text:
            raise ValueError("Cannot encode an empty barcode payload.")

        raw = BytesIO()
        Code128(text, writer=ImageWriter()).write(raw, options=_BARCODE_OPTIONS)
        raw.seek(0)

        with Image.open(raw) as img:
            resized = img.convert("RGB").resize(self.raster_size, Image.NEAREST)
        output = BytesIO()
        resized.save(output, format="PNG")
        return output.getvalue()

    def encode_2d(self, text: str, error_correction: str = "Q") -> bytes:
        level = _QR_LEVELS.get((error_correction or "").upper())
        if level is None:
            raise ValueError(f"Unknown QR error correction level '{error_correction}'.")

        qr = qrcode.QRCode(
            error_correction=level,
            box_size=self.qr_box_size,
            border=self.qr_border,
        )
        qr.add_data(text)
        qr.make(fit=True)
        qr_img = qr.make_image()

        buffer = BytesIO()
        qr_img.save(buffer, kind="PNG")
        return buffer.getvalue()
