"""Runtime settings for the label designer, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

FALLBACK_PAGE_SIZE = (300.0, 200.0)
BARCODE_RASTER_SIZE = (300, 100)
DEFAULT_CODE = "123456789"
DEFAULT_TEXT = "Sample Text"
DEFAULT_FONT_SIZE = 12.0
MIN_FONT_SIZE = 6.0
MAX_FONT_SIZE = 72.0

QR_ERROR_LEVELS = ("L", "M", "Q", "H")

# Default timeout (in seconds) for remote template store requests.
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class LabelSettings:
    qr_error_correction: str = "Q"
    currency_symbol: str = "$"
    templates_file: str | None = None
    templates_api_url: str | None = None
    templates_api_timeout: int = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    secret_key: str = "label-designer-ui"

    def __post_init__(self) -> None:
        level = (self.qr_error_correction or "").strip().upper()
        if level not in QR_ERROR_LEVELS:
            level = "Q"
        object.__setattr__(self, "qr_error_correction", level)

    @classmethod
    def from_env(cls) -> "LabelSettings":
        """Build settings from ``LABEL_*`` environment variables."""

        timeout_raw = os.getenv("LABEL_TEMPLATES_API_TIMEOUT", "")
        try:
            timeout = int(timeout_raw) if timeout_raw.strip() else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise RuntimeError(
                f"Invalid LABEL_TEMPLATES_API_TIMEOUT '{timeout_raw}': {exc}"
            ) from exc

        return cls(
            qr_error_correction=os.getenv("LABEL_QR_ERROR_CORRECTION", "Q"),
            currency_symbol=os.getenv("LABEL_CURRENCY_SYMBOL", "$"),
            templates_file=os.getenv("LABEL_TEMPLATES_FILE") or None,
            templates_api_url=os.getenv("LABEL_TEMPLATES_API_URL") or None,
            templates_api_timeout=timeout,
            log_level=os.getenv("LABEL_LOG_LEVEL", "INFO").upper(),
            secret_key=os.getenv("FLASK_SECRET_KEY", "label-designer-ui"),
        )
