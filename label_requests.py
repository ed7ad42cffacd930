"""Caller-facing label operations: template lookup and field validation."""

from __future__ import annotations

from barcode_service import CodeEncoder
from config import LabelSettings
from data_binding import missing_required_fields
from label_generation import generate_label
from label_types import GeneratedLabel, LabelRequest
from template_store import JsonFileTemplateStore, TemplateApiClient, TemplateStore


class MissingFieldsError(ValueError):
    """Raised before rendering when the record lacks required fields."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = list(missing)


def store_from_settings(settings: LabelSettings) -> TemplateStore | None:
    """Pick the configured template store; the API wins over a local file."""

    if settings.templates_api_url:
        return TemplateApiClient(
            base_url=settings.templates_api_url,
            timeout=settings.templates_api_timeout,
        )
    if settings.templates_file:
        return JsonFileTemplateStore(settings.templates_file)
    return None


def generate_from_template(
    store: TemplateStore,
    request: LabelRequest,
    *,
    encoder: CodeEncoder | None = None,
    settings: LabelSettings | None = None,
) -> GeneratedLabel:
    """Validate ``request`` against its template and render it."""

    if request.template_id is None:
        raise ValueError("A template id is required to generate a label.")

    template = store.get(request.template_id)
    missing = missing_required_fields(template.required_fields, request.data)
    if missing:
        raise MissingFieldsError(missing)

    return generate_label(
        request,
        template.layout_json,
        encoder=encoder,
        settings=settings,
    )


def preview_label(
    request: LabelRequest,
    layout_json: str | None = None,
    *,
    store: TemplateStore | None = None,
    encoder: CodeEncoder | None = None,
    settings: LabelSettings | None = None,
) -> GeneratedLabel:
    """Render without checking required fields.

    An explicit ``layout_json`` takes precedence over the stored template.
    """

    if layout_json is None and request.template_id is not None:
        if store is None:
            raise ValueError("No template store is configured.")
        layout_json = store.get(request.template_id).layout_json

    return generate_label(
        request,
        layout_json,
        encoder=encoder,
        settings=settings,
    )
