"""Read-only access to stored label templates."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Any, Mapping, Protocol

import httpx

from config import DEFAULT_TIMEOUT


class TemplateNotFoundError(LookupError):
    """Raised when no template exists for the requested id."""

    def __init__(self, template_id: int) -> None:
        super().__init__(f"Template {template_id} not found")
        self.template_id = template_id


class TemplateStoreError(RuntimeError):
    """Raised when the backing store cannot be read."""


@dataclass(frozen=True)
class TemplateRecord:
    template_id: int
    name: str
    layout_json: str = ""
    required_fields: list[str] = field(default_factory=list)
    description: str = ""
    width: float = 300.0
    height: float = 200.0
    category: str = "Product"
    is_public: bool = True
    is_active: bool = True

    def summary(self) -> dict[str, Any]:
        return {
            "templateId": self.template_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "width": self.width,
            "height": self.height,
            "requiredFields": list(self.required_fields),
            "isPublic": self.is_public,
            "isActive": self.is_active,
        }

    def to_dict(self) -> dict[str, Any]:
        return {**self.summary(), "layoutJson": self.layout_json}


class TemplateStore(Protocol):
    def get(self, template_id: int) -> TemplateRecord:
        """Return the template or raise :class:`TemplateNotFoundError`."""

    def list_templates(self) -> list[TemplateRecord]:
        """Return every stored template."""


def parse_required_fields(value: Any) -> list[str]:
    """Accept a list, a JSON array string, or comma separated names."""

    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError:
                value = text.strip("[]").split(",")
        else:
            value = text.split(",")
    if not isinstance(value, list):
        return []

    names: list[str] = []
    for item in value:
        name = str(item).strip().strip('"') if item is not None else ""
        if name and name not in names:
            names.append(name)
    return names


def template_from_dict(payload: Mapping[str, Any]) -> TemplateRecord:
    fields = {str(key).lower(): value for key, value in payload.items()}

    raw_id = fields.get("templateid", fields.get("id"))
    try:
        template_id = int(raw_id)
    except (TypeError, ValueError) as exc:
        raise TemplateStoreError(f"Template has no usable id: {raw_id!r}") from exc

    layout = fields.get("layoutjson", fields.get("templatejson"))
    if isinstance(layout, (dict, list)):
        layout = json.dumps(layout)

    return TemplateRecord(
        template_id=template_id,
        name=str(fields.get("name") or ""),
        layout_json=str(layout or ""),
        required_fields=parse_required_fields(fields.get("requiredfields")),
        description=str(fields.get("description") or ""),
        width=_as_float(fields.get("width"), 300.0),
        height=_as_float(fields.get("height"), 200.0),
        category=str(fields.get("category") or "Product"),
        is_public=bool(fields.get("ispublic", True)),
        is_active=bool(fields.get("isactive", True)),
    )


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class JsonFileTemplateStore:
    """Templates kept in a JSON file: a list, or ``{"templates": [...]}``."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get(self, template_id: int) -> TemplateRecord:
        for template in self.list_templates():
            if template.template_id == template_id:
                return template
        raise TemplateNotFoundError(template_id)

    def list_templates(self) -> list[TemplateRecord]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise TemplateStoreError(f"Template file '{self.path}' is missing.") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise TemplateStoreError(
                f"Template file '{self.path}' could not be read: {exc}"
            ) from exc

        if isinstance(payload, dict):
            payload = payload.get("templates", [])
        if not isinstance(payload, list):
            raise TemplateStoreError(
                f"Template file '{self.path}' must hold a list of templates."
            )
        return [template_from_dict(item) for item in payload if isinstance(item, dict)]


@dataclass
class TemplateApiClient:
    """Fetch templates from a remote label designer API."""

    base_url: str
    timeout: int = DEFAULT_TIMEOUT
    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        base_clean = (self.base_url or "").rstrip("/")
        if not base_clean:
            raise RuntimeError("Template API base URL is required.")
        self.base_url = base_clean
        self._client = httpx.Client(
            base_url=f"{base_clean}/api",
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport,
        )

    def get(self, template_id: int) -> TemplateRecord:
        response = self._request(f"/templates/{template_id}")
        if response.status_code == HTTPStatus.NOT_FOUND:
            raise TemplateNotFoundError(template_id)
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise TemplateStoreError(
                f"Unexpected template payload for {template_id}."
            )
        return template_from_dict(payload)

    def list_templates(self) -> list[TemplateRecord]:
        payload = self._json(self._request("/templates"))
        if not isinstance(payload, list):
            raise TemplateStoreError("Unexpected template list payload.")
        return [template_from_dict(item) for item in payload if isinstance(item, dict)]

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> TemplateApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, path: str) -> httpx.Response:
        try:
            return self._client.get(path)
        except httpx.HTTPError as exc:
            raise TemplateStoreError(f"Template API request failed: {exc}") from exc

    def _json(self, response: httpx.Response) -> Any:
        if response.status_code != HTTPStatus.OK:
            content = response.content.decode("utf-8", errors="replace")
            raise TemplateStoreError(
                f"Template API returned {response.status_code}: {content}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TemplateStoreError(f"Template API returned invalid JSON: {exc}") from exc
