"""HTTP API for rendering labels from stored or ad-hoc layouts."""

from __future__ import annotations

import argparse
import json
import os
from io import BytesIO
from typing import Any

from dotenv import load_dotenv
from flask import Flask, jsonify, request, send_file
from werkzeug.wrappers import Response

from barcode_service import CodeEncoder
from config import LabelSettings
from label_requests import (
    MissingFieldsError,
    generate_from_template,
    preview_label,
    store_from_settings,
)
from label_types import GeneratedLabel, LabelRequest
from template_store import TemplateNotFoundError, TemplateStore, TemplateStoreError


__all__ = ["run_web_app", "create_app", "create_app_from_env"]


class BadRequest(ValueError):
    pass


def create_app(
    store: TemplateStore | None,
    settings: LabelSettings | None = None,
    encoder: CodeEncoder | None = None,
) -> Flask:
    """Create the Flask app wired to the provided template store."""
    settings = settings or LabelSettings()
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key

    def _error(message: str, status: int, **extra: Any) -> tuple[Response, int]:
        return jsonify({"error": message, **extra}), status

    def _require_store() -> TemplateStore:
        if store is None:
            raise TemplateStoreError("No template store is configured.")
        return store

    def _parse_body() -> dict[str, Any]:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise BadRequest("Request body must be a JSON object.")
        return {str(key).lower(): value for key, value in payload.items()}

    def _parse_template_id(body: dict[str, Any], required: bool) -> int | None:
        raw = body.get("templateid")
        if raw is None:
            if required:
                raise BadRequest("templateId is required.")
            return None
        if isinstance(raw, bool):
            raise BadRequest(f"Invalid templateId '{raw}'.")
        try:
            return int(raw)
        except (TypeError, ValueError) as exc:
            raise BadRequest(f"Invalid templateId '{raw}'.") from exc

    def _parse_data(body: dict[str, Any]) -> dict[str, str]:
        data = body.get("data")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise BadRequest("data must be an object of field names to values.")
        return {
            str(key): "" if value is None else str(value)
            for key, value in data.items()
        }

    def _parse_layout(body: dict[str, Any]) -> str | None:
        layout = body.get("layoutjson")
        if layout is None or isinstance(layout, str):
            return layout
        return json.dumps(layout)

    def _send_label(label: GeneratedLabel) -> Response:
        response = send_file(
            BytesIO(label.content),
            mimetype=label.mimetype,
            as_attachment=True,
            download_name=label.filename,
        )
        response.headers["X-Label-Outcome"] = label.outcome.value
        return response

    @app.route("/api/templates", methods=["GET"])
    # pyright: ignore[reportUnusedFunction]
    def templates_index() -> Response | tuple[Response, int]:
        try:
            templates = _require_store().list_templates()
        except TemplateStoreError as exc:
            return _error(str(exc), 502)
        return jsonify([template.summary() for template in templates])

    @app.route("/api/templates/<int:template_id>", methods=["GET"])
    # pyright: ignore[reportUnusedFunction]
    def templates_show(template_id: int) -> Response | tuple[Response, int]:
        try:
            template = _require_store().get(template_id)
        except TemplateNotFoundError as exc:
            return _error(str(exc), 404)
        except TemplateStoreError as exc:
            return _error(str(exc), 502)
        return jsonify(template.to_dict())

    @app.route("/api/labels/generate", methods=["POST"])
    # pyright: ignore[reportUnusedFunction]
    def labels_generate() -> Response | tuple[Response, int]:
        try:
            body = _parse_body()
            label_request = LabelRequest(
                template_id=_parse_template_id(body, required=True),
                data=_parse_data(body),
            )
            label = generate_from_template(
                _require_store(),
                label_request,
                encoder=encoder,
                settings=settings,
            )
        except BadRequest as exc:
            return _error(str(exc), 400)
        except TemplateNotFoundError as exc:
            return _error(str(exc), 404)
        except MissingFieldsError as exc:
            return _error(str(exc), 400, missingFields=exc.missing)
        except TemplateStoreError as exc:
            return _error(str(exc), 502)
        return _send_label(label)

    @app.route("/api/labels/preview", methods=["POST"])
    # pyright: ignore[reportUnusedFunction]
    def labels_preview() -> Response | tuple[Response, int]:
        try:
            body = _parse_body()
            label_request = LabelRequest(
                template_id=_parse_template_id(body, required=False),
                data=_parse_data(body),
            )
            layout_json = _parse_layout(body)
            label = preview_label(
                label_request,
                layout_json,
                store=store if layout_json is None else None,
                encoder=encoder,
                settings=settings,
            )
        except BadRequest as exc:
            return _error(str(exc), 400)
        except TemplateNotFoundError as exc:
            return _error(str(exc), 404)
        except TemplateStoreError as exc:
            return _error(str(exc), 502)
        except ValueError as exc:
            return _error(str(exc), 400)
        return _send_label(label)

    return app


def create_app_from_env() -> Flask:
    """Create the Flask app using LABEL_* environment variables."""
    load_dotenv()
    settings = LabelSettings.from_env()
    return create_app(store_from_settings(settings), settings)


def run_web_app(
    store: TemplateStore | None,
    settings: LabelSettings,
    host: str,
    port: int,
) -> None:
    """Launch the Flask development server."""
    app = create_app(store, settings)

    use_reloader_env = os.getenv("USE_RELOADER")
    use_reloader = (
        str(use_reloader_env).lower() in {"1", "true", "yes", "on"}
        if use_reloader_env is not None
        else False
    )
    app.run(host=host, port=port, debug=False, use_reloader=use_reloader)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the web API."""
    parser = argparse.ArgumentParser(
        description="Label designer rendering API"
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host/IP for the API (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=4000,
        help="Port for the API (default: 4000).",
    )

    args = parser.parse_args(argv)

    load_dotenv()
    settings = LabelSettings.from_env()
    run_web_app(
        store=store_from_settings(settings),
        settings=settings,
        host=args.host,
        port=args.port,
    )
    return 0


if __name__ == "__main__":
    main()
