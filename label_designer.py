#!/usr/bin/env python3
"""Render a single label PDF from a layout file or a stored template."""

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

from dotenv import load_dotenv

from config import LabelSettings
from label_requests import (
    MissingFieldsError,
    generate_from_template,
    preview_label,
    store_from_settings,
)
from label_types import GeneratedLabel, LabelRequest
from template_store import (
    JsonFileTemplateStore,
    TemplateApiClient,
    TemplateNotFoundError,
    TemplateStore,
    TemplateStoreError,
)


def _parse_data_pairs(pairs: Sequence[str]) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise SystemExit(
                f"Invalid --data '{pair}'. Expected format NAME=VALUE."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise SystemExit("Data field name cannot be empty.")
        parsed[key] = value
    return parsed


def _read_layout(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"Cannot read layout file '{path}': {exc}") from exc


def _select_store(
    args: argparse.Namespace,
    settings: LabelSettings,
) -> Optional[TemplateStore]:
    if args.templates_url:
        return TemplateApiClient(
            base_url=args.templates_url,
            timeout=settings.templates_api_timeout,
        )
    if args.templates:
        return JsonFileTemplateStore(args.templates)
    return store_from_settings(settings)


def build_label(
    args: argparse.Namespace,
    settings: LabelSettings,
) -> GeneratedLabel:
    """Resolve the layout source named on the command line and render it."""

    data = _parse_data_pairs(args.data)
    label_request = LabelRequest(template_id=args.template_id, data=data)

    if args.layout:
        return preview_label(
            label_request,
            _read_layout(args.layout),
            settings=settings,
        )

    if args.template_id is None:
        # No layout at all renders the built-in default label.
        return preview_label(label_request, None, settings=settings)

    store = _select_store(args, settings)
    if store is None:
        raise SystemExit(
            "--template-id needs --templates, --templates-url, "
            "LABEL_TEMPLATES_FILE or LABEL_TEMPLATES_API_URL."
        )

    try:
        if args.preview:
            return preview_label(label_request, store=store, settings=settings)
        return generate_from_template(store, label_request, settings=settings)
    except TemplateNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    except MissingFieldsError as exc:
        raise SystemExit(str(exc)) from exc
    except TemplateStoreError as exc:
        raise SystemExit(f"Template store error: {exc}") from exc
    finally:
        if isinstance(store, TemplateApiClient):
            store.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for rendering a label PDF."""

    parser = argparse.ArgumentParser(
        description="JSON layout + data record -> printable label PDF"
    )
    parser.add_argument("-o", "--output")
    parser.add_argument(
        "-l", "--layout",
        help="Path to a layout JSON document to render directly.",
    )
    parser.add_argument(
        "-t", "--template-id",
        type=int,
        help="Id of a stored template to render.",
    )
    parser.add_argument(
        "--templates",
        help="JSON file holding stored templates (defaults to LABEL_TEMPLATES_FILE).",
    )
    parser.add_argument(
        "--templates-url",
        help="Base URL of a template API (defaults to LABEL_TEMPLATES_API_URL).",
    )
    parser.add_argument(
        "-d", "--data",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help=(
            "Data field for the label (repeatable). For example: "
            "--data ProductName=Shampoo --data Price=199"
        ),
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Skip the template's required-field check.",
    )
    parser.add_argument(
        "--web",
        action="store_true",
        help="Start the HTTP API instead of rendering a single label.",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host/IP for the HTTP API (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=4000,
        help="Port for the HTTP API (default: 4000).",
    )

    args = parser.parse_args(argv)

    load_dotenv()
    settings = LabelSettings.from_env()
    log_level = logging.getLevelName(settings.log_level)
    logging.basicConfig(
        level=log_level if isinstance(log_level, int) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.web:
        from label_designer_web import run_web_app

        run_web_app(
            store=_select_store(args, settings),
            settings=settings,
            host=args.web_host,
            port=args.web_port,
        )
        return 0

    label = build_label(args, settings)
    output_path = args.output or label.filename
    with open(output_path, "wb") as handle:
        handle.write(label.content)

    print(f"Wrote {output_path} ({label.outcome.value} layout)")
    return 0


if __name__ == "__main__":
    main()
