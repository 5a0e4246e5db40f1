from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from app.core.config import AppConfig
from app.inspections.client import InspectionsBackendError, InspectionsClient
from app.inspections.mapper import compose_inspection_dto


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compose an inspection creation DTO from raw form values."
    )
    parser.add_argument(
        "--json",
        required=True,
        help="Raw form values. Either a file path or a raw JSON string.",
    )
    parser.add_argument(
        "--submit",
        action="store_true",
        help="Send the composed DTO to INSPECTIONS_API_URL instead of only printing it.",
    )
    return parser


def load_form_values(source: str) -> dict[str, Any]:
    """Load form values from a JSON file path or inline JSON string."""
    raw = source
    if not source.lstrip().startswith(("{", "[")):
        candidate = Path(source)
        if not candidate.is_file():
            raise SystemExit(f"Input file not found: {source}")
        raw = candidate.read_text(encoding="utf-8")
    try:
        values = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON input: {exc}") from exc
    if not isinstance(values, dict):
        raise SystemExit("Form values must be a JSON object.")
    return values


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    setup_logging()
    logger = logging.getLogger("main")
    args = build_parser().parse_args(argv)

    dto = compose_inspection_dto(load_form_values(args.json))
    summary: dict[str, Any] = {"dto": dto}

    if args.submit:
        client = InspectionsClient(AppConfig.from_env().inspections_api)
        try:
            summary["result"] = client.create_inspection(dto)
        except InspectionsBackendError as exc:
            raise SystemExit(f"Inspection submission failed: {exc}") from exc
        logger.info("Inspection submitted.")

    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
