"""Report filter normalization for the inspections backend."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from app.core.security import validate_procedure_number
from app.inspections.dates import canonicalize_date
from app.inspections.enums import District

EXPORT_MEDIA_TYPES = {"csv": "text/csv", "pdf": "application/pdf"}

_DIGITS_RE = re.compile(r"[0-9]+")


def _inspector_id(value: Any) -> str:
    if isinstance(value, str):
        text = value.strip()
        return text if _DIGITS_RE.fullmatch(text) else ""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""
    if not math.isfinite(value) or value != int(value):
        return ""
    return str(int(value))


def _district(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    try:
        return str(District(value.strip()))
    except ValueError:
        return ""


def build_report_params(filters: Mapping[str, Any] | None) -> dict[str, str]:
    """Translate report filters into backend query parameters.

    Dates are canonicalized and dropped when invalid; unknown districts and
    non-numeric inspector ids are dropped as well.
    """
    filters = filters or {}
    candidates = {
        "startDate": canonicalize_date(filters.get("startDate")) or "",
        "endDate": canonicalize_date(filters.get("endDate")) or "",
        "status": str(filters.get("status") or "").strip(),
        "inspectorId": _inspector_id(filters.get("inspectorId")),
        "district": _district(filters.get("district")),
    }
    return {key: value for key, value in candidates.items() if value}


def report_export_path(procedure_number: str, fmt: str) -> str:
    """Return the backend path exporting one inspection as CSV or PDF."""
    normalized_fmt = (fmt or "").strip().lower()
    if normalized_fmt not in EXPORT_MEDIA_TYPES:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    number = validate_procedure_number((procedure_number or "").strip())
    if not number:
        raise ValueError("Invalid procedure number")
    return f"/reports/inspections/{number}/{normalized_fmt}"
