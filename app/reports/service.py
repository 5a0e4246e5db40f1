"""Report previews and per-inspection exports from the inspections backend."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from app.api.errors import ApiError, ApiErrorCode
from app.inspections.client import InspectionsBackendError
from app.reports.filters import EXPORT_MEDIA_TYPES, build_report_params, report_export_path


class ReportsClientProtocol(Protocol):
    """Backend calls used by the reports service."""

    def preview_report(self, params: dict[str, str]) -> dict[str, Any]:
        """Return report preview for query parameters."""

    def export_inspection(self, procedure_number: str, fmt: str) -> bytes:
        """Return one inspection rendered as CSV or PDF."""


class ReportsService:
    """Normalize report filters and fetch previews and exports."""

    def __init__(self, *, client: ReportsClientProtocol, logger: logging.Logger) -> None:
        self._client = client
        self._logger = logger

    def preview(self, filters: Mapping[str, Any]) -> dict[str, Any]:
        params = build_report_params(filters)
        start, end = params.get("startDate"), params.get("endDate")
        if start and end and start > end:
            raise ApiError(
                ApiErrorCode.INVALID_REPORT_FILTERS,
                f"startDate {start} is after endDate {end}",
            )
        try:
            preview = self._client.preview_report(params)
        except InspectionsBackendError as exc:
            raise ApiError.backend_failure(exc) from exc
        self._logger.info("report_preview_fetched", extra={"filters": sorted(params)})
        return {"params": params, "preview": preview}

    def export(self, procedure_number: str, fmt: str) -> tuple[bytes, str, str]:
        """Return ``(content, media_type, filename)`` for one exported inspection."""
        try:
            report_export_path(procedure_number, fmt)
        except ValueError as exc:
            raise ApiError(ApiErrorCode.INVALID_EXPORT_REQUEST, str(exc)) from exc

        number, normalized_fmt = procedure_number.strip(), fmt.strip().lower()
        try:
            content = self._client.export_inspection(number, normalized_fmt)
        except InspectionsBackendError as exc:
            raise ApiError.backend_failure(exc) from exc
        self._logger.info(
            "inspection_exported",
            extra={"procedure_number": number, "export_format": normalized_fmt},
        )
        return content, EXPORT_MEDIA_TYPES[normalized_fmt], f"inspeccion-{number}.{normalized_fmt}"
