"""FastAPI router for report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response

from app.api.contracts import ApiErrorResponse, ReportPreviewResponse
from app.reports.service import ReportsService


class ReportsRouter:
    """Router factory wrapper for report endpoints."""

    def __init__(self, service: ReportsService) -> None:
        self._service = service

    def build(self) -> APIRouter:
        router = APIRouter(tags=["reports"])

        @router.get(
            "/api/reports/preview",
            response_model=ReportPreviewResponse,
            responses={
                422: {"model": ApiErrorResponse},
                502: {"model": ApiErrorResponse},
            },
        )
        def preview_report(
            start_date: str = Query(default="", alias="startDate"),
            end_date: str = Query(default="", alias="endDate"),
            status: str = Query(default="", alias="status"),
            inspector_id: str = Query(default="", alias="inspectorId"),
            district: str = Query(default="", alias="district"),
        ) -> ReportPreviewResponse:
            """Preview inspections matching the report filters."""
            payload = self._service.preview(
                {
                    "startDate": start_date,
                    "endDate": end_date,
                    "status": status,
                    "inspectorId": inspector_id,
                    "district": district,
                }
            )
            return ReportPreviewResponse(**payload)

        @router.get(
            "/api/reports/inspections/{procedure_number}/{fmt}",
            response_class=Response,
            responses={
                200: {"content": {"text/csv": {}, "application/pdf": {}}},
                422: {"model": ApiErrorResponse},
                502: {"model": ApiErrorResponse},
            },
        )
        def export_inspection(procedure_number: str, fmt: str) -> Response:
            """Download one inspection as CSV or PDF."""
            content, media_type, filename = self._service.export(procedure_number, fmt)
            return Response(
                content=content,
                media_type=media_type,
                headers={"Content-Disposition": f'attachment; filename="{filename}"'},
            )

        return router


def create_reports_router(service: ReportsService) -> APIRouter:
    """Create reports router using provided application service."""
    return ReportsRouter(service=service).build()
