"""FastAPI router for inspection DTO endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.contracts import (
    ApiErrorResponse,
    InspectionDtoResponse,
    InspectionFormRequest,
    InspectionSubmitResponse,
)
from app.inspections.service import InspectionsService


class InspectionsRouter:
    """Router factory wrapper for inspection endpoints."""

    def __init__(self, service: InspectionsService) -> None:
        self._service = service

    def build(self) -> APIRouter:
        """Create configured API router."""
        router = APIRouter(tags=["inspections"])

        @router.post(
            "/api/inspections/dto",
            response_model=InspectionDtoResponse,
            responses={422: {"model": ApiErrorResponse}},
        )
        def compose_dto(req: InspectionFormRequest) -> InspectionDtoResponse:
            """Compose the creation DTO without sending it."""
            return InspectionDtoResponse(dto=self._service.build_dto(req.form_values()))

        @router.post(
            "/api/inspections",
            response_model=InspectionSubmitResponse,
            responses={
                422: {"model": ApiErrorResponse},
                502: {"model": ApiErrorResponse},
            },
        )
        def create_inspection(req: InspectionFormRequest) -> InspectionSubmitResponse:
            """Compose the creation DTO and submit it to the backend."""
            payload = self._service.submit(req.form_values())
            return InspectionSubmitResponse(**payload)

        return router


def create_inspections_router(service: InspectionsService) -> APIRouter:
    """Create inspections router using provided application service."""
    return InspectionsRouter(service=service).build()
