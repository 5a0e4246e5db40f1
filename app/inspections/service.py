"""Application service composing and submitting inspection DTOs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from app.api.errors import ApiError
from app.core.security import sanitize_object
from app.inspections.client import InspectionsBackendError
from app.inspections.enums import Dependency
from app.inspections.mapper import compose_inspection_dto

_FRAGMENT_KEYS = (
    "mayorOffice",
    "landUse",
    "antiquity",
    "pcCancellation",
    "generalInspection",
    "workReceipt",
    "concession",
)


class InspectionsClientProtocol(Protocol):
    """Backend calls used by the inspections service."""

    def create_inspection(self, dto: dict[str, Any]) -> dict[str, Any]:
        """Create an inspection from a composed DTO."""


def dependency_fragment_key(dto: Mapping[str, Any]) -> str:
    """Return the dependency fragment key present in a DTO, or ``""``."""
    return next((key for key in _FRAGMENT_KEYS if key in dto), "")


class InspectionsService:
    """Compose DTOs from sanitized form values and hand them to the backend."""

    def __init__(
        self,
        *,
        client: InspectionsClientProtocol,
        logger: logging.Logger,
    ) -> None:
        self._client = client
        self._logger = logger

    def build_dto(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Sanitize raw form values and compose the creation DTO."""
        dto = compose_inspection_dto(sanitize_object(dict(values)))
        raw_dependency = values.get("dependency")
        self._logger.info(
            "inspection_dto_composed",
            extra={
                "dependency": str(raw_dependency or ""),
                "fragment": dependency_fragment_key(dto),
            },
        )
        if raw_dependency == Dependency.CONSTRUCTIONS and not dependency_fragment_key(dto):
            self._logger.warning(
                "constructions_fragment_omitted",
                extra={"dependency": str(raw_dependency)},
            )
        return dto

    def submit(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Compose a DTO and send it to the creation endpoint."""
        dto = self.build_dto(values)
        try:
            result = self._client.create_inspection(dto)
        except InspectionsBackendError as exc:
            raise ApiError.backend_failure(exc) from exc
        return {"dto": dto, "result": result}
