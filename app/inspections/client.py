"""HTTP client for the external inspections backend."""

from __future__ import annotations

import logging
from typing import Any

import requests

from app.core.config import InspectionsApiConfig
from app.reports.filters import report_export_path

LOGGER = logging.getLogger(__name__)


class InspectionsBackendError(RuntimeError):
    """Raised when the inspections backend cannot be reached or rejects a call."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InspectionsClient:
    """Thin JSON client over ``requests`` for inspection endpoints."""

    def __init__(
        self,
        config: InspectionsApiConfig,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    def _send(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> requests.Response:
        url = f"{self._config.base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                json=json_body,
                params=params,
                headers=self._headers(),
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as exc:
            LOGGER.exception("Inspections backend unreachable: %s %s", method, path)
            raise InspectionsBackendError(f"Inspections backend unreachable: {exc}") from exc

        if not response.ok:
            message = f"Error {response.status_code}"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
            LOGGER.warning(
                "Inspections backend rejected %s %s: %s",
                method,
                path,
                message,
                extra={"status_code": response.status_code},
            )
            raise InspectionsBackendError(message, status_code=response.status_code)
        return response

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        response = self._send(method, path, json_body=json_body, params=params)
        if response.status_code == 204 or not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError:
            return {}
        if isinstance(payload, dict):
            return payload
        return {"data": payload}

    def create_inspection(self, dto: dict[str, Any]) -> dict[str, Any]:
        """Send a composed DTO to the creation endpoint."""
        return self._request("POST", "/inspections", json_body=dto)

    def preview_report(self, params: dict[str, str]) -> dict[str, Any]:
        """Fetch the filtered inspections report preview."""
        return self._request("GET", "/reports/inspections/preview", params=params)

    def export_inspection(self, procedure_number: str, fmt: str) -> bytes:
        """Download one inspection rendered as CSV or PDF."""
        return self._send("GET", report_export_path(procedure_number, fmt)).content
