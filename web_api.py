from __future__ import annotations

import logging
from typing import Protocol

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.contracts import HealthResponse
from app.api.http_setup import register_exception_handlers, register_http_middleware
from app.core.config import AppConfig
from app.core.logging import setup_logging
from app.inspections.client import InspectionsClient
from app.inspections.router import create_inspections_router
from app.inspections.service import InspectionsClientProtocol, InspectionsService
from app.reports.router import create_reports_router
from app.reports.service import ReportsClientProtocol, ReportsService

load_dotenv()
APP_CONFIG = AppConfig.from_env()
setup_logging(APP_CONFIG.logging.level)
LOGGER = logging.getLogger(__name__)


class BackendClient(InspectionsClientProtocol, ReportsClientProtocol, Protocol):
    """Union of backend calls the API needs."""


def create_app(
    config: AppConfig | None = None,
    client: BackendClient | None = None,
) -> FastAPI:
    config = config or APP_CONFIG
    backend: BackendClient = client or InspectionsClient(config.inspections_api)

    app = FastAPI(title="Inspections DTO API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.security.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    register_http_middleware(app, config=config, logger=LOGGER)
    register_exception_handlers(app, logger=LOGGER)

    @app.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    app.include_router(
        create_inspections_router(InspectionsService(client=backend, logger=LOGGER))
    )
    app.include_router(create_reports_router(ReportsService(client=backend, logger=LOGGER)))
    return app


app = create_app()
