"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging configuration."""

    level: str


@dataclass(frozen=True)
class SecurityConfig:
    """API perimeter security settings."""

    cors_allowed_origins: list[str]
    request_max_bytes: int


@dataclass(frozen=True)
class InspectionsApiConfig:
    """Connection settings for the inspections backend."""

    base_url: str
    token: str
    timeout_seconds: int


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    logging: LoggingConfig
    security: SecurityConfig
    inspections_api: InspectionsApiConfig

    @staticmethod
    def from_env() -> "AppConfig":
        """Build app config from process environment."""
        log_level = os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"
        cors_allowed_origins = [
            origin.strip()
            for origin in os.getenv(
                "CORS_ALLOWED_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173",
            ).split(",")
            if origin.strip()
        ]
        request_max_bytes = int(os.getenv("REQUEST_MAX_BYTES", str(2 * 1024 * 1024)))
        base_url = (
            os.getenv("INSPECTIONS_API_URL", "http://localhost:3000").strip()
            or "http://localhost:3000"
        ).rstrip("/")
        token = os.getenv("INSPECTIONS_API_TOKEN", "").strip()
        timeout_seconds = int(os.getenv("INSPECTIONS_API_TIMEOUT_SECONDS", "15"))

        return AppConfig(
            logging=LoggingConfig(level=log_level),
            security=SecurityConfig(
                cors_allowed_origins=cors_allowed_origins,
                request_max_bytes=request_max_bytes,
            ),
            inspections_api=InspectionsApiConfig(
                base_url=base_url,
                token=token,
                timeout_seconds=timeout_seconds,
            ),
        )
