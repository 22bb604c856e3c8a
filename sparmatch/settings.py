"""Centralized configuration management for the Sparmatch backend."""

from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Populate ``os.environ`` from a local .env before the settings singleton is
# built so scripts importing this module see the same values as the API.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
SQLITE_ASYNC_PREFIX = "sqlite+aiosqlite://"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_RECOMMENDATION_RADIUS_KM = 50.0
DEFAULT_NEARBY_RADIUS_KM = 50.0
DEFAULT_LOCATION_TIMEOUT_SECONDS = 5.0


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Discovery keeps working without a database: an unset ``DATABASE_URL``
    means the event store is "not configured", which the discovery facade
    answers with the sample catalog while ``discovery_sample_fallback`` is on.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "SQLAlchemy database URL. Sync PostgreSQL URLs (postgres:// or"
            " postgresql://) are coerced into the async psycopg driver string."
        ),
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    discovery_sample_fallback: bool = Field(
        default=True,
        alias="DISCOVERY_SAMPLE_FALLBACK",
        description=(
            "Serve the built-in sample catalog when the event store is"
            " unreachable or not configured."
        ),
    )
    recommendation_radius_km: float = Field(
        default=DEFAULT_RECOMMENDATION_RADIUS_KM,
        alias="RECOMMENDATION_RADIUS_KM",
        ge=0,
        description="Distance ceiling applied to profile-based recommendations.",
    )
    nearby_default_radius_km: float = Field(
        default=DEFAULT_NEARBY_RADIUS_KM,
        alias="NEARBY_DEFAULT_RADIUS_KM",
        ge=0,
        description="Distance ceiling used by the nearby endpoint when none is given.",
    )
    location_timeout_seconds: float = Field(
        default=DEFAULT_LOCATION_TIMEOUT_SECONDS,
        alias="LOCATION_TIMEOUT_SECONDS",
        gt=0,
        description="Upper bound on searcher location resolution before it counts as unknown.",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )
    slow_query_threshold: float = Field(
        default=0.1,
        alias="SLOW_QUERY_THRESHOLD",
        description="Seconds after which a SQL statement is logged as slow.",
    )

    @property
    def resolved_database_url(self) -> str | None:
        """Return the async-compatible database URL, or ``None`` when unset."""

        if not self.database_url or not self.database_url.strip():
            return None

        url = self.database_url.strip()

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith((POSTGRES_ASYNC_PREFIX, SQLITE_ASYNC_PREFIX)):
            return url

        raise RuntimeError(
            f"Expected a PostgreSQL or aiosqlite connection string, received: {url}"
        )

    @property
    def database_configured(self) -> bool:
        return self.resolved_database_url is not None

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins supplied via environment variables."""

        if not self.cors_allow_origins_raw:
            return []

        origins = [
            _normalize_origin(origin)
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self.database_configured:
            if self.discovery_sample_fallback:
                warnings.append(
                    "DATABASE_URL is not set - discovery will serve the sample catalog"
                )
            else:
                warnings.append(
                    "DATABASE_URL is not set and DISCOVERY_SAMPLE_FALLBACK is off - "
                    "event searches will fail with 503"
                )

        if not self.cors_allow_origins:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - using default localhost origins only "
                "(may cause CORS issues in production)"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_LOCATION_TIMEOUT_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_NEARBY_RADIUS_KM",
    "DEFAULT_RECOMMENDATION_RADIUS_KM",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "get_settings",
]
