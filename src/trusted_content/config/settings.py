from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the TRUSTED_CONTENT_ prefix.
    For example:
        - TRUSTED_CONTENT_GUAC_URL=http://guac:8080/query
        - TRUSTED_CONTENT_PORT=9000
        - TRUSTED_CONTENT_TRUST_SNAPSHOT=/etc/trusted-content/trusted-gav.json

    Alternatively, settings can be provided programmatically when creating the Container:
        container = Container()
        container.config.from_pydantic(AppConfig(guac_url="http://guac:8080/query"))
    """

    model_config = SettingsConfigDict(
        env_prefix="TRUSTED_CONTENT_",
        case_sensitive=False,
        extra="forbid",
    )

    bind: str = Field(default="0.0.0.0", description="Address the HTTP server binds to")

    port: int = Field(default=8080, ge=1, le=65535, description="Port the HTTP server listens on")

    guac_url: str = Field(
        default="http://localhost:8080/query",
        description="GraphQL endpoint of the GUAC graph service",
    )

    trusted_namespace: str = Field(
        default="redhat",
        description="Package namespace whose packages are considered trusted rebuilds",
    )

    trust_marker: str = Field(
        default="redhat",
        description="Version substring marking a trusted rebuild",
    )

    trust_snapshot: Optional[Path] = Field(
        default=None,
        description="Trust table snapshot (JSON array of upstream/trusted pairs). If None, uses the bundled snapshot",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout for calls to GUAC and the advisory source",
    )

    cache_dir: Optional[Path] = Field(
        default=None,
        description="Custom cache directory path. If None, uses platformdirs.user_cache_dir('trusted_content')",
    )

    catalog_concurrency: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum graph queries in flight while building the catalog",
    )

    advisory_cache_ttl_hours: int = Field(
        default=24,
        ge=0,
        description="TTL for cached advisory details in hours (0 keeps entries until cleared)",
    )

    log_level: str = Field(default="INFO", description="Root log level for the server process")
