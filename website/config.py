"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Read once at startup; get_settings() is cached (lru_cache) — single instance per process
    - Optional sink settings are None when unset or blank, which disables the sink
    - Nothing in the request path mutates settings

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for everything: the site runs locally with no environment at all
"""

import socket
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Hosting
    environment: str = "Production"
    host: str = "127.0.0.1"
    port: int = 8000
    website_instance_id: str = socket.gethostname()
    azure_datacenter: str = "Local"
    azure_environment: str = "Local"

    # Build metadata — injected by the deployment pipeline
    git_commit: str = "local"
    git_branch: str = "main"

    # Telemetry sinks
    applicationinsights_connection_string: str | None = None
    papertrail_hostname: str | None = None
    papertrail_port: int = 514

    @field_validator(
        "applicationinsights_connection_string", "papertrail_hostname",
        mode="before",
    )
    @classmethod
    def blank_as_none(cls, v):
        """Whitespace-only values disable the sink, same as missing ones."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Site
    site_url: str = "https://martincostello.com"
    author_name: str = "Martin Costello"
    cdn_hosts: list[str] = [
        "https://cdnjs.cloudflare.com",
        "https://fonts.googleapis.com",
        "https://fonts.gstatic.com",
    ]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
