"""
Environment-backed settings for the site backend and local stores.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Credentials for the hosted backend plus local paths."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Hosted backend (public anon credentials)
    public_supabase_url: Optional[str] = Field(default=None)
    public_supabase_anon_key: Optional[str] = Field(default=None)

    # Public site
    site_base_url: str = Field(default="https://typavibe.netlify.app")

    # Local anonymous storage scope used by the CLI
    anonymous_storage_path: str = Field(default=".typavibe/anonymous.json")

    # Outbound request timeout, seconds
    backend_timeout: float = Field(default=10.0)


@lru_cache(maxsize=1)
def get_settings() -> BackendSettings:
    """Return cached settings instance."""
    return BackendSettings()
