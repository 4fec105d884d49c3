"""
Configuration Settings

This module defines client configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Variables are prefixed with TINYLINK_ (e.g. TINYLINK_API_BASE)
- No module-level settings instance: callers build one with get_settings()
  and inject the values they need (the API base address goes into the
  HTTP client at construction)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_prefix="TINYLINK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Must match the address the server uses for redirect resolution,
    # since short URLs are built as {API_BASE}/{code}
    API_BASE: str = Field(
        default="http://localhost:5000",
        description="Base address of the TinyLink API"
    )

    REQUEST_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for each API request"
    )

    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Root log level for the command line client"
    )


def get_settings(**overrides) -> Settings:
    """
    Build a Settings instance from the environment.

    Args:
        **overrides: Explicit values that win over the environment

    Returns:
        A new Settings instance
    """
    return Settings(**overrides)
