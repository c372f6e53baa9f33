"""Configuration contract for the catalog access layer.

This module provides the Pydantic-validated configuration model used by
the logging setup, request contexts and relation resolver.

Direct os.environ/os.getenv usage is limited to
``load_config_from_env()``; everything else receives a ``CatalogConfig``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CatalogConfig(BaseModel):
    """Configuration for the catalog access layer.

    Shop and language defaults apply to request contexts that do not name
    their own scope.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Service name used as the package logger name override",
    )

    # Request scope defaults
    default_shop_id: str = Field(
        default="1",
        min_length=1,
        description="Shop used when a request does not name one",
    )
    default_language_id: int = Field(
        default=0,
        ge=0,
        description="Language used when a request does not name one",
    )

    # Tokens
    token_ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Default caller token TTL in seconds (1 hour)",
    )

    # Relations
    strict_collection_visibility: bool = Field(
        default=False,
        description=(
            "Re-check visibility of every member of product collection relations "
            "(cross-selling, accessories, variants) instead of trusting the gateway join"
        ),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",  # Prevent accidental extra fields
    }


_TRUTHY = ("true", "1", "yes", "on")


def load_config_from_env() -> CatalogConfig:
    """Load configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - SERVICE_NAME: Service name
    - CATALOG_SHOP_ID: Default shop id
    - CATALOG_LANGUAGE_ID: Default language id
    - TOKEN_TTL_SECONDS: Default caller token TTL
    - CATALOG_STRICT_COLLECTION_VISIBILITY: Re-check collection members

    Returns:
        CatalogConfig instance with values from environment or defaults.
    """
    import os

    return CatalogConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in _TRUTHY,
        service_name=os.getenv("SERVICE_NAME"),
        default_shop_id=os.getenv("CATALOG_SHOP_ID", "1"),
        default_language_id=int(os.getenv("CATALOG_LANGUAGE_ID", "0")),
        token_ttl_seconds=int(os.getenv("TOKEN_TTL_SECONDS", "3600")),
        strict_collection_visibility=(
            os.getenv("CATALOG_STRICT_COLLECTION_VISIBILITY", "false").lower() in _TRUTHY
        ),
    )


__all__ = [
    "CatalogConfig",
    "LogLevel",
    "load_config_from_env",
]
