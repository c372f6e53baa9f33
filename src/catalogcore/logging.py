"""Logging utilities for the catalog access layer.

This module provides:
- Logging configuration from CatalogConfig
- Safe preview utilities for filter values and other caller input
- Secret redaction
- Request-scoped logger adapter (request_id / shop_id propagation)
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any, Optional

from .config import CatalogConfig, LogLevel

if TYPE_CHECKING:
    from .context import RequestContext


# Patterns for detecting secrets (common patterns to redact)
SECRET_PATTERNS = [
    r'(?i)(?:password|passwd|pwd|secret|token|key|api[_-]?key|auth[_-]?token)\s*[:=]\s*["\']?([^"\'\s]+)',
    r'(?i)(?:bearer|basic)\s+([a-zA-Z0-9+/=]+)',
    r'[a-f0-9]{32,}',  # Long hex strings (could be hashes or keys)
]

# LogRecord attributes that are not "extra" fields
_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "request_id", "shop_id",
})


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a safe, length-bounded preview of a value for logging.

    Converts any value to a single-line string, normalizes whitespace and
    truncates to ``limit`` characters.
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


def redact_secrets(text: str, replacement: str = "[REDACTED]") -> str:
    """Redact secret patterns (tokens, passwords, long hex keys) from text."""
    if not isinstance(text, str):
        return text

    result = text
    for pattern in SECRET_PATTERNS:
        result = re.sub(pattern, replacement, result, flags=re.IGNORECASE | re.DOTALL)

    return result


def safe_log_value(value: Any, limit: int = 240, redact: bool = True) -> str:
    """Create a safe log value with preview and optional redaction.

    This is the function to use when logging caller-supplied data.
    """
    preview = safe_preview(value, limit=limit)
    if redact:
        preview = redact_secrets(preview)
    return preview


class CatalogFormatter(logging.Formatter):
    """Formatter that includes request context, with optional JSON output.

    This formatter:
    - Adds request_id and shop_id from log records (if available)
    - Formats logs as JSON or plain text
    - Includes safe previews of extra fields
    - Redacts secrets automatically
    """

    def __init__(
        self,
        include_request: bool = True,
        json_format: bool = True,
        redact_secrets: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.include_request = include_request
        self.json_format = json_format
        self.redact_secrets = redact_secrets

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "request_id", None)
        shop_id = getattr(record, "shop_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_request:
            if request_id:
                log_data["request_id"] = request_id
            if shop_id:
                log_data["shop_id"] = shop_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = safe_log_value(value, redact=self.redact_secrets)

        if self.redact_secrets:
            log_data["message"] = redact_secrets(log_data["message"])

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if self.include_request and request_id:
            parts.append(f"request_id={request_id}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds request_id and shop_id to log records.

    Usage:
        logger = get_request_logger(__name__, ctx)
        logger.info("Denied product %s", product_id)
    """

    def __init__(
        self,
        logger: logging.Logger,
        request_id: Optional[str] = None,
        shop_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.request_id = request_id
        self.shop_id = shop_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        request_id = kwargs.pop("request_id", self.request_id)
        shop_id = kwargs.pop("shop_id", self.shop_id)

        extra = dict(kwargs.get("extra") or {})
        if request_id:
            extra["request_id"] = request_id
        if shop_id:
            extra["shop_id"] = shop_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[CatalogConfig] = None,
    json_format: Optional[bool] = None,
    redact_secrets: bool = True,
) -> None:
    """Configure root logging from a CatalogConfig.

    Args:
        config: CatalogConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
        redact_secrets: Whether to redact secrets (default: True)
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        CatalogFormatter(
            include_request=True,
            json_format=config.log_json if json_format is None else json_format,
            redact_secrets=redact_secrets,
        )
    )
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_request_logger(name: str, ctx: Optional[RequestContext] = None) -> RequestLoggerAdapter:
    """Get a logger adapter bound to a request context.

    Example:
        logger = get_request_logger(__name__, ctx)
        logger.info("Listing products")
    """
    logger = logging.getLogger(name)
    if ctx is None:
        return RequestLoggerAdapter(logger)
    return RequestLoggerAdapter(logger, request_id=ctx.request_id, shop_id=ctx.shop_id)


__all__ = [
    "safe_preview",
    "redact_secrets",
    "safe_log_value",
    "CatalogFormatter",
    "RequestLoggerAdapter",
    "setup_logging",
    "get_request_logger",
]
