"""Exception hierarchy for the catalog access layer.

All errors inherit from CatalogError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for protocol mapping
- gRPC error handler decorator for transport handlers

Usage in a transport layer:
    from catalogcore.exceptions import (
        EntityNotFound,
        Unauthorized,
        grpc_error_handler,
    )

Only ``EntityNotFound`` and ``Unauthorized`` are client-visible outcomes.
Gateway failures pass through the core unchanged.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "CatalogError",
    "ConfigurationError",
    "EntityNotFound",
    "Unauthorized",
    "GatewayError",
    "RecordNotFound",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
    # gRPC helpers
    "get_grpc_status_code",
    "grpc_error_handler",
]

logger = logging.getLogger(__name__)


# ---- Exception Hierarchy ----------------------------------------------------


class CatalogError(Exception):
    """Base exception for the catalog access layer.

    Attributes:
        code: Stable error code string for protocol mapping (e.g. "UNAUTHORIZED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(CatalogError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class EntityNotFound(CatalogError):
    """Requested entity does not exist (in the caller's shop scope)."""

    code: str = "ENTITY_NOT_FOUND"

    def __init__(self, entity_id: str, kind: Any) -> None:
        kind_name = getattr(kind, "value", kind)
        super().__init__(f"{kind_name} was not found by id: {entity_id}", id=entity_id, kind=kind_name)
        self.entity_id = entity_id
        self.kind = kind


class Unauthorized(CatalogError):
    """Caller lacks the capability needed to see an existing entity."""

    code: str = "UNAUTHORIZED"
    message: str = "Unauthorized"

    def __init__(self, capability: str | None = None, message: str | None = None) -> None:
        super().__init__(message, capability=capability)
        self.capability = capability


class GatewayError(CatalogError):
    """Storage/gateway collaborator failure."""

    code: str = "GATEWAY_ERROR"


class RecordNotFound(GatewayError):
    """Gateway has no record for the requested id and kind."""

    code: str = "RECORD_NOT_FOUND"

    def __init__(self, record_id: str, kind: Any = None) -> None:
        kind_name = getattr(kind, "value", kind)
        super().__init__(f"No {kind_name or 'record'} with id {record_id!r}", id=record_id, kind=kind_name)
        self.record_id = record_id


# ---- Error Registry for Protocol Mapping ------------------------------------

_E = TypeVar("_E", bound=type[CatalogError])


class ErrorRegistry:
    """Registry for mapping internal errors to external protocol codes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[CatalogError]] = {}

    def register(self, code: str, error_cls: type[CatalogError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[CatalogError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[CatalogError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("PRICE_ERROR")
        class PriceError(CatalogError):
            code = "PRICE_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", CatalogError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("ENTITY_NOT_FOUND", EntityNotFound)
error_registry.register("UNAUTHORIZED", Unauthorized)
error_registry.register("GATEWAY_ERROR", GatewayError)
error_registry.register("RECORD_NOT_FOUND", RecordNotFound)


# ---- gRPC Error Handling Utilities ------------------------------------------


def get_grpc_status_code(error: CatalogError) -> Any:
    """Map CatalogError to gRPC status code.

    Returns grpc.StatusCode value for the given error type.
    Import grpc locally to avoid hard dependency at module level.
    """
    import grpc

    error_to_status = {
        "ENTITY_NOT_FOUND": grpc.StatusCode.NOT_FOUND,
        "UNAUTHORIZED": grpc.StatusCode.PERMISSION_DENIED,
        "CONFIGURATION_ERROR": grpc.StatusCode.FAILED_PRECONDITION,
        "GATEWAY_ERROR": grpc.StatusCode.UNAVAILABLE,
        "RECORD_NOT_FOUND": grpc.StatusCode.NOT_FOUND,
    }
    return error_to_status.get(error.code, grpc.StatusCode.INTERNAL)


def grpc_error_handler(method):
    """Decorator for unary gRPC service methods with proper error handling.

    Catches CatalogError and sets the matching gRPC status code, so a
    failed query ends that one call and nothing else.

    Usage:
        @grpc_error_handler
        async def GetProduct(self, request, context):
            ...
    """

    @functools.wraps(method)
    async def wrapper(self, request, context):
        try:
            return await method(self, request, context)
        except CatalogError as e:
            status_code = get_grpc_status_code(e)
            error_message = f"[{e.code}] {e.message}"

            log = logger.info if e.code in ("ENTITY_NOT_FOUND", "UNAUTHORIZED") else logger.error
            log(
                "%s failed: %s",
                method.__name__,
                error_message,
                extra={
                    "error_code": e.code,
                    "error_details": e.details,
                },
            )

            context.set_trailing_metadata([("error-code", e.code)])
            await context.abort(status_code, error_message)
            return  # no response after abort

        except Exception as e:
            import grpc

            logger.exception("%s unexpected error: %s", method.__name__, e)
            await context.abort(
                grpc.StatusCode.INTERNAL,
                f"Unexpected {type(e)}: {e}",
            )
            return  # no response after abort

    return wrapper
