"""Tests for the exception hierarchy and gRPC error mapping."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import grpc
import pytest

from catalogcore import (
    CatalogError,
    ConfigurationError,
    EntityKind,
    EntityNotFound,
    GatewayError,
    RecordNotFound,
    Unauthorized,
)
from catalogcore.exceptions import (
    error_registry,
    get_grpc_status_code,
    grpc_error_handler,
    register_error,
)


class TestExceptionHierarchy:
    """Stable codes and details."""

    def test_base_defaults(self) -> None:
        error = CatalogError()
        assert error.code == "INTERNAL_ERROR"
        assert error.details == {}

    def test_custom_code_and_details(self) -> None:
        error = CatalogError("boom", code="CUSTOM", shop_id="1")
        assert error.code == "CUSTOM"
        assert error.details == {"shop_id": "1"}

    def test_entity_not_found(self) -> None:
        error = EntityNotFound("P9", EntityKind.PRODUCT)
        assert error.code == "ENTITY_NOT_FOUND"
        assert error.details == {"id": "P9", "kind": "product"}
        assert error.kind is EntityKind.PRODUCT

    def test_unauthorized(self) -> None:
        error = Unauthorized("VIEW_INACTIVE_PRODUCT")
        assert error.code == "UNAUTHORIZED"
        assert error.capability == "VIEW_INACTIVE_PRODUCT"

    def test_unauthorized_custom_message(self) -> None:
        error = Unauthorized(message="Token may not query shop '2'")
        assert error.capability is None
        assert error.code == "UNAUTHORIZED"

    def test_record_not_found_is_gateway_error(self) -> None:
        error = RecordNotFound("P9", EntityKind.PRODUCT)
        assert isinstance(error, GatewayError)
        assert error.code == "RECORD_NOT_FOUND"
        assert error.record_id == "P9"

    def test_client_outcomes_are_not_gateway_errors(self) -> None:
        assert not isinstance(EntityNotFound("x", EntityKind.VENDOR), GatewayError)
        assert not isinstance(Unauthorized(), GatewayError)


class TestErrorRegistry:
    def test_base_errors_registered(self) -> None:
        assert error_registry.get("ENTITY_NOT_FOUND") is EntityNotFound
        assert error_registry.get("UNAUTHORIZED") is Unauthorized
        assert error_registry.get("CONFIGURATION_ERROR") is ConfigurationError
        assert error_registry.get("GATEWAY_ERROR") is GatewayError
        assert error_registry.get("UNKNOWN") is None

    def test_register_custom_error(self) -> None:
        @register_error("PRICE_ERROR")
        class PriceError(CatalogError):
            code = "PRICE_ERROR"

        assert error_registry.get("PRICE_ERROR") is PriceError
        assert "PRICE_ERROR" in error_registry.all()


class TestGrpcStatusMapping:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (EntityNotFound("P1", EntityKind.PRODUCT), grpc.StatusCode.NOT_FOUND),
            (Unauthorized("VIEW_INACTIVE_PRODUCT"), grpc.StatusCode.PERMISSION_DENIED),
            (ConfigurationError("bad"), grpc.StatusCode.FAILED_PRECONDITION),
            (GatewayError("down"), grpc.StatusCode.UNAVAILABLE),
            (RecordNotFound("P1"), grpc.StatusCode.NOT_FOUND),
            (CatalogError(), grpc.StatusCode.INTERNAL),
        ],
    )
    def test_status_codes(self, error: CatalogError, status: grpc.StatusCode) -> None:
        assert get_grpc_status_code(error) == status


class _ProductServicer:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    @grpc_error_handler
    async def GetProduct(self, request, context):
        if self.error is not None:
            raise self.error
        return {"id": request}


def _grpc_context() -> MagicMock:
    context = MagicMock()
    context.abort = AsyncMock()
    return context


class TestGrpcErrorHandler:
    """A failed query ends that call only."""

    @pytest.mark.asyncio
    async def test_success_passes_through(self) -> None:
        context = _grpc_context()
        assert await _ProductServicer().GetProduct("P1", context) == {"id": "P1"}
        context.abort.assert_not_called()

    @pytest.mark.asyncio
    async def test_unauthorized_aborts_with_permission_denied(self) -> None:
        context = _grpc_context()
        await _ProductServicer(Unauthorized("VIEW_INACTIVE_PRODUCT")).GetProduct("P2", context)

        context.set_trailing_metadata.assert_called_once_with([("error-code", "UNAUTHORIZED")])
        context.abort.assert_awaited_once_with(grpc.StatusCode.PERMISSION_DENIED, "[UNAUTHORIZED] Unauthorized")

    @pytest.mark.asyncio
    async def test_not_found_aborts_with_not_found(self) -> None:
        context = _grpc_context()
        await _ProductServicer(EntityNotFound("P9", EntityKind.PRODUCT)).GetProduct("P9", context)

        status, message = context.abort.await_args.args
        assert status == grpc.StatusCode.NOT_FOUND
        assert message.startswith("[ENTITY_NOT_FOUND]")

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self) -> None:
        context = _grpc_context()
        await _ProductServicer(RuntimeError("kaboom")).GetProduct("P1", context)

        status, message = context.abort.await_args.args
        assert status == grpc.StatusCode.INTERNAL
        assert "kaboom" in message
        context.set_trailing_metadata.assert_not_called()

    def test_wraps_preserves_name(self) -> None:
        assert _ProductServicer.GetProduct.__name__ == "GetProduct"
