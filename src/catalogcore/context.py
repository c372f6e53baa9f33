"""Request-scoped context.

Every access and relation operation receives a ``RequestContext``. It is
the only carrier of caller identity and shop/language scope; nothing in
this package reads them from process-wide state.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field

from .authorization import AuthorizationOracle, TokenAuthorizationOracle
from .config import CatalogConfig
from .exceptions import Unauthorized
from .tokens import CallerToken


@dataclass(frozen=True)
class CatalogScope:
    """Shop and language a request reads from. Passed to the gateway."""

    shop_id: str
    language_id: int = 0


@dataclass(frozen=True)
class RequestContext:
    """Caller authorization and scope for a single request.

    Attributes:
        oracle: Authorization oracle for this request's caller.
        shop_id: Shop the request reads from.
        language_id: Language the request reads in.
        request_id: Identifier attached to log records.
    """

    oracle: AuthorizationOracle
    shop_id: str = "1"
    language_id: int = 0
    request_id: str = field(default_factory=lambda: secrets.token_hex(8))

    @property
    def scope(self) -> CatalogScope:
        return CatalogScope(shop_id=self.shop_id, language_id=self.language_id)

    async def is_allowed(self, capability: str) -> bool:
        return await self.oracle.is_allowed(capability)

    @classmethod
    def for_token(
        cls,
        token: CallerToken,
        *,
        shop_id: str | None = None,
        language_id: int | None = None,
        config: CatalogConfig | None = None,
        request_id: str | None = None,
    ) -> RequestContext:
        """Build a context for a caller token.

        Shop and language fall back to the configured defaults.

        Raises:
            Unauthorized: If the token may not query the requested shop.
        """
        config = config or CatalogConfig()
        shop = shop_id if shop_id is not None else config.default_shop_id
        if not token.can_access_shop(shop):
            raise Unauthorized(message=f"Token may not query shop {shop!r}")

        kwargs = {}
        if request_id is not None:
            kwargs["request_id"] = request_id
        return cls(
            oracle=TokenAuthorizationOracle(token),
            shop_id=shop,
            language_id=language_id if language_id is not None else config.default_language_id,
            **kwargs,
        )


__all__ = ["CatalogScope", "RequestContext"]
