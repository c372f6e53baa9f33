"""Caller tokens.

CallerToken carries the identity and capabilities of whoever issued the
current request. The transport layer authenticates the caller and builds
the token; this package only reads it through an authorization oracle.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from typing import Iterable

from .config import CatalogConfig
from .permissions import UserGroup, expand_capabilities


@dataclass(frozen=True)
class CallerToken:
    """Identity and capabilities of a catalog caller.

    CallerToken provides:
    - token_id: Unique identifier for audit trails
    - capabilities: Capability strings (e.g. "VIEW_INACTIVE_PRODUCT")
    - groups: Groups the caller belongs to (already expanded into capabilities)
    - user_id: Identity of the user (None = anonymous)
    - allowed_shops: Shop ids this token may query. Empty = all shops.
    - exp_unix: Expiration timestamp (None = no expiration)
    """

    token_id: str
    capabilities: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()
    user_id: str | None = None
    allowed_shops: tuple[str, ...] = ()  # Empty = all shops
    exp_unix: float | None = None

    def is_expired(self, *, now: float | None = None) -> bool:
        """Check if token has expired."""
        if self.exp_unix is None:
            return False
        t = time.time() if now is None else now
        return t >= self.exp_unix

    def has_capability(self, capability: str) -> bool:
        """Check if token carries a specific capability."""
        return capability in self.capabilities

    def can_access_shop(self, shop_id: str) -> bool:
        """Check if token may query the given shop.

        Returns False for an empty shop id.
        """
        if not shop_id:
            return False
        if not self.allowed_shops:
            return True
        return shop_id in self.allowed_shops


class TokenBuilder:
    """Caller token minting.

    Expands group memberships into capabilities at mint time so that
    capability checks stay a plain membership test.
    """

    def __init__(self, *, default_ttl_s: float = 3600) -> None:
        self._default_ttl_s = default_ttl_s

    @classmethod
    def from_config(cls, config: CatalogConfig) -> TokenBuilder:
        """Create a builder whose tokens live for ``config.token_ttl_seconds``."""
        return cls(default_ttl_s=config.token_ttl_seconds)

    def mint(
        self,
        *,
        user_id: str | None = None,
        groups: Iterable[str] = (),
        capabilities: Iterable[str] = (),
        allowed_shops: Iterable[str] | None = None,
        ttl_s: float | None = None,
    ) -> CallerToken:
        """Create a token for an authenticated caller.

        Args:
            user_id: Identity of the caller.
            groups: Group names; each contributes its profile capabilities.
            capabilities: Capabilities granted on top of the groups.
            allowed_shops: Shops the caller may query. None or empty = all.
            ttl_s: Time-to-live in seconds (default: builder default).

        Returns:
            New CallerToken instance
        """
        groups = tuple(groups)
        ttl = self._default_ttl_s if ttl_s is None else ttl_s
        return CallerToken(
            token_id=secrets.token_urlsafe(16),
            capabilities=expand_capabilities(groups, capabilities),
            groups=groups,
            user_id=user_id,
            allowed_shops=tuple(allowed_shops or ()),
            exp_unix=time.time() + float(ttl),
        )

    def anonymous(self) -> CallerToken:
        """Create a capability-less token for an unauthenticated caller."""
        return CallerToken(
            token_id=f"anon-{secrets.token_urlsafe(8)}",
            groups=(UserGroup.ANONYMOUS,),
        )


__all__ = ["CallerToken", "TokenBuilder"]
