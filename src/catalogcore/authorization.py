"""Authorization oracles.

An oracle answers one question: may the current caller exercise a named
capability? One oracle instance serves exactly one request.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, runtime_checkable

from .tokens import CallerToken

logger = logging.getLogger(__name__)


@runtime_checkable
class AuthorizationOracle(Protocol):
    """Answers capability questions for the caller of one request.

    Implementations must be free of side effects and cheap enough to be
    asked repeatedly within a request.
    """

    async def is_allowed(self, capability: str) -> bool: ...


class TokenAuthorizationOracle:
    """Oracle backed by a :class:`CallerToken`.

    Expired tokens hold no capabilities. Answers are memoized for the
    lifetime of the oracle, so the expiry check happens once per
    capability.
    """

    def __init__(self, token: CallerToken) -> None:
        self._token = token
        self._answers: dict[str, bool] = {}

    @property
    def token(self) -> CallerToken:
        return self._token

    async def is_allowed(self, capability: str) -> bool:
        cached = self._answers.get(capability)
        if cached is not None:
            return cached

        if self._token.is_expired():
            logger.warning(
                "Expired token %s asked for capability %s",
                self._token.token_id,
                capability,
            )
            allowed = False
        else:
            allowed = self._token.has_capability(capability)

        self._answers[capability] = allowed
        return allowed


class StaticAuthorizationOracle:
    """Oracle with a fixed capability set.

    Used for internal service callers and in tests.

    Example::

        oracle = StaticAuthorizationOracle({Capabilities.VIEW_INACTIVE_PRODUCT})
        await oracle.is_allowed("VIEW_INACTIVE_PRODUCT")  # True
    """

    def __init__(self, capabilities: Iterable[str] = ()) -> None:
        self._capabilities = frozenset(capabilities)

    async def is_allowed(self, capability: str) -> bool:
        return capability in self._capabilities

    def __repr__(self) -> str:
        return f"StaticAuthorizationOracle({sorted(self._capabilities)!r})"


__all__ = [
    "AuthorizationOracle",
    "StaticAuthorizationOracle",
    "TokenAuthorizationOracle",
]
