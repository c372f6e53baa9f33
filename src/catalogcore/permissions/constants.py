"""Capability constants and caller groups for the catalog.

Provides:
- ``Capabilities``: every capability string the catalog knows about.
- ``UserGroup``: caller groups that map to capability profiles.
"""

from __future__ import annotations


class Capabilities:
    """Canonical capability constants.

    Format: ``VIEW_INACTIVE_{KIND}`` for kind-specific visibility, plus a
    small set of wishlist permissions that other catalog components use.

    Capabilities are opaque to this package: they are granted elsewhere
    and only ever compared for equality.
    """

    # ── Visibility of inactive entities ─────────────────
    VIEW_INACTIVE_ACTION = "VIEW_INACTIVE_ACTION"
    VIEW_INACTIVE_ATTRIBUTE = "VIEW_INACTIVE_ATTRIBUTE"
    VIEW_INACTIVE_BANNER = "VIEW_INACTIVE_BANNER"
    VIEW_INACTIVE_CATEGORY = "VIEW_INACTIVE_CATEGORY"
    VIEW_INACTIVE_CONTENT = "VIEW_INACTIVE_CONTENT"
    VIEW_INACTIVE_LINK = "VIEW_INACTIVE_LINK"
    VIEW_INACTIVE_MANUFACTURER = "VIEW_INACTIVE_MANUFACTURER"
    VIEW_INACTIVE_PRODUCT = "VIEW_INACTIVE_PRODUCT"
    VIEW_INACTIVE_PROMOTION = "VIEW_INACTIVE_PROMOTION"
    VIEW_INACTIVE_REVIEW = "VIEW_INACTIVE_REVIEW"
    VIEW_INACTIVE_VENDOR = "VIEW_INACTIVE_VENDOR"

    # ── Wishlist ────────────────────────────────────────
    VIEW_WISHED_PRICES = "VIEW_WISHED_PRICES"
    DELETE_WISHED_PRICE = "DELETE_WISHED_PRICE"

    @classmethod
    def all(cls) -> frozenset[str]:
        """Return every capability constant declared on this class."""
        return frozenset(
            value for name, value in vars(cls).items() if name.isupper() and isinstance(value, str)
        )


class UserGroup:
    """Caller group.

    Not a capability, but a membership that maps to a default set of
    capabilities via :data:`GROUP_PROFILES`.
    """

    ANONYMOUS = "anonymous"
    CUSTOMER = "customer"
    ADMIN = "admin"

    ALL = frozenset({"anonymous", "customer", "admin"})


__all__ = [
    "Capabilities",
    "UserGroup",
]
