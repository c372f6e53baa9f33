"""Group profiles and capability expansion.

Provides:
- ``GROUP_PROFILES``: caller group → granted capabilities.
- ``expand_capabilities()``: resolve groups into a flat capability set.
"""

from __future__ import annotations

from typing import Iterable

from .constants import Capabilities, UserGroup

# ── Group → Capability Profiles ─────────────────────────

GROUP_PROFILES: dict[str, tuple[str, ...]] = {
    UserGroup.ANONYMOUS: (),
    UserGroup.CUSTOMER: (),
    UserGroup.ADMIN: (
        Capabilities.VIEW_INACTIVE_ACTION,
        Capabilities.VIEW_INACTIVE_ATTRIBUTE,
        Capabilities.VIEW_INACTIVE_BANNER,
        Capabilities.VIEW_INACTIVE_CATEGORY,
        Capabilities.VIEW_INACTIVE_CONTENT,
        Capabilities.VIEW_INACTIVE_LINK,
        Capabilities.VIEW_INACTIVE_MANUFACTURER,
        Capabilities.VIEW_INACTIVE_PRODUCT,
        Capabilities.VIEW_INACTIVE_PROMOTION,
        Capabilities.VIEW_INACTIVE_REVIEW,
        Capabilities.VIEW_INACTIVE_VENDOR,
        Capabilities.VIEW_WISHED_PRICES,
        Capabilities.DELETE_WISHED_PRICE,
    ),
}


def expand_capabilities(
    groups: Iterable[str],
    capabilities: Iterable[str] = (),
) -> tuple[str, ...]:
    """Combine group profiles with explicitly granted capabilities.

    Unknown groups grant nothing.

    Args:
        groups: Group names the caller belongs to.
        capabilities: Capabilities granted directly, on top of the groups.

    Returns:
        Deduplicated, sorted tuple of capability strings.

    Example::

        >>> expand_capabilities(("customer",), ("VIEW_INACTIVE_REVIEW",))
        ('VIEW_INACTIVE_REVIEW',)
    """
    expanded: set[str] = set(capabilities)
    for group in groups:
        expanded.update(GROUP_PROFILES.get(group, ()))
    return tuple(sorted(expanded))


__all__ = [
    "GROUP_PROFILES",
    "expand_capabilities",
]
