"""Visibility policy for access-controlled catalog entities.

Provides:
- ``EntityKind``: closed set of entity kinds with an activity notion.
- ``Visibility``: expose/deny decision.
- ``decide()``: the single policy function.
- ``VIEW_INACTIVE_CAPABILITIES``: kind → capability lookup table.

The same ``decide()`` serves single fetches, listings and relation
re-checks. Value objects and parent-scoped collections never reach it:
their visibility is the parent's.
"""

from __future__ import annotations

from enum import Enum

from .exceptions import ConfigurationError
from .permissions import Capabilities


class EntityKind(str, Enum):
    """Kinds of independently access-controlled entities."""

    ACTION = "action"
    ATTRIBUTE = "attribute"
    BANNER = "banner"
    CATEGORY = "category"
    CONTENT = "content"
    LINK = "link"
    MANUFACTURER = "manufacturer"
    PRODUCT = "product"
    PROMOTION = "promotion"
    REVIEW = "review"
    VENDOR = "vendor"


class Visibility(str, Enum):
    """Outcome of the visibility policy."""

    EXPOSE = "expose"
    DENY = "deny"


VIEW_INACTIVE_CAPABILITIES: dict[EntityKind, str] = {
    EntityKind.ACTION: Capabilities.VIEW_INACTIVE_ACTION,
    EntityKind.ATTRIBUTE: Capabilities.VIEW_INACTIVE_ATTRIBUTE,
    EntityKind.BANNER: Capabilities.VIEW_INACTIVE_BANNER,
    EntityKind.CATEGORY: Capabilities.VIEW_INACTIVE_CATEGORY,
    EntityKind.CONTENT: Capabilities.VIEW_INACTIVE_CONTENT,
    EntityKind.LINK: Capabilities.VIEW_INACTIVE_LINK,
    EntityKind.MANUFACTURER: Capabilities.VIEW_INACTIVE_MANUFACTURER,
    EntityKind.PRODUCT: Capabilities.VIEW_INACTIVE_PRODUCT,
    EntityKind.PROMOTION: Capabilities.VIEW_INACTIVE_PROMOTION,
    EntityKind.REVIEW: Capabilities.VIEW_INACTIVE_REVIEW,
    EntityKind.VENDOR: Capabilities.VIEW_INACTIVE_VENDOR,
}


def view_inactive_capability(kind: EntityKind) -> str:
    """Return the capability that lets a caller see inactive entities of ``kind``.

    Raises:
        ConfigurationError: If the kind has no entry in the lookup table.
    """
    try:
        return VIEW_INACTIVE_CAPABILITIES[EntityKind(kind)]
    except (KeyError, ValueError):
        raise ConfigurationError(f"No view-inactive capability mapped for kind {kind!r}")


def decide(entity_active: bool, capability_held: bool) -> Visibility:
    """Decide whether an entity may be exposed to the caller.

    ``EXPOSE`` iff the entity is active or the caller holds the kind's
    view-inactive capability.

    Example::

        decide(True, False)   # Visibility.EXPOSE
        decide(False, True)   # Visibility.EXPOSE
        decide(False, False)  # Visibility.DENY
    """
    if entity_active or capability_held:
        return Visibility.EXPOSE
    return Visibility.DENY


__all__ = [
    "VIEW_INACTIVE_CAPABILITIES",
    "EntityKind",
    "Visibility",
    "decide",
    "view_inactive_capability",
]
