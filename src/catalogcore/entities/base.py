"""Entity wrappers over gateway records.

An entity is an immutable, request-scoped view of one record. Entities
never write back to their record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Optional

from ..gateway.base import Record
from ..logging import safe_log_value
from ..visibility import EntityKind

logger = logging.getLogger(__name__)

_TRUE_FLAGS = frozenset({"1", "true", "yes", "on"})


def as_flag(value: Any) -> bool:
    """Interpret a stored flag (bool, int, or "0"/"1" style string)."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_FLAGS
    return bool(value)


def as_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp. Naive values are taken as UTC.

    Empty values, unparseable strings and the zero date used by legacy
    storage map to ``None``.
    """
    if value is None or value == "" or value == "0000-00-00 00:00:00":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            logger.warning("Ignoring unparseable timestamp %s", safe_log_value(value))
            return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class Entity:
    """Base wrapper for records of an access-controlled kind.

    Subclasses set ``kind``; the access service uses it to look up the
    view-inactive capability.
    """

    kind: ClassVar[EntityKind]

    record: Record

    @property
    def id(self) -> str:
        return str(self.record.id)

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """Whether the entity counts as active at ``now`` (default: current UTC time).

        The ``active`` flag wins. Without it, an ``[active_from, active_to]``
        window that contains ``now`` also makes the entity active.
        """
        if as_flag(self.record.field("active", False)):
            return True

        active_from = as_datetime(self.record.field("active_from"))
        active_to = as_datetime(self.record.field("active_to"))
        if active_from is None or active_to is None:
            return False

        moment = as_datetime(now) if now is not None else datetime.now(timezone.utc)
        return active_from <= moment <= active_to

    @property
    def active(self) -> bool:
        return self.is_active()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


__all__ = ["Entity", "as_datetime", "as_flag"]
