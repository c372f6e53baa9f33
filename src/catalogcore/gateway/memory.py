"""In-memory gateway for local development and tests.

Records live in a dict keyed by ``(kind, id)`` and are assigned to one or
more shops. A record outside the request's shop behaves exactly like a
missing one. Records read in a language carry that language's translated
fields. Listings keep insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field, replace
from typing import Any, Optional

from ..exceptions import RecordNotFound
from .base import EntityFilter, Pagination, Record, RecordCollection


@dataclass
class MemoryRecord:
    """Record held by :class:`MemoryGateway`.

    ``links`` maps relation names (``"manufacturer"``, ``"variants"``, ...)
    to a record, a collection of records, a mapping, or ``None``. A link
    set to an exception instance raises it when the relation is read.

    ``translations`` maps a language id to the fields that differ in that
    language. Linked records are returned as stored, untranslated.
    """

    id: str
    data: dict[str, Any] = dataclass_field(default_factory=dict)
    links: dict[str, Any] = dataclass_field(default_factory=dict)
    shops: tuple[str, ...] = ("1",)
    translations: dict[int, dict[str, Any]] = dataclass_field(default_factory=dict)

    def field(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def in_shop(self, shop_id: str) -> bool:
        return shop_id in self.shops

    def in_language(self, language_id: int) -> MemoryRecord:
        """Return the record as read in ``language_id``; the record itself is left untouched."""
        translated = self.translations.get(language_id)
        if not translated:
            return self
        return replace(self, data={**self.data, **translated})

    async def _link(self, name: str) -> Any:
        value = self.links.get(name)
        if isinstance(value, BaseException):
            raise value
        return value

    async def manufacturer(self) -> Optional[Record]:
        return await self._link("manufacturer")

    async def vendor(self) -> Optional[Record]:
        return await self._link("vendor")

    async def category(self) -> Optional[Record]:
        return await self._link("category")

    async def cross_selling(self) -> RecordCollection:
        return await self._link("cross_selling")

    async def accessories(self) -> RecordCollection:
        return await self._link("accessories")

    async def variants(self) -> RecordCollection:
        return await self._link("variants")

    async def attributes(self) -> RecordCollection:
        return await self._link("attributes")

    async def reviews(self) -> RecordCollection:
        return await self._link("reviews")

    async def selections(self) -> RecordCollection:
        return await self._link("selections")

    async def amount_price_tiers(self) -> RecordCollection:
        return await self._link("amount_price_tiers")


class MemoryGateway:
    """Dict-backed :class:`~catalogcore.gateway.base.EntityGateway`.

    Example::

        gateway = MemoryGateway()
        gateway.add(EntityKind.PRODUCT, MemoryRecord("p1", {"active": True}))
        record = await gateway.fetch_by_id("p1", EntityKind.PRODUCT, scope)
    """

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], MemoryRecord] = {}
        self._failures: dict[tuple[str, str], BaseException] = {}
        self.calls: list[tuple[str, str, Any]] = []

    def add(self, kind: Any, *records: MemoryRecord) -> None:
        for record in records:
            self._records[(_kind_key(kind), record.id)] = record

    def set_failure(self, kind: Any, entity_id: str, error: BaseException) -> None:
        """Make ``fetch_by_id`` raise ``error`` for this record."""
        self._failures[(_kind_key(kind), entity_id)] = error

    async def fetch_by_id(self, entity_id: str, kind: Any, scope: Any) -> MemoryRecord:
        key = (_kind_key(kind), entity_id)
        self.calls.append(("fetch_by_id", key[0], entity_id))

        failure = self._failures.get(key)
        if failure is not None:
            raise failure

        record = self._records.get(key)
        if record is None or not record.in_shop(scope.shop_id):
            raise RecordNotFound(entity_id, kind)
        return record.in_language(scope.language_id)

    async def fetch_by_filter(
        self,
        entity_filter: EntityFilter,
        kind: Any,
        pagination: Optional[Pagination],
        scope: Any,
    ) -> list[MemoryRecord]:
        kind_key = _kind_key(kind)
        self.calls.append(("fetch_by_filter", kind_key, entity_filter))

        localized = [
            record.in_language(scope.language_id)
            for (record_kind, _), record in self._records.items()
            if record_kind == kind_key and record.in_shop(scope.shop_id)
        ]
        matches = [record for record in localized if _matches(record, entity_filter)]

        if pagination is None:
            return matches
        end = None if pagination.limit is None else pagination.offset + pagination.limit
        return matches[pagination.offset : end]


def _kind_key(kind: Any) -> str:
    return str(getattr(kind, "value", kind))


def _matches(record: MemoryRecord, entity_filter: EntityFilter) -> bool:
    from ..entities.base import Entity

    if entity_filter.active is not None and Entity(record).is_active() != entity_filter.active:
        return False

    for name, expected in entity_filter.where.items():
        if record.field(name) != expected:
            return False

    if entity_filter.title_contains:
        title = str(record.field("title") or "")
        if entity_filter.title_contains.lower() not in title.lower():
            return False

    return True


__all__ = ["MemoryGateway", "MemoryRecord"]
