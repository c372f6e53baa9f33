"""Entity Repository Gateway contract.

The gateway is the storage collaborator of the access layer. It fetches
records by id or by filter, always inside a :class:`CatalogScope`, and
exposes relation accessors on the records it returns.

Failure modes the core relies on:
- ``RecordNotFound`` from ``fetch_by_id`` when no record exists in scope.
- Any other ``GatewayError`` (or arbitrary exception) is passed through.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..context import CatalogScope
    from ..visibility import EntityKind

# Collection accessors may return a list, a keyed mapping, or nothing at all.
RecordCollection = Union[Iterable["Record"], Mapping[str, "Record"], None]


@runtime_checkable
class Record(Protocol):
    """A persisted record as returned by the gateway."""

    @property
    def id(self) -> str: ...

    def field(self, name: str, default: Any = None) -> Any: ...


@runtime_checkable
class ProductRecord(Record, Protocol):
    """Product record with relation accessors.

    Singular accessors return the related record or ``None``. Collection
    accessors return an iterable, a mapping keyed by a stable id, or
    ``None`` when the relation has no data.
    """

    async def manufacturer(self) -> Optional[Record]: ...

    async def vendor(self) -> Optional[Record]: ...

    async def category(self) -> Optional[Record]: ...

    async def cross_selling(self) -> RecordCollection: ...

    async def accessories(self) -> RecordCollection: ...

    async def variants(self) -> RecordCollection: ...

    async def attributes(self) -> RecordCollection: ...

    async def reviews(self) -> RecordCollection: ...

    async def selections(self) -> RecordCollection: ...

    async def amount_price_tiers(self) -> RecordCollection: ...


class EntityFilter(BaseModel):
    """Filter for listing queries.

    ``active=True`` restricts to active records, ``active=None`` drops the
    constraint. ``where`` holds exact-match constraints on record fields.
    """

    model_config = {"frozen": True}

    active: Optional[bool] = True
    where: dict[str, Any] = Field(default_factory=dict)
    title_contains: Optional[str] = None

    def with_active_filter(self, active: Optional[bool]) -> EntityFilter:
        """Return a copy with the active constraint replaced."""
        return self.model_copy(update={"active": active})


class Pagination(BaseModel):
    """Offset pagination, interpreted by the gateway only."""

    model_config = {"frozen": True}

    offset: int = Field(default=0, ge=0)
    limit: Optional[int] = Field(default=None, ge=1)


@runtime_checkable
class EntityGateway(Protocol):
    """Storage collaborator consumed by the access service."""

    async def fetch_by_id(self, entity_id: str, kind: EntityKind, scope: CatalogScope) -> Record:
        """Fetch a single record.

        Raises:
            RecordNotFound: If no record with this id exists in scope.
        """
        ...

    async def fetch_by_filter(
        self,
        entity_filter: EntityFilter,
        kind: EntityKind,
        pagination: Optional[Pagination],
        scope: CatalogScope,
    ) -> list[Record]:
        """Fetch a page of records matching ``entity_filter``, in gateway order."""
        ...


__all__ = [
    "EntityFilter",
    "EntityGateway",
    "Pagination",
    "ProductRecord",
    "Record",
    "RecordCollection",
]
