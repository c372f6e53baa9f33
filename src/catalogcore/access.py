"""Access service: the single entry point for root-entity retrieval.

Combines the gateway with the visibility policy. This is the only place
that turns a denial into a hard ``Unauthorized`` and a missing record
into ``EntityNotFound``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .context import RequestContext
from .entities import Attribute, Category, Entity, Manufacturer, Product, Review, Vendor
from .exceptions import EntityNotFound, RecordNotFound, Unauthorized
from .gateway import EntityFilter, EntityGateway, Pagination, Record
from .logging import get_request_logger, safe_log_value
from .visibility import EntityKind, Visibility, decide, view_inactive_capability

E = TypeVar("E", bound=Entity)


class AccessService(Generic[E]):
    """Visibility-gated retrieval of one entity kind.

    Args:
        gateway: Storage collaborator.
        entity_type: Entity wrapper class; its ``kind`` selects the
            view-inactive capability.

    Example::

        products = AccessService(gateway, Product)
        product = await products.get_by_id(ctx, "p1")
        page = await products.list(ctx, EntityFilter(title_contains="kite"))
    """

    def __init__(self, gateway: EntityGateway, entity_type: type[E]) -> None:
        self._gateway = gateway
        self._entity_type = entity_type
        self._capability = view_inactive_capability(entity_type.kind)

    @property
    def kind(self) -> EntityKind:
        return self._entity_type.kind

    @property
    def capability(self) -> str:
        return self._capability

    def wrap(self, record: Record) -> E:
        """Wrap a gateway record in this service's entity type, without any check."""
        return self._entity_type(record)

    async def get_by_id(self, ctx: RequestContext, entity_id: str) -> E:
        """Fetch one entity and enforce its visibility.

        Raises:
            EntityNotFound: No record with this id in the caller's shop.
            Unauthorized: The entity is inactive and the caller lacks the
                kind's view-inactive capability.
        """
        try:
            record = await self._gateway.fetch_by_id(entity_id, self.kind, ctx.scope)
        except RecordNotFound:
            raise EntityNotFound(entity_id, self.kind) from None

        return await self.authorize(ctx, self.wrap(record))

    async def authorize(self, ctx: RequestContext, entity: E) -> E:
        """Apply the visibility policy to an already fetched entity.

        Relation resolution uses this to re-check related entities with
        their own kind's capability.

        Raises:
            Unauthorized: The policy denied the entity.
        """
        active = entity.is_active()
        # The oracle is only consulted when the answer can change the outcome.
        held = False if active else await ctx.is_allowed(self._capability)

        if decide(active, held) is Visibility.DENY:
            get_request_logger(__name__, ctx).info(
                "Denied inactive %s %s (missing %s)",
                self.kind.value,
                entity.id,
                self._capability,
            )
            raise Unauthorized(self._capability)
        return entity

    async def list(
        self,
        ctx: RequestContext,
        entity_filter: Optional[EntityFilter] = None,
        pagination: Optional[Pagination] = None,
    ) -> list[E]:
        """List entities matching ``entity_filter``, in gateway order.

        The active constraint is decided once, up front, with the same
        policy function as :meth:`get_by_id`: a caller for whom an inactive
        entity would be exposed gets the constraint dropped, everyone else
        gets it forced to active-only. The gateway does the exclusion so
        pages keep their requested size.
        """
        held = await ctx.is_allowed(self._capability)
        include_inactive = decide(False, held) is Visibility.EXPOSE

        effective = (entity_filter or EntityFilter()).with_active_filter(None if include_inactive else True)
        get_request_logger(__name__, ctx).debug(
            "Listing %s (include_inactive=%s, filter=%s)",
            self.kind.value,
            include_inactive,
            safe_log_value(effective.model_dump()),
        )

        records = await self._gateway.fetch_by_filter(effective, self.kind, pagination, ctx.scope)
        return [self.wrap(record) for record in records]

    async def exists_visible(self, ctx: RequestContext, entity_id: str) -> bool:
        """Whether :meth:`get_by_id` would return the entity to this caller."""
        try:
            await self.get_by_id(ctx, entity_id)
        except (EntityNotFound, Unauthorized):
            return False
        return True


@dataclass(frozen=True)
class CatalogServices:
    """Access services for every kind the product relations reach."""

    products: AccessService[Product]
    categories: AccessService[Category]
    manufacturers: AccessService[Manufacturer]
    vendors: AccessService[Vendor]
    reviews: AccessService[Review]
    attributes: AccessService[Attribute]

    @classmethod
    def from_gateway(cls, gateway: EntityGateway) -> CatalogServices:
        return cls(
            products=AccessService(gateway, Product),
            categories=AccessService(gateway, Category),
            manufacturers=AccessService(gateway, Manufacturer),
            vendors=AccessService(gateway, Vendor),
            reviews=AccessService(gateway, Review),
            attributes=AccessService(gateway, Attribute),
        )


__all__ = ["AccessService", "CatalogServices"]
