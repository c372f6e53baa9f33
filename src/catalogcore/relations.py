"""Lazy relation resolution for products.

Each relation of a product is its own operation: a caller asking for the
manufacturer pays for the manufacturer only. Resolutions share no mutable
state, so the transport layer may run any number of them concurrently.

Relation shapes:
- Value objects (dimensions, prices, stock, ...): built from the product
  record, never absent except where noted (``unit``, ``list_price``).
- Single access-controlled entities (manufacturer, vendor, category,
  bundle product): re-checked with the related kind's capability.
  ``EntityNotFound`` and ``Unauthorized`` fold into ``None``; every other
  error propagates.
- Collections: always a list, empty when there is no data. Product
  collections (cross-selling, accessories, variants) are trusted to be
  pre-scoped by the gateway join unless ``recheck_collections`` is set.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any, Awaitable, Optional, TypeVar

from .access import AccessService, CatalogServices
from .config import CatalogConfig
from .context import RequestContext
from .entities import (
    Category,
    Entity,
    Manufacturer,
    Price,
    Product,
    ProductAttribute,
    ProductDeliveryTime,
    ProductDimensions,
    ProductImageGallery,
    ProductRating,
    ProductScalePrice,
    ProductStock,
    ProductUnit,
    Review,
    Seo,
    SelectionList,
    Vendor,
)
from .exceptions import EntityNotFound, Unauthorized
from .gateway import Record, RecordCollection
from .logging import get_request_logger

E = TypeVar("E", bound=Entity)

RELATION_NAMES: tuple[str, ...] = (
    "dimensions",
    "price",
    "list_price",
    "stock",
    "image_gallery",
    "rating",
    "delivery_time",
    "scale_prices",
    "bundle_product",
    "manufacturer",
    "vendor",
    "category",
    "unit",
    "seo",
    "cross_selling",
    "attributes",
    "accessories",
    "selection_lists",
    "reviews",
    "variants",
)


def _members(source: RecordCollection) -> list[Any]:
    """Flatten a collection accessor result into an ordered list."""
    if source is None or isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
        return []
    if isinstance(source, Mapping):
        return list(source.values())
    return list(source)


class ProductRelations:
    """Resolves the relations of an already authorized product.

    Args:
        services: Access services used to re-check related entities.
        recheck_collections: Apply the visibility policy to every member of
            the product collections and drop denied members.
    """

    def __init__(self, services: CatalogServices, *, recheck_collections: bool = False) -> None:
        self._services = services
        self._recheck_collections = recheck_collections

    @classmethod
    def from_config(cls, services: CatalogServices, config: CatalogConfig) -> ProductRelations:
        return cls(services, recheck_collections=config.strict_collection_visibility)

    # ── Value objects ───────────────────────────────────

    async def dimensions(self, ctx: RequestContext, product: Product) -> ProductDimensions:
        return ProductDimensions.from_record(product.record)

    async def price(self, ctx: RequestContext, product: Product) -> Price:
        return Price.from_record(product.record, "price")

    async def list_price(self, ctx: RequestContext, product: Product) -> Optional[Price]:
        """Recommended retail price, ``None`` when the product has none."""
        if product.record.field("list_price") in (None, ""):
            return None
        return Price.from_record(product.record, "list_price")

    async def stock(self, ctx: RequestContext, product: Product) -> ProductStock:
        return ProductStock.from_record(product.record)

    async def image_gallery(self, ctx: RequestContext, product: Product) -> ProductImageGallery:
        return ProductImageGallery.from_record(product.record)

    async def rating(self, ctx: RequestContext, product: Product) -> ProductRating:
        return ProductRating.from_record(product.record)

    async def delivery_time(self, ctx: RequestContext, product: Product) -> ProductDeliveryTime:
        return ProductDeliveryTime.from_record(product.record)

    async def unit(self, ctx: RequestContext, product: Product) -> Optional[ProductUnit]:
        return ProductUnit.from_record(product.record)

    async def seo(self, ctx: RequestContext, product: Product) -> Seo:
        return Seo.from_record(product.record)

    async def scale_prices(self, ctx: RequestContext, product: Product) -> list[ProductScalePrice]:
        tiers = await product.record.amount_price_tiers()
        return [ProductScalePrice.from_record(tier) for tier in _members(tiers)]

    # ── Single access-controlled entities ───────────────

    async def bundle_product(self, ctx: RequestContext, product: Product) -> Optional[Product]:
        bundle_id = product.bundle_id
        if not bundle_id:
            return None
        return await self._absent_on_denial(
            ctx,
            "bundle_product",
            self._services.products.get_by_id(ctx, bundle_id),
        )

    async def manufacturer(self, ctx: RequestContext, product: Product) -> Optional[Manufacturer]:
        record = await product.record.manufacturer()
        return await self._related(ctx, "manufacturer", record, self._services.manufacturers)

    async def vendor(self, ctx: RequestContext, product: Product) -> Optional[Vendor]:
        record = await product.record.vendor()
        return await self._related(ctx, "vendor", record, self._services.vendors)

    async def category(self, ctx: RequestContext, product: Product) -> Optional[Category]:
        record = await product.record.category()
        if record is None or not record.id:
            return None
        return await self._related(ctx, "category", record, self._services.categories)

    # ── Product collections ─────────────────────────────

    async def cross_selling(self, ctx: RequestContext, product: Product) -> list[Product]:
        return await self._products(ctx, await product.record.cross_selling())

    async def accessories(self, ctx: RequestContext, product: Product) -> list[Product]:
        return await self._products(ctx, await product.record.accessories())

    async def variants(self, ctx: RequestContext, product: Product) -> list[Product]:
        return await self._products(ctx, await product.record.variants())

    # ── Parent-scoped collections ───────────────────────

    async def attributes(self, ctx: RequestContext, product: Product) -> list[ProductAttribute]:
        """Attribute values in source order.

        When the source keys its attributes, each value keeps its key.
        """
        source = await product.record.attributes()
        if isinstance(source, Mapping):
            return [ProductAttribute(record, key=str(key)) for key, record in source.items()]
        return [ProductAttribute(record) for record in _members(source)]

    async def reviews(self, ctx: RequestContext, product: Product) -> list[Review]:
        return [Review(record) for record in _members(await product.record.reviews())]

    async def selection_lists(self, ctx: RequestContext, product: Product) -> list[SelectionList]:
        return [SelectionList.from_record(record) for record in _members(await product.record.selections())]

    # ── Batch ───────────────────────────────────────────

    async def resolve(self, ctx: RequestContext, product: Product, *names: str) -> dict[str, Any]:
        """Resolve several relations concurrently.

        Args:
            names: Relation names from :data:`RELATION_NAMES`; all of them
                when none are given.

        Every relation settles before this returns: a failing relation does
        not cut its siblings short, and no resolution outlives the call. If
        the call itself is cancelled, the pending resolutions are cancelled
        with it.

        Returns:
            Mapping of relation name to its resolved value.

        Raises:
            ValueError: If a name is not a known relation.
            Exception: The first hard error, in ``names`` order, once all
                relations have settled.
        """
        names = names or RELATION_NAMES
        unknown = [name for name in names if name not in RELATION_NAMES]
        if unknown:
            raise ValueError(f"Unknown product relation(s): {', '.join(unknown)}")

        tasks = [asyncio.create_task(getattr(self, name)(ctx, product)) for name in names]
        try:
            values = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        for name, value in zip(names, values):
            if isinstance(value, BaseException):
                get_request_logger(__name__, ctx).debug("Relation %s failed: %r", name, value)
                raise value
        return dict(zip(names, values))

    # ── Helpers ─────────────────────────────────────────

    async def _related(
        self,
        ctx: RequestContext,
        name: str,
        record: Optional[Record],
        service: AccessService[E],
    ) -> Optional[E]:
        if record is None:
            return None
        entity = service.wrap(record)
        return await self._absent_on_denial(ctx, name, service.authorize(ctx, entity))

    async def _absent_on_denial(self, ctx: RequestContext, name: str, lookup: Awaitable[E]) -> Optional[E]:
        try:
            return await lookup
        except (EntityNotFound, Unauthorized) as e:
            get_request_logger(__name__, ctx).debug("Relation %s resolved as absent: [%s] %s", name, e.code, e.message)
            return None

    async def _products(self, ctx: RequestContext, source: RecordCollection) -> list[Product]:
        products = [Product(record) for record in _members(source)]
        if not self._recheck_collections:
            return products

        visible = []
        for member in products:
            if await self._absent_on_denial(ctx, "collection member", self._services.products.authorize(ctx, member)):
                visible.append(member)
        return visible


__all__ = ["RELATION_NAMES", "ProductRelations"]
