"""Catalog entity wrappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from ..gateway.base import Record
from ..visibility import EntityKind
from .base import Entity


@dataclass(frozen=True, repr=False)
class Product(Entity):
    """Root entity of the catalog."""

    kind: ClassVar[EntityKind] = EntityKind.PRODUCT

    @property
    def title(self) -> str:
        return self.record.field("title") or ""

    @property
    def sku(self) -> str:
        return self.record.field("sku") or ""

    @property
    def ean(self) -> str:
        return self.record.field("ean") or ""

    @property
    def short_description(self) -> str:
        return self.record.field("short_description") or ""

    @property
    def bundle_id(self) -> str:
        """Id of the bundled product, empty when none is set."""
        value = self.record.field("bundle_id")
        return "" if value is None else str(value)

    @property
    def parent_id(self) -> Optional[str]:
        return self.record.field("parent_id")


@dataclass(frozen=True, repr=False)
class Category(Entity):
    kind: ClassVar[EntityKind] = EntityKind.CATEGORY

    @property
    def title(self) -> str:
        return self.record.field("title") or ""

    @property
    def parent_id(self) -> Optional[str]:
        return self.record.field("parent_id")


@dataclass(frozen=True, repr=False)
class Manufacturer(Entity):
    kind: ClassVar[EntityKind] = EntityKind.MANUFACTURER

    @property
    def title(self) -> str:
        return self.record.field("title") or ""


@dataclass(frozen=True, repr=False)
class Vendor(Entity):
    kind: ClassVar[EntityKind] = EntityKind.VENDOR

    @property
    def title(self) -> str:
        return self.record.field("title") or ""


@dataclass(frozen=True, repr=False)
class Review(Entity):
    kind: ClassVar[EntityKind] = EntityKind.REVIEW

    @property
    def text(self) -> str:
        return self.record.field("text") or ""

    @property
    def rating(self) -> int:
        return int(self.record.field("rating") or 0)

    @property
    def user_id(self) -> Optional[str]:
        return self.record.field("user_id")


@dataclass(frozen=True, repr=False)
class Attribute(Entity):
    kind: ClassVar[EntityKind] = EntityKind.ATTRIBUTE

    @property
    def title(self) -> str:
        return self.record.field("title") or ""


@dataclass(frozen=True)
class ProductAttribute:
    """Attribute value attached to a product.

    Scoped to its product, so it has no visibility of its own. ``key`` is
    the identifier the source keyed the attribute by, when it did.
    """

    record: Record
    key: Optional[str] = None

    @property
    def attribute(self) -> Attribute:
        return Attribute(self.record)

    @property
    def value(self) -> str:
        return self.record.field("value") or ""


__all__ = [
    "Attribute",
    "Category",
    "Manufacturer",
    "Product",
    "ProductAttribute",
    "Review",
    "Vendor",
]
