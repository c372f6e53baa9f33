"""Value objects built from a product record.

Value objects carry no activity notion: they are visible whenever the
product they were built from is visible. Each ``from_record`` reads
fields only and never fails on missing data.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..gateway.base import Record
from .base import as_datetime, as_flag


def _float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    return float(value)


class ProductDimensions(BaseModel):
    """Physical dimensions."""

    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    weight: float = 0.0

    @classmethod
    def from_record(cls, record: Record) -> ProductDimensions:
        return cls(
            length=_float(record.field("length")),
            width=_float(record.field("width")),
            height=_float(record.field("height")),
            weight=_float(record.field("weight")),
        )


class Price(BaseModel):
    """A price with its VAT rate."""

    price: float = 0.0
    vat: float = 0.0
    nett: bool = False

    @property
    def vat_value(self) -> float:
        if self.nett:
            return round(self.price * self.vat / 100, 2)
        return round(self.price - self.price / (1 + self.vat / 100), 2)

    @classmethod
    def from_record(cls, record: Record, field: str = "price") -> Price:
        return cls(
            price=_float(record.field(field)),
            vat=_float(record.field("vat")),
            nett=as_flag(record.field("price_is_nett", False)),
        )


class ProductStock(BaseModel):
    """Stock level and availability flags."""

    stock: float = 0.0
    stock_flag: int = 1
    restock_date: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Record) -> ProductStock:
        stock_flag = record.field("stock_flag")
        return cls(
            stock=_float(record.field("stock")),
            stock_flag=1 if stock_flag in (None, "") else int(stock_flag),
            restock_date=as_datetime(record.field("restock_date")),
        )


class ProductImageGallery(BaseModel):
    """Image URLs of a product."""

    images: list[str] = Field(default_factory=list)
    icon: str = ""
    thumb: str = ""

    @classmethod
    def from_record(cls, record: Record) -> ProductImageGallery:
        return cls(
            images=[image for image in (record.field("images") or []) if image],
            icon=record.field("icon") or "",
            thumb=record.field("thumb") or "",
        )


class ProductRating(BaseModel):
    """Average rating and number of ratings."""

    rating: float = 0.0
    count: int = 0

    @classmethod
    def from_record(cls, record: Record) -> ProductRating:
        return cls(
            rating=_float(record.field("rating")),
            count=int(record.field("rating_count") or 0),
        )


class ProductDeliveryTime(BaseModel):
    """Delivery time range."""

    min_delivery_time: int = 0
    max_delivery_time: int = 0
    delivery_time_unit: str = ""

    @classmethod
    def from_record(cls, record: Record) -> ProductDeliveryTime:
        return cls(
            min_delivery_time=int(record.field("min_delivery_time") or 0),
            max_delivery_time=int(record.field("max_delivery_time") or 0),
            delivery_time_unit=record.field("delivery_time_unit") or "",
        )


class ProductUnit(BaseModel):
    """Price per unit (e.g. per litre)."""

    price: float
    name: str = ""
    quantity: float = 0.0

    @classmethod
    def from_record(cls, record: Record) -> Optional[ProductUnit]:
        """Return ``None`` when the product has no unit price."""
        unit_price = _float(record.field("unit_price"))
        if not unit_price:
            return None
        return cls(
            price=unit_price,
            name=record.field("unit_name") or "",
            quantity=_float(record.field("unit_quantity")),
        )


class Seo(BaseModel):
    """SEO data."""

    description: str = ""
    keywords: str = ""
    url: str = ""

    @classmethod
    def from_record(cls, record: Record) -> Seo:
        return cls(
            description=record.field("seo_description") or "",
            keywords=record.field("seo_keywords") or "",
            url=record.field("seo_url") or "",
        )


class ProductScalePrice(BaseModel):
    """Price tier for a purchase amount range.

    A tier carries either an absolute price or a percentage discount.
    """

    amount_from: float = 0.0
    amount_to: float = 0.0
    absolute_price: Optional[float] = None
    discount: Optional[float] = None

    @property
    def is_absolute(self) -> bool:
        return self.absolute_price is not None

    @classmethod
    def from_record(cls, record: Record) -> ProductScalePrice:
        absolute = record.field("absolute_price")
        discount = record.field("discount")
        return cls(
            amount_from=_float(record.field("amount_from")),
            amount_to=_float(record.field("amount_to")),
            absolute_price=None if absolute is None else float(absolute),
            discount=None if discount is None else float(discount),
        )


class SelectionList(BaseModel):
    """Selection list (e.g. sizes) a customer picks a value from."""

    title: str = ""
    options: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: Record) -> SelectionList:
        return cls(
            title=record.field("title") or "",
            options=list(record.field("options") or []),
        )


__all__ = [
    "Price",
    "ProductDeliveryTime",
    "ProductDimensions",
    "ProductImageGallery",
    "ProductRating",
    "ProductScalePrice",
    "ProductStock",
    "ProductUnit",
    "Seo",
    "SelectionList",
]
