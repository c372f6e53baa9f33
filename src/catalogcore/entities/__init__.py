"""Entity wrappers and value objects exposed by the catalog."""

from .base import Entity
from .catalog import (
    Attribute,
    Category,
    Manufacturer,
    Product,
    ProductAttribute,
    Review,
    Vendor,
)
from .values import (
    Price,
    ProductDeliveryTime,
    ProductDimensions,
    ProductImageGallery,
    ProductRating,
    ProductScalePrice,
    ProductStock,
    ProductUnit,
    Seo,
    SelectionList,
)

__all__ = [
    "Attribute",
    "Category",
    "Entity",
    "Manufacturer",
    "Price",
    "Product",
    "ProductAttribute",
    "ProductDeliveryTime",
    "ProductDimensions",
    "ProductImageGallery",
    "ProductRating",
    "ProductScalePrice",
    "ProductStock",
    "ProductUnit",
    "Review",
    "Seo",
    "SelectionList",
    "Vendor",
]
