"""Shared fixtures: a small in-memory catalog and request-context helpers."""

from __future__ import annotations

from typing import Callable

import pytest

from catalogcore import (
    CatalogServices,
    EntityKind,
    MemoryGateway,
    MemoryRecord,
    ProductRelations,
    RequestContext,
    StaticAuthorizationOracle,
)


def make_context(*capabilities: str, shop_id: str = "1", language_id: int = 0) -> RequestContext:
    """Request context for a caller holding exactly ``capabilities``."""
    return RequestContext(
        oracle=StaticAuthorizationOracle(capabilities),
        shop_id=shop_id,
        language_id=language_id,
        request_id="test-request",
    )


def build_catalog() -> MemoryGateway:
    """Catalog used across the test suite.

    Products:
        P1: active, no bundle, active manufacturer/vendor/category, full data
        P2: inactive
        P3: active, category with empty id
        P4: active, bundles inactive P2, inactive manufacturer
        P5: active, bundles a product that does not exist
        P6: active, bundles P1
    """
    gateway = MemoryGateway()

    acme = MemoryRecord("m-acme", {"active": True, "title": "ACME"})
    shady = MemoryRecord("m-shady", {"active": False, "title": "Shady Corp"})
    gateway.add(EntityKind.MANUFACTURER, acme, shady)

    vendor = MemoryRecord("v-fashion", {"active": "1", "title": "https://fashioncity.com/de"})
    gateway.add(EntityKind.VENDOR, vendor)

    kites = MemoryRecord("c-kites", {"active": True, "title": "Kites"})
    gateway.add(EntityKind.CATEGORY, kites)

    variant_a = MemoryRecord("P1-a", {"active": True, "title": "Kite A"})
    variant_b = MemoryRecord("P1-b", {"active": False, "title": "Kite B"})

    p1 = MemoryRecord(
        "P1",
        {
            "active": True,
            "title": "Kite Core",
            "sku": "KC-1",
            "price": 359.0,
            "list_price": 399.0,
            "vat": 19.0,
            "length": 1.2,
            "width": 0.5,
            "height": 0.3,
            "weight": 4.5,
            "stock": 12,
            "stock_flag": 1,
            "rating": 4.5,
            "rating_count": 2,
            "unit_price": 35.9,
            "unit_name": "kg",
            "unit_quantity": 10,
            "images": ["kite_1.jpg", "", "kite_2.jpg"],
            "icon": "kite_ico.jpg",
            "seo_url": "/kites/kite-core.html",
        },
        links={
            "manufacturer": acme,
            "vendor": vendor,
            "category": kites,
            "variants": [variant_a, variant_b],
            "attributes": {
                "attr-size": MemoryRecord("attr-size", {"title": "Size", "value": "9m"}),
                "attr-color": MemoryRecord("attr-color", {"title": "Color", "value": "red"}),
            },
            "reviews": [
                MemoryRecord("r1", {"active": True, "text": "Great kite", "rating": 5}),
                MemoryRecord("r2", {"active": True, "text": "Fine", "rating": 4}),
            ],
            "selections": [MemoryRecord("sel-1", {"title": "Size", "options": ["7m", "9m", "12m"]})],
            "amount_price_tiers": [
                MemoryRecord("t1", {"amount_from": 1, "amount_to": 4, "absolute_price": 350.0}),
                MemoryRecord("t2", {"amount_from": 5, "amount_to": 99, "discount": 10.0}),
            ],
            "cross_selling": [variant_a],
        },
    )
    p2 = MemoryRecord("P2", {"active": False, "title": "Retired Kite"})
    p3 = MemoryRecord(
        "P3",
        {"active": True, "title": "Board"},
        links={"category": MemoryRecord("", {"active": True, "title": "Broken"})},
    )
    p4 = MemoryRecord(
        "P4",
        {"active": True, "title": "Bundle with retired kite", "bundle_id": "P2"},
        links={"manufacturer": shady, "category": kites},
    )
    p5 = MemoryRecord("P5", {"active": True, "title": "Bundle with ghost", "bundle_id": "does-not-exist"})
    p6 = MemoryRecord("P6", {"active": True, "title": "Bundle with Kite Core", "bundle_id": "P1"})
    gateway.add(EntityKind.PRODUCT, p1, p2, p3, p4, p5, p6, variant_a, variant_b)

    return gateway


@pytest.fixture
def gateway() -> MemoryGateway:
    return build_catalog()


@pytest.fixture
def services(gateway: MemoryGateway) -> CatalogServices:
    return CatalogServices.from_gateway(gateway)


@pytest.fixture
def relations(services: CatalogServices) -> ProductRelations:
    return ProductRelations(services)


@pytest.fixture
def ctx_factory() -> Callable[..., RequestContext]:
    return make_context
