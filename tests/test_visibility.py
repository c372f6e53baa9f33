"""Tests for the visibility policy and the kind → capability table."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from catalogcore import (
    VIEW_INACTIVE_CAPABILITIES,
    Capabilities,
    ConfigurationError,
    EntityKind,
    MemoryRecord,
    Visibility,
    decide,
    view_inactive_capability,
)
from catalogcore.entities import Category, Product
from catalogcore.entities.base import as_datetime, as_flag


class TestDecide:
    """decide() is the single policy function."""

    @pytest.mark.parametrize(
        ("active", "held", "expected"),
        [
            (True, False, Visibility.EXPOSE),
            (True, True, Visibility.EXPOSE),
            (False, True, Visibility.EXPOSE),
            (False, False, Visibility.DENY),
        ],
    )
    def test_truth_table(self, active: bool, held: bool, expected: Visibility) -> None:
        assert decide(active, held) is expected


class TestCapabilityTable:
    def test_every_kind_is_mapped(self) -> None:
        """The lookup table is total over EntityKind."""
        assert set(VIEW_INACTIVE_CAPABILITIES) == set(EntityKind)

    def test_capabilities_are_distinct(self) -> None:
        values = list(VIEW_INACTIVE_CAPABILITIES.values())
        assert len(values) == len(set(values))

    def test_product_capability(self) -> None:
        assert view_inactive_capability(EntityKind.PRODUCT) == Capabilities.VIEW_INACTIVE_PRODUCT

    def test_kind_by_value(self) -> None:
        assert view_inactive_capability("vendor") == Capabilities.VIEW_INACTIVE_VENDOR

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            view_inactive_capability("wishlist")
        assert exc_info.value.code == "CONFIGURATION_ERROR"


class TestEntityActivity:
    """Entity.is_active(): flag first, then the activity window."""

    def test_flag_variants(self) -> None:
        assert as_flag(True)
        assert as_flag(1)
        assert as_flag("1")
        assert as_flag(" Yes ")
        assert not as_flag("0")
        assert not as_flag("")
        assert not as_flag(None)

    def test_zero_date_is_none(self) -> None:
        assert as_datetime("0000-00-00 00:00:00") is None
        assert as_datetime("") is None

    def test_unparseable_timestamp_is_none(self) -> None:
        assert as_datetime("n/a") is None
        assert as_datetime("2018-13-45") is None

    def test_naive_timestamp_is_utc(self) -> None:
        parsed = as_datetime("2018-01-01 12:00:00")
        assert parsed == datetime(2018, 1, 1, 12, tzinfo=timezone.utc)

    def test_active_flag(self) -> None:
        assert Product(MemoryRecord("p", {"active": True})).is_active()
        assert not Product(MemoryRecord("p", {"active": False})).is_active()
        assert not Product(MemoryRecord("p")).is_active()

    def test_window_boundaries(self) -> None:
        category = Category(
            MemoryRecord(
                "c",
                {"active": "0", "active_from": "2018-01-01 12:00:00", "active_to": "2018-01-01 19:00:00"},
            )
        )
        assert category.is_active(datetime(2018, 1, 1, 12, tzinfo=timezone.utc))
        assert category.is_active(datetime(2018, 1, 1, 15, tzinfo=timezone.utc))
        assert category.is_active(datetime(2018, 1, 1, 19, tzinfo=timezone.utc))
        assert not category.is_active(datetime(2018, 1, 1, 19, 0, 1, tzinfo=timezone.utc))
        assert not category.is_active(datetime(2018, 1, 1, 11, 59, tzinfo=timezone.utc))

    def test_half_open_window_is_inactive(self) -> None:
        category = Category(MemoryRecord("c", {"active": "0", "active_from": "2018-01-01 12:00:00"}))
        assert not category.is_active(datetime(2030, 1, 1, tzinfo=timezone.utc))

    def test_entity_kind_and_repr(self) -> None:
        product = Product(MemoryRecord("P9"))
        assert product.kind is EntityKind.PRODUCT
        assert repr(product) == "Product(id='P9')"
