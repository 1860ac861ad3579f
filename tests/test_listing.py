from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from arenasync.listing import (
    UNKNOWN_ITEM,
    BookingListView,
    build_breakdown,
    filter_bookings,
    summarize,
)
from arenasync.schemas import ExtraHours

from .factories import (
    BOOKING_ID,
    OTHER_BOOKING_ID,
    WATER_ID,
    booking,
    inventory_item,
    other_booking,
    selected_drink,
    soda,
)

BOOKINGS = [booking(), other_booking()]  # newest first


class TestFilter:
    def test_empty_search_and_all_platforms_returns_everything_in_order(self):
        result = filter_bookings(BOOKINGS, "", "all")
        assert [b.id for b in result] == [BOOKING_ID, OTHER_BOOKING_ID]

    def test_all_sentinel_is_case_insensitive(self):
        assert len(filter_bookings(BOOKINGS, "", "All")) == 2

    def test_name_match_ignores_case(self):
        result = filter_bookings(BOOKINGS, "PRIYA")
        assert [b.id for b in result] == [OTHER_BOOKING_ID]

    def test_phone_match_is_raw_substring(self):
        assert [b.id for b in filter_bookings(BOOKINGS, "98450")] == [OTHER_BOOKING_ID]
        assert filter_bookings(BOOKINGS, "9845012345") == []

    def test_platform_filter_combines_with_search(self):
        assert [b.id for b in filter_bookings(BOOKINGS, "", "Offline")] == [BOOKING_ID]
        assert filter_bookings(BOOKINGS, "Rahul", "PlayO") == []

    @pytest.mark.parametrize("platform", ["playo", "PLAYO", "PlayO"])
    def test_platform_value_ignores_case(self, platform):
        assert [b.id for b in filter_bookings(BOOKINGS, "", platform)] == [OTHER_BOOKING_ID]


class TestSummarize:
    def test_stats_over_filtered_set(self):
        stats = summarize(BOOKINGS)
        assert stats.count == 2
        assert stats.revenue == Decimal("1700")
        assert stats.average == 850

    def test_average_rounds_half_up(self):
        stats = summarize([booking(total_amount=Decimal("100")), booking(total_amount=Decimal("101"))])
        assert stats.average == 101

    def test_empty_selection_has_zero_average(self):
        stats = summarize([])
        assert stats.count == 0
        assert stats.revenue == Decimal("0")
        assert stats.average == 0


class TestBreakdown:
    def test_scenario_booking_breakdown(self):
        result = build_breakdown(booking(), [inventory_item(), soda()])
        assert result.platform_amount == Decimal("500")
        assert result.extra_hours is None
        assert result.drinks[0].name == "Water"
        assert result.drinks[0].subtotal == Decimal("100")
        assert result.drinks_total == Decimal("100")
        assert result.total_amount == Decimal("600")

    def test_extra_hours_detail_when_enabled(self):
        result = build_breakdown(other_booking(), [])
        assert result.extra_hours == ExtraHours(
            enabled=True, duration=Decimal("1.5"), amount=Decimal("300")
        )
        assert result.drinks == []
        assert result.drinks_total == Decimal("0")

    def test_deleted_item_renders_placeholder_with_snapshot_price(self):
        b = booking(selected_drinks=[selected_drink(drink_id=uuid4())])
        result = build_breakdown(b, [inventory_item()])
        assert result.drinks[0].name == UNKNOWN_ITEM
        assert result.drinks[0].price_at_time == Decimal("50")
        assert result.total_amount == Decimal("600")

    def test_names_come_from_current_inventory_prices_from_snapshot(self):
        renamed = inventory_item(id=WATER_ID, name="Mineral Water", price=Decimal("70"))
        result = build_breakdown(booking(), [renamed])
        assert result.drinks[0].name == "Mineral Water"
        assert result.drinks[0].price_at_time == Decimal("50")


class TestExpansion:
    def test_toggle_is_single_select(self):
        view = BookingListView()
        assert view.toggle(BOOKING_ID) == BOOKING_ID
        assert view.toggle(OTHER_BOOKING_ID) == OTHER_BOOKING_ID
        assert view.toggle(OTHER_BOOKING_ID) is None
