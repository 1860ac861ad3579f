from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from arenasync.pricing import ZERO, average, drinks_total
from arenasync.schemas import (
    BookingBreakdown,
    BookingRead,
    BookingStats,
    DrinkLineBreakdown,
    InventoryItemRead,
)

ALL_PLATFORMS = "all"
UNKNOWN_ITEM = "Unknown Item"


def matches(booking: BookingRead, search: str, platform: str) -> bool:
    """
    Case-insensitive match on the customer name or a raw substring match on
    the phone number, combined with a platform match unless "all". Platform
    values and the "all" sentinel both ignore case.
    """
    hit = search.lower() in booking.customer_name.lower() or search in booking.phone_number
    platform = platform.lower()
    if platform == ALL_PLATFORMS:
        return hit
    return hit and booking.platform.lower() == platform


def filter_bookings(
    bookings: Sequence[BookingRead], search: str = "", platform: str = ALL_PLATFORMS
) -> list[BookingRead]:
    return [b for b in bookings if matches(b, search, platform)]


def summarize(bookings: Sequence[BookingRead]) -> BookingStats:
    revenue = sum((b.total_amount for b in bookings), ZERO)
    return BookingStats(
        count=len(bookings),
        revenue=revenue,
        average=average(revenue, len(bookings)),
    )


def build_breakdown(
    booking: BookingRead, inventory: Sequence[InventoryItemRead]
) -> BookingBreakdown:
    """Split a booking into platform fee, extra hours and drink lines."""
    names: dict[UUID, str] = {i.id: i.name for i in inventory}
    drinks = [
        DrinkLineBreakdown(
            drink_id=d.drink_id,
            name=names.get(d.drink_id, UNKNOWN_ITEM),
            quantity=d.quantity,
            price_at_time=d.price_at_time,
            subtotal=d.price_at_time * d.quantity,
        )
        for d in booking.selected_drinks
    ]
    return BookingBreakdown(
        booking_id=booking.id,
        platform=booking.platform,
        platform_amount=booking.booking_amount,
        extra_hours=booking.extra_hours if booking.extra_hours.enabled else None,
        drinks=drinks,
        drinks_total=drinks_total(booking.selected_drinks),
        total_amount=booking.total_amount,
    )


class BookingListView:
    """The single expanded row of the list section."""

    def __init__(self) -> None:
        self.expanded_id: UUID | None = None

    def toggle(self, booking_id: UUID) -> UUID | None:
        # expanding one row collapses whichever row was open
        self.expanded_id = None if self.expanded_id == booking_id else booking_id
        return self.expanded_id
