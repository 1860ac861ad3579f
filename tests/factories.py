"""
All test-data builders in one place.
Import from here in every test file: never define dummy data inline.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

from arenasync.auth import StaticCredentialVerifier
from arenasync.controller import Desk
from arenasync.models import Platform
from arenasync.schemas import (
    BookingRead,
    ExtraHours,
    InventoryItemRead,
    SelectedDrink,
)
from arenasync.session import DeskUser
from arenasync.sync import Snapshot

# ---------------------------------------------------------------------------
# Stable IDs: use these when a specific, repeatable UUID is needed.
# Call uuid4() inline when you need a fresh one per test.
# ---------------------------------------------------------------------------

WATER_ID: UUID = uuid4()
SODA_ID: UUID = uuid4()
BOOKING_ID: UUID = uuid4()
OTHER_BOOKING_ID: UUID = uuid4()

NOW = datetime(2026, 6, 1, 10, 0, 0, tzinfo=UTC)
EARLIER = NOW - timedelta(hours=2)

USERNAME = "admin"
PASSWORD = "arena2024"


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------


def inventory_item(**overrides) -> InventoryItemRead:
    base = dict(id=WATER_ID, name="Water", price=Decimal("50"))
    return InventoryItemRead(**{**base, **overrides})


def soda(**overrides) -> InventoryItemRead:
    return inventory_item(**{"id": SODA_ID, "name": "Soda", "price": Decimal("40"), **overrides})


def selected_drink(**overrides) -> SelectedDrink:
    base = dict(drink_id=WATER_ID, quantity=2, price_at_time=Decimal("50"))
    return SelectedDrink(**{**base, **overrides})


def booking(**overrides) -> BookingRead:
    """Rahul's offline booking: 500 + 2 x 50 water, no extra hours = 600."""
    base = dict(
        id=BOOKING_ID,
        customer_name="Rahul",
        phone_number="999",
        platform=Platform.OFFLINE,
        booking_amount=Decimal("500"),
        selected_drinks=[selected_drink()],
        extra_hours=ExtraHours(),
        total_amount=Decimal("600"),
        timestamp=NOW,
    )
    return BookingRead(**{**base, **overrides})


def other_booking(**overrides) -> BookingRead:
    """Older PlayO booking with extra hours and no drinks."""
    base = dict(
        id=OTHER_BOOKING_ID,
        customer_name="Priya Nair",
        phone_number="+91 98450 12345",
        platform=Platform.PLAYO,
        booking_amount=Decimal("800"),
        selected_drinks=[],
        extra_hours=ExtraHours(enabled=True, duration=Decimal("1.5"), amount=Decimal("300")),
        total_amount=Decimal("1100"),
        timestamp=EARLIER,
    )
    return BookingRead(**{**base, **overrides})


# ---------------------------------------------------------------------------
# Collaborator mocks: no store, no redis
# ---------------------------------------------------------------------------


def mock_inventory_crud(items: list[InventoryItemRead] | None = None) -> MagicMock:
    mock = MagicMock()
    mock.list_items = AsyncMock(return_value=items if items is not None else [])
    mock.create_item = AsyncMock(return_value=inventory_item())
    mock.update_price = AsyncMock(return_value=True)
    mock.delete_item = AsyncMock(return_value=True)
    return mock


def mock_booking_crud(bookings: list[BookingRead] | None = None) -> MagicMock:
    mock = MagicMock()
    mock.list_bookings = AsyncMock(return_value=bookings if bookings is not None else [])
    mock.create_booking = AsyncMock(return_value=booking())
    return mock


def mock_storage(record: dict | None = None) -> MagicMock:
    mock = MagicMock()
    mock.load = AsyncMock(return_value=record)
    mock.save = AsyncMock()
    mock.clear = AsyncMock()
    return mock


def make_desk(
    inventory_crud=None,
    booking_crud=None,
    storage=None,
    verifier=None,
) -> Desk:
    """Logged-out desk wired to mocks."""
    return Desk(
        verifier=verifier or StaticCredentialVerifier(USERNAME, PASSWORD),
        storage=storage or mock_storage(),
        inventory_crud=inventory_crud or mock_inventory_crud(),
        booking_crud=booking_crud or mock_booking_crud(),
    )


def logged_in_desk(
    inventory: list[InventoryItemRead] | None = None,
    bookings: list[BookingRead] | None = None,
    **kwargs,
) -> Desk:
    """Desk with an active session and a loaded snapshot, no store calls made."""
    inventory = [inventory_item(), soda()] if inventory is None else inventory
    bookings = [booking(), other_booking()] if bookings is None else bookings
    kwargs.setdefault("inventory_crud", mock_inventory_crud(inventory))
    kwargs.setdefault("booking_crud", mock_booking_crud(bookings))
    desk = make_desk(**kwargs)
    desk.session.user = DeskUser(name=USERNAME)
    desk.sync.snapshot = Snapshot(inventory=list(inventory), bookings=list(bookings))
    return desk
