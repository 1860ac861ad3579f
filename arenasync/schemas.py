from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from arenasync.models import Platform

if TYPE_CHECKING:
    from arenasync import models

# Raw form input: parsed leniently, so anything JSON can carry is accepted
RawNumber = str | float | int | None


class Tab(StrEnum):
    NEW = "new"
    LIST = "list"
    SETTINGS = "settings"


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


class InventoryItemRead(BaseModel):
    id: UUID
    name: str
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class InventoryItemCreate(BaseModel):
    name: str = ""
    price: RawNumber = None


class PriceStage(BaseModel):
    price: RawNumber = None


class InventoryRowRead(InventoryItemRead):
    staged_price: RawNumber = None


class InventoryRead(BaseModel):
    items: list[InventoryRowRead]
    draft: InventoryItemCreate
    booking_count: int
    inventory_count: int
    processing: bool


# ---------------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------------


class SelectedDrink(BaseModel):
    drink_id: UUID
    quantity: int = Field(ge=1)
    price_at_time: Decimal


class ExtraHours(BaseModel):
    enabled: bool = False
    duration: Decimal = Decimal("0")  # hours, informational only
    amount: Decimal = Decimal("0")  # flat fee


class BookingCreate(BaseModel):
    """What the store receives: the total is already computed by the desk."""

    customer_name: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    platform: Platform
    booking_amount: Decimal
    selected_drinks: list[SelectedDrink] = Field(default_factory=list)
    extra_hours: ExtraHours = Field(default_factory=ExtraHours)
    total_amount: Decimal


class BookingRead(BaseModel):
    id: UUID
    customer_name: str
    phone_number: str
    platform: Platform
    booking_amount: Decimal
    selected_drinks: list[SelectedDrink]
    extra_hours: ExtraHours
    total_amount: Decimal
    timestamp: datetime

    @classmethod
    def from_row(cls, row: models.Booking) -> BookingRead:
        """Map a stored booking (drink lines prefetched) to the desk's shape."""
        lines = sorted(row.drinks, key=lambda d: d.id)
        return cls(
            id=row.id,
            customer_name=row.customer_name,
            phone_number=row.phone_number,
            platform=row.platform,
            booking_amount=row.booking_amount,
            selected_drinks=[
                SelectedDrink(
                    drink_id=d.drink_id,
                    quantity=d.quantity,
                    price_at_time=d.price_at_time,
                )
                for d in lines
            ],
            extra_hours=ExtraHours(
                enabled=row.extra_hours_enabled,
                duration=row.extra_hours_duration,
                amount=row.extra_hours_amount,
            ),
            total_amount=row.total_amount,
            timestamp=row.created_at,
        )


class BookingFilters(BaseModel):
    """Bind to a FastAPI route via Depends(BookingFilters)."""

    search: str = ""
    platform: str = "all"  # a Platform value or the "all" sentinel


class BookingStats(BaseModel):
    count: int
    revenue: Decimal
    average: int


class BookingListRead(BaseModel):
    bookings: list[BookingRead]
    stats: BookingStats
    expanded_id: UUID | None


class ExpansionRead(BaseModel):
    expanded_id: UUID | None


class DrinkLineBreakdown(BaseModel):
    drink_id: UUID
    name: str
    quantity: int
    price_at_time: Decimal
    subtotal: Decimal


class BookingBreakdown(BaseModel):
    booking_id: UUID
    platform: Platform
    platform_amount: Decimal
    extra_hours: ExtraHours | None  # None when extra hours were not booked
    drinks: list[DrinkLineBreakdown]
    drinks_total: Decimal
    total_amount: Decimal


# ---------------------------------------------------------------------------
# New-booking form
# ---------------------------------------------------------------------------


class DrinkLine(BaseModel):
    line_id: str
    drink_id: UUID
    quantity: int
    price_at_time: Decimal


class DrinkLineUpdate(BaseModel):
    drink_id: UUID | None = None
    quantity: RawNumber = None


class BookingDraftUpdate(BaseModel):
    """Partial update of the form; only fields present in the payload change."""

    customer_name: str | None = None
    phone_number: str | None = None
    platform: Platform | None = None
    booking_amount: RawNumber = None
    extra_hours_enabled: bool | None = None
    extra_hours_duration: RawNumber = None
    extra_hours_amount: RawNumber = None


class BookingDraftRead(BaseModel):
    customer_name: str
    phone_number: str
    platform: Platform
    booking_amount: RawNumber
    extra_hours_enabled: bool
    extra_hours_duration: RawNumber
    extra_hours_amount: RawNumber
    lines: list[DrinkLine]
    total_amount: Decimal
    submitting: bool


# ---------------------------------------------------------------------------
# Session and dashboard
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionRead(BaseModel):
    name: str


class TabUpdate(BaseModel):
    tab: Tab


class DashboardRead(BaseModel):
    user: str
    active_tab: Tab
    loading: bool
    error: str | None
    booking_count: int
    inventory_count: int
