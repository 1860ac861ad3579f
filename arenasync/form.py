from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from decimal import Decimal
from uuid import UUID, uuid4

from loguru import logger

from arenasync.crud import BookingCRUD
from arenasync.errors import (
    EmptyInventory,
    NotFound,
    OperationInProgress,
    StoreOperationFailed,
    ValidationFailed,
)
from arenasync.models import Platform
from arenasync.pricing import booking_total, to_amount, to_quantity
from arenasync.schemas import (
    BookingCreate,
    BookingDraftRead,
    BookingRead,
    DrinkLine,
    ExtraHours,
    InventoryItemRead,
    RawNumber,
    SelectedDrink,
)

EMPTY_INVENTORY_NOTICE = (
    "Inventory is empty! Go to the 'Settings' tab to add items (e.g. Water, Soda) first."
)
MISSING_DETAILS = "Please fill in basic customer details."
SAVE_FAILED = "Failed to save booking."

_CHOICE_FIELDS = {"customer_name", "phone_number", "platform", "extra_hours_enabled"}
# blank numeric input is kept and read as 0
_NUMERIC_FIELDS = {"booking_amount", "extra_hours_duration", "extra_hours_amount"}


class BookingForm:
    """
    The New-Booking draft. Numeric fields keep whatever staff typed and are
    parsed leniently when the total is computed or the booking is saved.
    """

    def __init__(self) -> None:
        self.submitting = False
        self.reset()

    def reset(self) -> None:
        self.customer_name = ""
        self.phone_number = ""
        self.platform = Platform.PLAYO
        self.booking_amount: RawNumber = 0
        self.extra_hours_enabled = False
        self.extra_hours_duration: RawNumber = 0
        self.extra_hours_amount: RawNumber = 0
        self.lines: list[DrinkLine] = []

    @property
    def total(self) -> Decimal:
        return booking_total(
            self.booking_amount,
            self.lines,
            self.extra_hours_enabled,
            self.extra_hours_amount,
        )

    def update(self, changes: dict) -> None:
        for name, value in changes.items():
            if name in _NUMERIC_FIELDS or (name in _CHOICE_FIELDS and value is not None):
                setattr(self, name, value)

    # -- drink lines ---------------------------------------------------------

    def line(self, line_id: str) -> DrinkLine:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        raise NotFound(f"Drink line {line_id} not found")

    def add_drink(self, inventory: Sequence[InventoryItemRead]) -> DrinkLine:
        if not inventory:
            raise EmptyInventory(EMPTY_INVENTORY_NOTICE)
        first = inventory[0]
        line = DrinkLine(
            line_id=uuid4().hex,
            drink_id=first.id,
            quantity=1,
            price_at_time=first.price,
        )
        self.lines.append(line)
        return line

    def select_drink(
        self,
        line_id: str,
        drink_id: UUID,
        inventory: Sequence[InventoryItemRead],
    ) -> DrinkLine:
        """Point a line at another item, re-snapshotting its current price."""
        line = self.line(line_id)
        item = next((i for i in inventory if i.id == drink_id), None)
        if item is None:
            return line
        line.drink_id = item.id
        line.price_at_time = item.price
        return line

    def set_quantity(self, line_id: str, quantity: RawNumber) -> DrinkLine:
        line = self.line(line_id)
        line.quantity = to_quantity(quantity)
        return line

    def remove_drink(self, line_id: str) -> None:
        line = self.line(line_id)
        self.lines.remove(line)

    # -- submission ----------------------------------------------------------

    def validate(self) -> None:
        if not self.customer_name.strip() or not self.phone_number.strip():
            raise ValidationFailed(MISSING_DETAILS)

    def to_create(self) -> BookingCreate:
        return BookingCreate(
            customer_name=self.customer_name,
            phone_number=self.phone_number,
            platform=self.platform,
            booking_amount=to_amount(self.booking_amount),
            selected_drinks=[
                SelectedDrink(
                    drink_id=line.drink_id,
                    quantity=line.quantity,
                    price_at_time=line.price_at_time,
                )
                for line in self.lines
            ],
            extra_hours=ExtraHours(
                enabled=self.extra_hours_enabled,
                duration=to_amount(self.extra_hours_duration),
                amount=to_amount(self.extra_hours_amount),
            ),
            total_amount=self.total,
        )

    async def submit(
        self,
        bookings: BookingCRUD,
        on_saved: Callable[[], Awaitable[object]],
    ) -> BookingRead:
        """
        Validate, save, then reset the draft and refetch.
        On a store failure the draft is left exactly as staff entered it.
        """
        if self.submitting:
            raise OperationInProgress("This booking is already being saved.")
        self.validate()
        payload = self.to_create()

        self.submitting = True
        try:
            booking = await bookings.create_booking(payload)
        except Exception as exc:
            logger.exception("Saving booking for {} failed", self.customer_name)
            raise StoreOperationFailed(SAVE_FAILED) from exc
        finally:
            self.submitting = False

        logger.info("Saved booking {} total={}", booking.id, booking.total_amount)
        self.reset()
        await on_saved()
        return booking

    def read(self) -> BookingDraftRead:
        return BookingDraftRead(
            customer_name=self.customer_name,
            phone_number=self.phone_number,
            platform=self.platform,
            booking_amount=self.booking_amount,
            extra_hours_enabled=self.extra_hours_enabled,
            extra_hours_duration=self.extra_hours_duration,
            extra_hours_amount=self.extra_hours_amount,
            lines=list(self.lines),
            total_amount=self.total,
            submitting=self.submitting,
        )
