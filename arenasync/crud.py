from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from tortoise.transactions import in_transaction

from arenasync.models import Booking, BookingDrink, InventoryItem
from arenasync.schemas import BookingCreate, BookingRead, InventoryItemRead
from arenasync.store import ensure_store


class InventoryCRUD:
    async def list_items(self) -> list[InventoryItemRead]:
        await ensure_store()
        items = await InventoryItem.all().order_by("name")
        return [InventoryItemRead.model_validate(i, from_attributes=True) for i in items]

    async def create_item(self, name: str, price: Decimal) -> InventoryItemRead:
        await ensure_store()
        inst = await InventoryItem.create(name=name, price=price)
        return InventoryItemRead.model_validate(inst, from_attributes=True)

    async def update_price(self, item_id: UUID, price: Decimal) -> bool:
        await ensure_store()
        updated = await InventoryItem.filter(id=item_id).update(price=price)
        return updated > 0

    async def delete_item(self, item_id: UUID) -> bool:
        """Bookings referencing the item keep their drink lines untouched."""
        await ensure_store()
        deleted = await InventoryItem.filter(id=item_id).delete()
        return deleted > 0


class BookingCRUD:
    async def list_bookings(self) -> list[BookingRead]:
        """All bookings, newest first, each with its drink lines inline."""
        await ensure_store()
        rows = await Booking.all().order_by("-created_at").prefetch_related("drinks")
        return [BookingRead.from_row(r) for r in rows]

    async def create_booking(self, payload: BookingCreate) -> BookingRead:
        """
        Persist a booking and its drink lines as one unit.
        If the drink-line insert fails the booking row is rolled back with it.
        """
        await ensure_store()
        extra = payload.extra_hours

        async with in_transaction() as conn:
            inst = await Booking.create(
                customer_name=payload.customer_name,
                phone_number=payload.phone_number,
                platform=payload.platform,
                booking_amount=payload.booking_amount,
                extra_hours_enabled=extra.enabled,
                extra_hours_duration=extra.duration,
                extra_hours_amount=extra.amount,
                total_amount=payload.total_amount,
                using_db=conn,
            )
            if payload.selected_drinks:
                await BookingDrink.bulk_create(
                    [
                        BookingDrink(
                            booking=inst,
                            drink_id=d.drink_id,
                            quantity=d.quantity,
                            price_at_time=d.price_at_time,
                        )
                        for d in payload.selected_drinks
                    ],
                    using_db=conn,
                )

        return BookingRead(
            id=inst.id,
            customer_name=inst.customer_name,
            phone_number=inst.phone_number,
            platform=inst.platform,
            booking_amount=payload.booking_amount,
            selected_drinks=payload.selected_drinks,
            extra_hours=extra,
            total_amount=payload.total_amount,
            timestamp=inst.created_at,
        )


inventory_crud = InventoryCRUD()
booking_crud = BookingCRUD()
