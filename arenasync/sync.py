from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from loguru import logger

from arenasync.crud import BookingCRUD, InventoryCRUD
from arenasync.schemas import BookingRead, InventoryItemRead
from arenasync.session import SessionManager


@dataclass
class Snapshot:
    inventory: list[InventoryItemRead] = field(default_factory=list)
    bookings: list[BookingRead] = field(default_factory=list)

    def find_item(self, item_id) -> InventoryItemRead | None:
        return next((i for i in self.inventory if i.id == item_id), None)

    def find_booking(self, booking_id) -> BookingRead | None:
        return next((b for b in self.bookings if b.id == booking_id), None)


class DataSync:
    """
    Holds the in-memory inventory/bookings snapshot.

    Every refetch replaces the snapshot wholesale. A failed refetch keeps the
    previous snapshot and sets a sticky error that only the next successful
    refetch clears.
    """

    def __init__(
        self,
        session: SessionManager,
        inventory: InventoryCRUD,
        bookings: BookingCRUD,
    ) -> None:
        self._session = session
        self._inventory = inventory
        self._bookings = bookings
        self.snapshot = Snapshot()
        self.error: str | None = None
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    async def refetch(self) -> Snapshot:
        if not self._session.is_active:
            logger.debug("Skipping refetch: no active desk session")
            return self.snapshot

        self._in_flight += 1
        try:
            inventory, bookings = await asyncio.gather(
                self._inventory.list_items(),
                self._bookings.list_bookings(),
            )
        except Exception as exc:
            logger.exception("Refetch from store failed")
            self.error = str(exc) or "Unknown database error"
            return self.snapshot
        finally:
            self._in_flight -= 1

        if not self._session.is_active:
            logger.debug("Dropping refetch result: desk session ended mid-flight")
            return self.snapshot

        # later responses win: concurrent refetches are not ordered
        self.snapshot = Snapshot(inventory=inventory, bookings=bookings)
        self.error = None
        logger.debug(
            "Refetched {} inventory items and {} bookings", len(inventory), len(bookings)
        )
        return self.snapshot

    def reset(self) -> None:
        self.snapshot = Snapshot()
        self.error = None
