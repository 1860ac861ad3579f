from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from uuid import UUID

from loguru import logger

from arenasync.crud import InventoryCRUD
from arenasync.errors import (
    ConfirmationRequired,
    NotFound,
    OperationInProgress,
    StoreOperationFailed,
    ValidationFailed,
)
from arenasync.pricing import to_amount
from arenasync.schemas import (
    InventoryItemCreate,
    InventoryItemRead,
    InventoryRowRead,
    RawNumber,
)

OnSaved = Callable[[], Awaitable[object]]


class InventoryEditor:
    """
    Settings section: the add-item form, per-row staged price edits and
    confirmed deletes.
    """

    def __init__(self, crud: InventoryCRUD) -> None:
        self._crud = crud
        self.draft = InventoryItemCreate()
        self.staged: dict[UUID, RawNumber] = {}
        self.processing = False

    def _begin(self) -> None:
        if self.processing:
            raise OperationInProgress("Another inventory change is still running.")
        self.processing = True

    async def add_item(
        self, name: str, price: RawNumber, on_saved: OnSaved
    ) -> InventoryItemRead:
        self.draft = InventoryItemCreate(name=name, price=price)
        name = name.strip()
        amount = to_amount(price)
        if not name:
            raise ValidationFailed("Item name is required.")
        if amount <= 0:
            raise ValidationFailed("Price must be greater than zero.")

        self._begin()
        try:
            item = await self._crud.create_item(name, amount)
        except Exception as exc:
            logger.exception("Adding inventory item {} failed", name)
            raise StoreOperationFailed("Failed to add item") from exc
        finally:
            self.processing = False

        self.draft = InventoryItemCreate()
        await on_saved()
        return item

    def stage_price(self, item_id: UUID, price: RawNumber) -> None:
        """Keep a typed price locally; nothing is written until commit."""
        self.staged[item_id] = price

    async def commit_price(self, item_id: UUID, on_saved: OnSaved) -> bool:
        """
        Write a staged price when its field loses focus.

        Failures are only logged: the row keeps showing the staged value, so
        the edit looks accepted even when the write did not happen.
        """
        if item_id not in self.staged:
            return False
        price = to_amount(self.staged[item_id])
        try:
            updated = await self._crud.update_price(item_id, price)
        except Exception:
            logger.exception("Updating price of inventory item {} failed", item_id)
            return False
        if not updated:
            logger.warning("Price commit for missing inventory item {}", item_id)
            return False

        self.staged.pop(item_id, None)
        await on_saved()
        return True

    async def delete_item(self, item_id: UUID, confirm: bool, on_saved: OnSaved) -> None:
        """Bookings that reference the item keep their price snapshots."""
        if not confirm:
            raise ConfirmationRequired("Delete this inventory item?")

        self._begin()
        try:
            deleted = await self._crud.delete_item(item_id)
        except Exception as exc:
            logger.exception("Deleting inventory item {} failed", item_id)
            raise StoreOperationFailed("Failed to delete item") from exc
        finally:
            self.processing = False

        if not deleted:
            raise NotFound("Inventory item not found")
        self.staged.pop(item_id, None)
        await on_saved()

    def rows(self, inventory: Sequence[InventoryItemRead]) -> list[InventoryRowRead]:
        return [
            InventoryRowRead(**item.model_dump(), staged_price=self.staged.get(item.id))
            for item in inventory
        ]
