from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from arenasync.controller import Desk
from arenasync.deps import desk_errors, require_session
from arenasync.schemas import (
    InventoryItemCreate,
    InventoryItemRead,
    InventoryRead,
    InventoryRowRead,
    PriceStage,
)

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("", response_model=InventoryRead)
async def get_inventory(desk: Desk = Depends(require_session)) -> InventoryRead:
    snapshot = desk.sync.snapshot
    return InventoryRead(
        items=desk.editor.rows(snapshot.inventory),
        draft=desk.editor.draft,
        booking_count=len(snapshot.bookings),
        inventory_count=len(snapshot.inventory),
        processing=desk.editor.processing,
    )


@router.post("", response_model=InventoryItemRead, status_code=status.HTTP_201_CREATED)
async def add_item(
    payload: InventoryItemCreate,
    desk: Desk = Depends(require_session),
) -> InventoryItemRead:
    with desk_errors():
        return await desk.editor.add_item(payload.name, payload.price, desk.refresh)


@router.put("/{item_id}/price", response_model=InventoryRowRead)
async def stage_price(
    item_id: UUID,
    payload: PriceStage,
    desk: Desk = Depends(require_session),
) -> InventoryRowRead:
    """Stage a typed price; it is written on commit (field blur)."""
    item = desk.sync.snapshot.find_item(item_id)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found"
        )
    desk.editor.stage_price(item_id, payload.price)
    return desk.editor.rows([item])[0]


@router.post("/{item_id}/price/commit", status_code=status.HTTP_204_NO_CONTENT)
async def commit_price(item_id: UUID, desk: Desk = Depends(require_session)) -> None:
    # write failures are logged only; the desk never sees them
    await desk.editor.commit_price(item_id, desk.refresh)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID,
    confirm: bool = False,
    desk: Desk = Depends(require_session),
) -> None:
    with desk_errors():
        await desk.editor.delete_item(item_id, confirm, desk.refresh)
