from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from arenasync.controller import Desk
from arenasync.deps import desk_errors, require_session
from arenasync.listing import build_breakdown, filter_bookings, summarize
from arenasync.schemas import (
    BookingBreakdown,
    BookingDraftRead,
    BookingDraftUpdate,
    BookingFilters,
    BookingListRead,
    BookingRead,
    DrinkLine,
    DrinkLineUpdate,
    ExpansionRead,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _booking_or_404(desk: Desk, booking_id: UUID) -> BookingRead:
    booking = desk.sync.snapshot.find_booking(booking_id)
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found"
        )
    return booking


# ---------------------------------------------------------------------------
# New-booking form
# ---------------------------------------------------------------------------


@router.get("/draft", response_model=BookingDraftRead)
async def get_draft(desk: Desk = Depends(require_session)) -> BookingDraftRead:
    return desk.form.read()


@router.patch("/draft", response_model=BookingDraftRead)
async def update_draft(
    payload: BookingDraftUpdate,
    desk: Desk = Depends(require_session),
) -> BookingDraftRead:
    desk.form.update(payload.model_dump(exclude_unset=True))
    return desk.form.read()


@router.post(
    "/draft/drinks", response_model=DrinkLine, status_code=status.HTTP_201_CREATED
)
async def add_drink_line(desk: Desk = Depends(require_session)) -> DrinkLine:
    """New line defaults to the first inventory item at its current price."""
    with desk_errors():
        return desk.form.add_drink(desk.sync.snapshot.inventory)


@router.patch("/draft/drinks/{line_id}", response_model=DrinkLine)
async def update_drink_line(
    line_id: str,
    payload: DrinkLineUpdate,
    desk: Desk = Depends(require_session),
) -> DrinkLine:
    with desk_errors():
        line = desk.form.line(line_id)
        if payload.drink_id is not None:
            line = desk.form.select_drink(
                line_id, payload.drink_id, desk.sync.snapshot.inventory
            )
        if "quantity" in payload.model_fields_set:
            line = desk.form.set_quantity(line_id, payload.quantity)
    return line


@router.delete("/draft/drinks/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_drink_line(line_id: str, desk: Desk = Depends(require_session)) -> None:
    with desk_errors():
        desk.form.remove_drink(line_id)


@router.post(
    "/draft/submit", response_model=BookingRead, status_code=status.HTTP_201_CREATED
)
async def submit_draft(desk: Desk = Depends(require_session)) -> BookingRead:
    """
    Saves the booking and its drink lines in one transaction, then resets
    the form and refetches everything.
    """
    with desk_errors():
        return await desk.form.submit(desk.bookings, desk.refresh)


# ---------------------------------------------------------------------------
# Booking list
# ---------------------------------------------------------------------------


@router.get("", response_model=BookingListRead)
async def list_bookings(
    filters: BookingFilters = Depends(),
    desk: Desk = Depends(require_session),
) -> BookingListRead:
    visible = filter_bookings(desk.sync.snapshot.bookings, filters.search, filters.platform)
    return BookingListRead(
        bookings=visible,
        stats=summarize(visible),
        expanded_id=desk.listing.expanded_id,
    )


@router.post("/{booking_id}/toggle", response_model=ExpansionRead)
async def toggle_booking(
    booking_id: UUID, desk: Desk = Depends(require_session)
) -> ExpansionRead:
    _booking_or_404(desk, booking_id)
    return ExpansionRead(expanded_id=desk.listing.toggle(booking_id))


@router.get("/{booking_id}/breakdown", response_model=BookingBreakdown)
async def get_breakdown(
    booking_id: UUID, desk: Desk = Depends(require_session)
) -> BookingBreakdown:
    booking = _booking_or_404(desk, booking_id)
    return build_breakdown(booking, desk.sync.snapshot.inventory)
