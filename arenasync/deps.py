from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Depends, HTTPException, status

from arenasync.auth import default_verifier
from arenasync.controller import Desk
from arenasync.crud import booking_crud, inventory_crud
from arenasync.errors import (
    AuthenticationFailed,
    ConfirmationRequired,
    DeskError,
    EmptyInventory,
    NotFound,
    OperationInProgress,
    StoreOperationFailed,
    StoreUnavailable,
    ValidationFailed,
)
from arenasync.storage import SessionStorage

# ---------------------------------------------------------------------------
# The desk: one per process
# ---------------------------------------------------------------------------

_desk = Desk(
    verifier=default_verifier(),
    storage=SessionStorage(),
    inventory_crud=inventory_crud,
    booking_crud=booking_crud,
)


def get_desk() -> Desk:
    return _desk


async def require_session(desk: Desk = Depends(get_desk)) -> Desk:
    """Nothing behind the login screen renders without an active session."""
    if not desk.session.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
        )
    return desk


# ---------------------------------------------------------------------------
# Desk errors → HTTP responses
# ---------------------------------------------------------------------------

_STATUS_BY_ERROR: dict[type[DeskError], int] = {
    ValidationFailed: status.HTTP_422_UNPROCESSABLE_CONTENT,
    AuthenticationFailed: status.HTTP_401_UNAUTHORIZED,
    EmptyInventory: status.HTTP_409_CONFLICT,
    OperationInProgress: status.HTTP_409_CONFLICT,
    ConfirmationRequired: status.HTTP_409_CONFLICT,
    NotFound: status.HTTP_404_NOT_FOUND,
    StoreOperationFailed: status.HTTP_502_BAD_GATEWAY,
    StoreUnavailable: status.HTTP_502_BAD_GATEWAY,
}


@contextmanager
def desk_errors() -> Iterator[None]:
    """
    Usage:
        with desk_errors():
            await desk.form.submit(...)
    """
    try:
        yield
    except DeskError as exc:
        raise HTTPException(
            status_code=_STATUS_BY_ERROR.get(
                type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            detail=exc.message,
        ) from None
