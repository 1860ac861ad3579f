from fastapi import APIRouter, Depends, status

from arenasync.controller import Desk
from arenasync.deps import desk_errors, get_desk, require_session
from arenasync.schemas import LoginRequest, SessionRead

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=SessionRead)
async def get_session(desk: Desk = Depends(require_session)) -> SessionRead:
    return SessionRead(name=desk.session.user.name)


@router.post("/login", response_model=SessionRead)
async def login(payload: LoginRequest, desk: Desk = Depends(get_desk)) -> SessionRead:
    """
    Opens the desk session and loads inventory and bookings.
    A failed login issues no store calls.
    """
    with desk_errors():
        user = await desk.login(payload.username, payload.password)
    return SessionRead(name=user.name)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(desk: Desk = Depends(get_desk)) -> None:
    await desk.logout()
