from fastapi import APIRouter, Depends

from arenasync.controller import Desk
from arenasync.deps import require_session
from arenasync.schemas import DashboardRead, TabUpdate

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardRead)
async def get_dashboard(desk: Desk = Depends(require_session)) -> DashboardRead:
    return desk.dashboard()


@router.put("/tab", response_model=DashboardRead)
async def switch_tab(
    payload: TabUpdate, desk: Desk = Depends(require_session)
) -> DashboardRead:
    desk.switch_tab(payload.tab)
    return desk.dashboard()


@router.post("/refresh", response_model=DashboardRead)
async def refresh(desk: Desk = Depends(require_session)) -> DashboardRead:
    """Manual refetch. A failure shows up in `error`, the old data stays."""
    await desk.refresh()
    return desk.dashboard()
