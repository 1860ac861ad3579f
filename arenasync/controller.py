from __future__ import annotations

from loguru import logger

from arenasync.auth import CredentialVerifier
from arenasync.crud import BookingCRUD, InventoryCRUD
from arenasync.form import BookingForm
from arenasync.inventory import InventoryEditor
from arenasync.listing import BookingListView
from arenasync.schemas import DashboardRead, Tab
from arenasync.session import DeskUser, SessionManager
from arenasync.storage import SessionStorage
from arenasync.sync import DataSync


class Desk:
    """
    One front desk: the session gate, the shared snapshot and the state of
    the three sections. Any successful mutation refetches everything.
    """

    def __init__(
        self,
        verifier: CredentialVerifier,
        storage: SessionStorage,
        inventory_crud: InventoryCRUD,
        booking_crud: BookingCRUD,
    ) -> None:
        self.session = SessionManager(verifier, storage)
        self.sync = DataSync(self.session, inventory_crud, booking_crud)
        self.inventory = inventory_crud
        self.bookings = booking_crud
        self.form = BookingForm()
        self.listing = BookingListView()
        self.editor = InventoryEditor(inventory_crud)
        self.active_tab = Tab.NEW

    async def start(self) -> None:
        """Resume a stored session and load data for it."""
        if await self.session.restore():
            await self.sync.refetch()

    async def login(self, username: str, password: str) -> DeskUser:
        user = await self.session.login(username, password)
        logger.info("Desk session opened for {}", user.name)
        await self.sync.refetch()
        return user

    async def logout(self) -> None:
        await self.session.logout()
        self.sync.reset()
        self.form.reset()
        self.listing = BookingListView()
        self.editor = InventoryEditor(self.inventory)
        self.active_tab = Tab.NEW

    async def refresh(self) -> None:
        await self.sync.refetch()

    def switch_tab(self, tab: Tab) -> Tab:
        self.active_tab = tab
        return tab

    def dashboard(self) -> DashboardRead:
        snapshot = self.sync.snapshot
        return DashboardRead(
            user=self.session.user.name if self.session.user else "",
            active_tab=self.active_tab,
            loading=self.sync.loading,
            error=self.sync.error,
            booking_count=len(snapshot.bookings),
            inventory_count=len(snapshot.inventory),
        )
