from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from loguru import logger

from arenasync.auth import CredentialVerifier
from arenasync.errors import AuthenticationFailed, ValidationFailed
from arenasync.storage import SessionStorage

INVALID_CREDENTIALS = "Invalid username or password. Please try again."
MISSING_CREDENTIALS = "Please enter both username and password."


class SessionState(StrEnum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


@dataclass
class DeskUser:
    name: str


class SessionManager:
    """
    LoggedOut -> LoggedIn on a verified login, back on logout.

    A stored session is trusted on startup as-is: there is no expiry and no
    re-validation, the stored record is the whole proof of identity.
    """

    def __init__(self, verifier: CredentialVerifier, storage: SessionStorage) -> None:
        self._verifier = verifier
        self._storage = storage
        self.user: DeskUser | None = None

    @property
    def state(self) -> SessionState:
        return SessionState.LOGGED_IN if self.user else SessionState.LOGGED_OUT

    @property
    def is_active(self) -> bool:
        return self.user is not None

    async def restore(self) -> DeskUser | None:
        record = await self._storage.load()
        name = record.get("name") if isinstance(record, dict) else None
        if name:
            self.user = DeskUser(name=name)
            logger.info("Restored desk session for {}", name)
        return self.user

    async def login(self, username: str, password: str) -> DeskUser:
        username, password = username.strip(), password.strip()
        if not username or not password:
            raise ValidationFailed(MISSING_CREDENTIALS)

        if not await self._verifier.verify(username, password):
            logger.info("Rejected desk login for {}", username)
            raise AuthenticationFailed(INVALID_CREDENTIALS)

        self.user = DeskUser(name=username)
        await self._storage.save({"name": username})
        return self.user

    async def logout(self) -> None:
        self.user = None
        await self._storage.clear()
