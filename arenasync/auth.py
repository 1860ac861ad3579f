import hmac
from functools import lru_cache
from typing import Protocol

import httpx
from loguru import logger

from arenasync import settings


class CredentialVerifier(Protocol):
    async def verify(self, username: str, secret: str) -> bool: ...


class StaticCredentialVerifier:
    """Accepts exactly one configured username/password pair."""

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    async def verify(self, username: str, secret: str) -> bool:
        user_ok = hmac.compare_digest(username.encode(), self._username.encode())
        secret_ok = hmac.compare_digest(secret.encode(), self._password.encode())
        return user_ok and secret_ok


# ---------------------------------------------------------------------------
# HttpCredentialVerifier: thin async wrapper around an identity provider
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _get_identity_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.IDENTITY_URL,
        timeout=httpx.Timeout(5.0),
        follow_redirects=True,
    )


class HttpCredentialVerifier:
    """
    Verifies staff credentials with an OAuth2 password grant against
    `{IDENTITY_URL}/auth/token`. Any non-2xx answer or transport error is
    a failed login; the provider's reason is only logged.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._http = client

    @property
    def _client(self) -> httpx.AsyncClient:
        return self._http if self._http is not None else _get_identity_http_client()

    async def verify(self, username: str, secret: str) -> bool:
        try:
            resp = await self._client.post(
                "/auth/token",
                data={"grant_type": "password", "username": username, "password": secret},
            )
        except httpx.RequestError:
            logger.warning("Identity provider unreachable", exc_info=True)
            return False
        if resp.status_code >= 400:
            logger.info("Identity provider rejected {}: {}", username, resp.status_code)
            return False
        return True


def default_verifier() -> CredentialVerifier:
    if settings.IDENTITY_URL:
        return HttpCredentialVerifier()
    return StaticCredentialVerifier(settings.DESK_USERNAME, settings.DESK_PASSWORD)
