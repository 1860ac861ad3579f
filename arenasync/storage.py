import json

from loguru import logger
from redis.asyncio import Redis

from arenasync import settings

_redis: Redis | None = None


def get_redis() -> Redis:
    global _redis
    if _redis is None:
        _redis = Redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis


class SessionStorage:
    """
    Persists the logged-in session record under one fixed key.
    Storage failures are logged and degrade to "no stored session".
    """

    def __init__(self, redis: Redis | None = None, key: str | None = None) -> None:
        self._redis = redis
        self.key = key or settings.SESSION_KEY

    @property
    def _client(self) -> Redis:
        return self._redis if self._redis is not None else get_redis()

    async def load(self) -> dict | None:
        try:
            data = await self._client.get(self.key)
            return json.loads(data) if data else None
        except Exception:
            logger.warning("Session load failed, starting logged out", exc_info=True)
            return None

    async def save(self, record: dict) -> None:
        try:
            await self._client.set(self.key, json.dumps(record))
        except Exception:
            logger.warning("Session save failed, session lives in memory only", exc_info=True)

    async def clear(self) -> None:
        try:
            await self._client.delete(self.key)
        except Exception:
            logger.warning("Session clear failed for key {}", self.key, exc_info=True)
