import asyncio
from urllib.parse import quote, urlsplit, urlunsplit

from loguru import logger
from tortoise import Tortoise

from arenasync import settings
from arenasync.errors import StoreUnavailable

MODELS = {"models": ["arenasync.models"]}

_initialized = False
_init_lock = asyncio.Lock()


def store_dsn(url: str, key: str) -> str:
    """
    Build the connection DSN from the endpoint URL and the access key.
    The key becomes the DSN password unless the URL already carries one.
    """
    if not url or not key:
        raise StoreUnavailable(
            "Store credentials missing: set STORE_URL and STORE_KEY to sync data"
        )
    parts = urlsplit(url)
    if parts.password or not parts.hostname:
        # file-backed DSNs (sqlite) and fully-specified DSNs pass through
        return url
    netloc = f"{parts.username or ''}:{quote(key, safe='')}@{parts.hostname}"
    if parts.port:
        netloc += f":{parts.port}"
    return urlunsplit(parts._replace(netloc=netloc))


async def init_store(db_url: str, generate_schemas: bool = False) -> None:
    global _initialized
    await Tortoise.init(db_url=db_url, modules=MODELS)
    if generate_schemas:
        await Tortoise.generate_schemas(safe=True)
    _initialized = True


async def ensure_store() -> None:
    """Connect on first use; raises StoreUnavailable when not configured."""
    if _initialized:
        return
    async with _init_lock:
        if _initialized:
            return
        dsn = store_dsn(settings.STORE_URL, settings.STORE_KEY)
        logger.info("Connecting to store at {}", urlsplit(dsn).hostname or dsn)
        await init_store(dsn)


async def close_store() -> None:
    global _initialized
    if _initialized:
        await Tortoise.close_connections()
        _initialized = False
