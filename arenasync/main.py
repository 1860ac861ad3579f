import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger

from arenasync import settings
from arenasync.deps import get_desk
from arenasync.routers.bookings import router as bookings_router
from arenasync.routers.dashboard import router as dashboard_router
from arenasync.routers.inventory import router as inventory_router
from arenasync.routers.session import router as session_router
from arenasync.store import close_store


def configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if not (settings.STORE_URL and settings.STORE_KEY):
        logger.warning(
            "Store credentials missing from environment; "
            "set STORE_URL and STORE_KEY or every sync will fail"
        )
    await get_desk().start()
    yield
    await close_store()


app = FastAPI(
    title="ArenaSync Desk",
    description="Front-desk booking and drink inventory dashboard",
    version="1.0.4",
    lifespan=lifespan,
)

app.include_router(session_router)
app.include_router(dashboard_router)
app.include_router(bookings_router)
app.include_router(inventory_router)


if __name__ == "__main__":
    uvicorn.run("arenasync.main:app", host=settings.HOST, port=settings.PORT)
