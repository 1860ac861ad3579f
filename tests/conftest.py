"""
Shared pytest fixtures available to every test file automatically.
No imports needed in test files: pytest discovers this by convention.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from arenasync.controller import Desk
from arenasync.deps import get_desk
from arenasync.routers.bookings import router as bookings_router
from arenasync.routers.dashboard import router as dashboard_router
from arenasync.routers.inventory import router as inventory_router
from arenasync.routers.session import router as session_router

from .factories import logged_in_desk, make_desk


@pytest.fixture()
def anyio_backend():
    return "asyncio"


# ---------------------------------------------------------------------------
# App builder: used by all client fixtures
# ---------------------------------------------------------------------------


def build_app(desk: Desk) -> FastAPI:
    """
    Fresh FastAPI app with every router and `get_desk` overridden to return
    `desk`, so no test ever touches the process-wide desk, store or redis.
    """
    app = FastAPI()
    for router in (session_router, dashboard_router, bookings_router, inventory_router):
        app.include_router(router)
    app.dependency_overrides[get_desk] = lambda: desk
    return app


# ---------------------------------------------------------------------------
# Reusable client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def desk() -> Desk:
    return logged_in_desk()


@pytest.fixture()
def client(desk):
    return TestClient(build_app(desk), raise_server_exceptions=True)


@pytest.fixture()
def anon_client():
    """Desk with no session: everything behind login must answer 401."""
    return TestClient(build_app(make_desk()), raise_server_exceptions=True)


@pytest.fixture()
def client_factory():
    def _make(desk: Desk) -> TestClient:
        return TestClient(build_app(desk), raise_server_exceptions=True)

    return _make
