"""
Test Configuration and Fixtures

This module provides:
- A temporary SQLite database per test session (created before app modules import settings)
- Table cleanup between integration tests
- A session-scoped TestClient and user/login fixtures

Architecture:
- Unit tests (@pytest.mark.unit): no database, no HTTP client
- Integration tests: real temporary SQLite database with cleanup per test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings = Settings() is evaluated at import time of src.platform.config.core_setting
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'table_reservation_{worker_id}_'))
    os.environ['DATABASE_URL_ASYNC'] = f'sqlite+aiosqlite:///{db_dir / "test.db"}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DEBUG'] = 'true'
    os.environ['SEED_TABLES_ON_STARTUP'] = 'false'
    os.environ['TABLE_SELECTION_POLICY'] = 'smallest_fit'
    os.environ['RESERVATION_COMMIT_MAX_ATTEMPTS'] = '3'
    os.environ['SERVICE_TIMES'] = '["17:00","18:00","19:00","20:00"]'
    os.environ['DEPLOY_ENV'] = 'test'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import delete  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402
from src.service.table_reservation.driven_adapter.model import (  # noqa: E402
    ReservationModel,
    TableModel,
)
from test.shared.utils import create_user, login_user  # noqa: E402
from test.util_constant import (  # noqa: E402
    ANOTHER_CUSTOMER_EMAIL,
    ANOTHER_CUSTOMER_NAME,
    DEFAULT_PASSWORD,
    TEST_ADMIN_EMAIL,
    TEST_ADMIN_NAME,
    TEST_CUSTOMER_EMAIL,
    TEST_CUSTOMER_NAME,
    TEST_MANAGER_EMAIL,
    TEST_MANAGER_NAME,
    TEST_STAFF_EMAIL,
    TEST_STAFF_NAME,
)


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_sessionstart(session: pytest.Session) -> None:
    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.append('clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _new_engine():
    return create_async_engine(settings.DATABASE_URL_ASYNC, poolclass=NullPool)


async def _setup_test_database() -> None:
    engine = _new_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _clean_reservation_tables() -> None:
    """Users are session-scoped fixtures and survive between tests"""
    engine = _new_engine()
    try:
        async with engine.begin() as conn:
            await conn.execute(delete(ReservationModel))
            await conn.execute(delete(TableModel))
    finally:
        await engine.dispose()


@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_reservation_tables()
    yield

    from src.platform.database.orm_db_setting import _engine_manager

    try:
        current_loop = asyncio.get_running_loop()
    except RuntimeError:
        current_loop = None

    if current_loop is not None and _engine_manager._loop is current_loop:
        await _engine_manager.dispose()


@pytest.fixture
def execute_sql_statement() -> Callable[..., list[dict[str, Any]] | None]:
    from sqlalchemy import text

    def _execute(
        statement: str, params: dict[str, Any] | None = None, fetch: bool = False
    ) -> list[dict[str, Any]] | None:
        async def _run() -> list[dict[str, Any]] | None:
            engine = _new_engine()
            try:
                async with engine.begin() as conn:
                    result = await conn.execute(text(statement), params or {})
                    if fetch:
                        return [dict(row._mapping) for row in result]
                return None
            finally:
                await engine.dispose()

        return asyncio.run(_run())

    return _execute


@pytest.fixture
async def seeded_tables(clean_database: None) -> list[dict[str, Any]]:
    """Default five-table catalog, inserted directly"""
    from test.util_constant import DEFAULT_TABLES

    engine = _new_engine()
    try:
        async with engine.begin() as conn:
            for table_id, name, capacity in DEFAULT_TABLES:
                await conn.execute(
                    TableModel.__table__.insert().values(id=table_id, name=name, capacity=capacity)
                )
    finally:
        await engine.dispose()
    return [{'id': i, 'name': n, 'capacity': c} for i, n, c in DEFAULT_TABLES]


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


def _ensure_user(client: TestClient, email: str, name: str, role: str) -> dict[str, Any]:
    created = create_user(client, email, DEFAULT_PASSWORD, name, role)
    if created:
        return created
    # Already created earlier in the session: read it back through login
    response = login_user(client, email, DEFAULT_PASSWORD)
    client.cookies.clear()
    return response.json()


@pytest.fixture(scope='session')
def customer_user(client: TestClient) -> dict[str, Any]:
    return _ensure_user(client, TEST_CUSTOMER_EMAIL, TEST_CUSTOMER_NAME, 'customer')


@pytest.fixture(scope='session')
def another_customer_user(client: TestClient) -> dict[str, Any]:
    return _ensure_user(client, ANOTHER_CUSTOMER_EMAIL, ANOTHER_CUSTOMER_NAME, 'customer')


@pytest.fixture(scope='session')
def staff_user(client: TestClient) -> dict[str, Any]:
    return _ensure_user(client, TEST_STAFF_EMAIL, TEST_STAFF_NAME, 'staff')


@pytest.fixture(scope='session')
def manager_user(client: TestClient) -> dict[str, Any]:
    return _ensure_user(client, TEST_MANAGER_EMAIL, TEST_MANAGER_NAME, 'manager')


@pytest.fixture(scope='session')
def admin_user(client: TestClient) -> dict[str, Any]:
    return _ensure_user(client, TEST_ADMIN_EMAIL, TEST_ADMIN_NAME, 'admin')

