import os
import sqlite3
from datetime import datetime, date
from pathlib import Path

import pytest
import pytest_asyncio

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("USE_SQLITE", "true")
os.environ.setdefault("SQLITE_URL", "sqlite+aiosqlite:///./data/test.db")
os.environ.setdefault("SEND_SIMULATED_DELAY_SECONDS", "0")
os.environ.setdefault("CHECKOUT_SIMULATED_DELAY_SECONDS", "0")

# Avoid deprecated sqlite3 default datetime adapters in Python 3.12+.
sqlite3.register_adapter(datetime, lambda value: value.isoformat(sep=" "))
sqlite3.register_adapter(date, lambda value: value.isoformat())


@pytest.fixture(scope="session")
def sqlite_db_path() -> Path:
    return Path("data/test.db")


@pytest.fixture(autouse=True, scope="session")
def _ensure_test_db_dir(sqlite_db_path: Path) -> None:
    sqlite_db_path.parent.mkdir(parents=True, exist_ok=True)
    if sqlite_db_path.exists():
        sqlite_db_path.unlink()


@pytest_asyncio.fixture
async def clean_db():
    """Start the test from empty tables."""
    from newsdesk.database import reset_db

    await reset_db()
    yield


@pytest_asyncio.fixture
async def editor(clean_db):
    """A dashboard user stored in the users table."""
    from fastapi_users.password import PasswordHelper

    from newsdesk.database import AsyncSessionLocal
    from newsdesk.models.user import User

    async with AsyncSessionLocal() as session:
        user = User(
            email="editor@example.com",
            hashed_password=PasswordHelper().hash("password123"),
            is_active=True,
            is_superuser=False,
            is_verified=True,
            full_name="Ed Itor",
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def client():
    from httpx import AsyncClient, ASGITransport

    from newsdesk.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def editor_client(editor, client):
    """Client whose requests are authenticated as ``editor``."""
    from newsdesk.auth.users import current_active_user
    from newsdesk.main import app

    async def _override_user():
        return editor

    app.dependency_overrides[current_active_user] = _override_user
    try:
        yield client
    finally:
        app.dependency_overrides.pop(current_active_user, None)
