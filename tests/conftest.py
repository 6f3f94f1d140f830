import os
import tempfile
from pathlib import Path

# Environment must be in place before anything under app/ is imported
TEST_DB_PATH = Path(tempfile.gettempdir()) / "user_accounts_test.db"

os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"

import httpx
import pytest

from app.core.db import AsyncSessionLocal, Base, engine
from app.core.security import create_access_token, hash_password
from app.models.support.log_models import Log
from app.models.users.user_models import User
from app.repositories.log_repository import LogRepository
from app.repositories.user_repository import UserRepository
from app.services.users.user_services import UserService
from main import app


@pytest.fixture
async def db_schema():
    """Fresh tables for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
async def db(db_schema):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def service(db):
    return UserService(db, UserRepository(db), LogRepository(db))


@pytest.fixture
async def client(db_schema):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_user(db_schema):
    async def _make(name="Alice", email="alice@example.com", password="Secret123"):
        async with AsyncSessionLocal() as session:
            user = User(name=name, email=email, password_hash=hash_password(password))
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make


@pytest.fixture
def add_logs(db_schema):
    async def _add(user_id, *messages):
        async with AsyncSessionLocal() as session:
            for message in messages:
                session.add(Log(user_id=user_id, message=message))
            await session.commit()

    return _add


async def load_user(user_id, include_deleted=True):
    async with AsyncSessionLocal() as session:
        return await UserRepository(session).get(user_id, include_deleted=include_deleted)


async def load_logs(user_id):
    async with AsyncSessionLocal() as session:
        return await LogRepository(session).list_for_user(user_id)


def bearer(user_id):
    return create_access_token(user_id)


def auth_headers(user_id):
    return {"Authorization": f"Bearer {bearer(user_id)}"}
