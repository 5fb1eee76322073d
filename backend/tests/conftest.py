"""Root conftest: shared test configuration and fixtures.

Invariants:
    - Required DB_* variables exist before any accounts module reads settings
    - bcrypt runs at the minimum work factor (4) to keep tests fast
    - Every route test gets a fresh container wired to a call-counting repository
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_NAME", "accounts_test")
os.environ.setdefault("DB_USERNAME", "accounts")
os.environ.setdefault("DB_PASSWORD", "accounts-test-password")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from accounts.config import Settings  # noqa: E402
from accounts.container import build_container  # noqa: E402
from accounts.core.user import User  # noqa: E402
from accounts.infrastructure.user_repository import InMemoryUserRepository  # noqa: E402


class CountingRepository:
    """UserRepository stub that records every create() call."""

    def __init__(self):
        self.calls: list[User] = []
        self._inner = InMemoryUserRepository()

    async def create(self, user: User) -> User:
        self.calls.append(user)
        return await self._inner.create(user)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        db_host="localhost",
        db_name="accounts_test",
        db_username="accounts",
        db_password="accounts-test-password",
        password_hash_rounds=4,
        _env_file=None,
    )


@pytest.fixture
def repository() -> CountingRepository:
    return CountingRepository()


@pytest.fixture
def app(settings, repository):
    return build_container(settings, user_repository=repository).router


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
