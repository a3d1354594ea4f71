from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.repositories.in_memory import InMemoryStore
from src.adapter.services.in_memory_unit_of_work import InMemoryUnitOfWork
from src.adapter.services.jwt_token_codec import JwtTokenCodec
from src.app.use_cases.sessions import SessionManager
from src.domain.base import utc_now
from src.domain.entities import User, UserRole

ACCESS_SECRET = "unit-access-secret"
REFRESH_SECRET = "unit-refresh-secret"


class FakeClock:
    """Callable clock that tests can move forward"""

    def __init__(self, now=None):
        self.now = now or utc_now()

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_codec(clock):
    return JwtTokenCodec(ACCESS_SECRET, REFRESH_SECRET, clock=clock)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def memory_uow(store):
    return InMemoryUnitOfWork(store)


@pytest.fixture
def session_manager(memory_uow, token_codec, clock):
    return SessionManager(memory_uow, token_codec, clock=clock)


@pytest.fixture
def make_user(store):
    def _make_user(email="user@example.com", role=UserRole.user, is_active=True):
        user = User(
            email=email,
            password_hash="hash",
            name=email.split("@")[0],
            role=role,
            is_active=is_active,
        )
        store.users[user.id] = user
        return user

    return _make_user
