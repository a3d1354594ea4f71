from uuid import uuid4

import bcrypt
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.entities import User, UserRole

PASSWORD = "SecurePass123!"
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


class IntegrationConfig(ApplicationConfig):
    DB_URI = "sqlite+aiosqlite:///./test.db"
    SESSION_STORE_BACKEND = "sql"
    ACCESS_TOKEN_SECRET = "integration-access-secret"
    REFRESH_TOKEN_SECRET = "integration-refresh-secret"
    LOG_LEVEL = "INFO"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def create_user(db_session):
    async def _create_user(email="user@example.com", role=UserRole.user, is_active=True):
        user = User(
            id=uuid4(),
            email=email,
            name=email.split("@")[0],
            password_hash=PASSWORD_HASH,
            role=role,
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _create_user


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app

    app = create_app(IntegrationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def login(client):
    async def _login(email, password=PASSWORD):
        return await client.post("/auth/login", json={"email": email, "password": password})

    return _login
