"""
Integration tests for the SQL session repository and the session manager
running on it
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from src.adapter.services.jwt_token_codec import JwtTokenCodec
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.sessions import SessionManager, generate_session_id
from src.domain.base import utc_now
from src.domain.entities import Session


def _session(user_id, expires_in=timedelta(days=30), **overrides):
    fields = dict(
        session_id=generate_session_id(),
        user_id=user_id,
        access_token="access",
        refresh_token="refresh",
        ip_address="1.2.3.4",
        user_agent="UA1",
        expires_at=utc_now() + expires_in,
    )
    fields.update(overrides)
    return Session(**fields)


@pytest.mark.asyncio
async def test_create_and_get_by_session_id(db_session, create_user):
    user = await create_user()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        created = await uow.sessions.create(_session(user.id))
        await uow.commit()

        found = await uow.sessions.get_by_session_id(created.session_id)
        assert found is not None
        assert found.user_id == user.id
        assert found.is_active is True

        assert await uow.sessions.get_by_session_id("missing") is None


@pytest.mark.asyncio
async def test_session_id_is_unique(db_session, create_user):
    user = await create_user()
    session_id = generate_session_id()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.sessions.create(_session(user.id, session_id=session_id))
        with pytest.raises(IntegrityError):
            await uow.sessions.create(_session(user.id, session_id=session_id))


@pytest.mark.asyncio
async def test_update_access_token_visible_on_next_read(db_session, create_user):
    user = await create_user()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        created = await uow.sessions.create(_session(user.id))
        await uow.commit()

        await uow.sessions.update_access_token(created.session_id, "renewed")
        await uow.commit()

        found = await uow.sessions.get_by_session_id(created.session_id)
        assert found.access_token == "renewed"


@pytest.mark.asyncio
async def test_deactivate_is_idempotent(db_session, create_user):
    user = await create_user()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        created = await uow.sessions.create(_session(user.id))
        await uow.commit()

        assert await uow.sessions.deactivate(created.session_id) is True
        assert await uow.sessions.deactivate(created.session_id) is False
        assert await uow.sessions.deactivate("missing") is False
        await uow.commit()

        found = await uow.sessions.get_by_session_id(created.session_id)
        assert found.is_active is False


@pytest.mark.asyncio
async def test_get_active_and_deactivate_all_by_user(db_session, create_user):
    alice = await create_user("alice@example.com")
    bob = await create_user("bob@example.com")

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        for user in (alice, alice, bob, bob):
            await uow.sessions.create(_session(user.id))
        await uow.commit()

        assert len(await uow.sessions.get_active_by_user_id(alice.id)) == 2

        assert await uow.sessions.deactivate_all_by_user_id(alice.id) == 2
        await uow.commit()

        assert await uow.sessions.get_active_by_user_id(alice.id) == []
        assert len(await uow.sessions.get_active_by_user_id(bob.id)) == 2


@pytest.mark.asyncio
async def test_deactivate_expired_before(db_session, create_user):
    user = await create_user()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.sessions.create(_session(user.id, expires_in=timedelta(hours=-1)))
        await uow.sessions.create(_session(user.id, expires_in=timedelta(hours=-2)))
        await uow.sessions.create(_session(user.id, expires_in=timedelta(days=1)))
        await uow.sessions.create(
            _session(user.id, expires_in=timedelta(hours=-1), is_active=False)
        )
        await uow.commit()

        assert await uow.sessions.deactivate_expired_before(utc_now()) == 2
        await uow.commit()

        active = await uow.sessions.get_active_by_user_id(user.id)
        assert len(active) == 1


@pytest.mark.asyncio
async def test_session_manager_lifecycle_on_sql(db_session, create_user):
    user = await create_user()
    user_id = user.id
    codec = JwtTokenCodec("sql-access-secret", "sql-refresh-secret")
    manager = SessionManager(SqlAlchemyUnitOfWork(db_session), codec)

    created = await manager.create_session(user_id, "1.2.3.4", "UA1")
    assert created.is_ok()
    session_id = created.value.session_id

    verified = await manager.verify_session(session_id)
    assert verified is not None
    assert verified.user.id == str(user_id)

    # Force renewal
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.sessions.update_access_token(session_id, "garbage")
        await uow.commit()

    assert await manager.verify_session(session_id) is not None
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        row = await uow.sessions.get_by_session_id(session_id)
        assert row.access_token != "garbage"
        assert row.expires_at == created.value.expires_at

    result = await manager.deactivate_session(session_id)
    assert result.is_ok()
    assert await manager.verify_session(session_id) is None
    assert (await manager.deactivate_session(session_id)).is_ok()


@pytest.mark.asyncio
async def test_session_manager_user_sessions_and_sweep_on_sql(db_session, create_user):
    user = await create_user()
    user_id = user.id
    codec = JwtTokenCodec("sql-access-secret", "sql-refresh-secret")
    manager = SessionManager(SqlAlchemyUnitOfWork(db_session), codec)

    ids = []
    for _ in range(3):
        result = await manager.create_session(user_id, "1.2.3.4", "UA1")
        ids.append(result.value.session_id)

    assert len(await manager.get_user_sessions(user_id)) == 3

    await manager.deactivate_session(ids[1])
    listed = {s.id for s in await manager.get_user_sessions(user_id)}
    assert listed == {ids[0], ids[2]}

    later = SessionManager(
        SqlAlchemyUnitOfWork(db_session), codec, clock=lambda: utc_now() + timedelta(days=31)
    )
    assert await later.cleanup_expired_sessions() == 2
    assert await manager.get_user_sessions(user_id) == []
