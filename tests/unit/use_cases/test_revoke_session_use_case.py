"""
Unit tests for Revoke Session Use Case
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from libs.result import Return
from src.app.use_cases.sessions import RevokeSessionUseCase
from src.domain.entities import Session, UserRole


@pytest.fixture
def revoke_uow(mock_uow):
    mock_uow.sessions = MagicMock()
    mock_uow.sessions.get_by_session_id = AsyncMock()
    return mock_uow


@pytest.fixture
def session_manager():
    manager = MagicMock()
    manager.deactivate_session = AsyncMock(return_value=Return.ok(True))
    return manager


def _session(user_id):
    return Session(
        session_id="s" * 64,
        user_id=user_id,
        access_token="access",
        refresh_token="refresh",
        expires_at=datetime(2030, 1, 1),
    )


@pytest.mark.asyncio
async def test_revoke_own_session(revoke_uow, session_manager):
    user_id = uuid4()
    revoke_uow.sessions.get_by_session_id.return_value = _session(user_id)

    use_case = RevokeSessionUseCase(revoke_uow, session_manager)
    result = await use_case.execute("s" * 64, user_id, UserRole.user.value)

    assert result.is_ok()
    assert result.value is True
    session_manager.deactivate_session.assert_called_once_with("s" * 64)


@pytest.mark.asyncio
async def test_admin_revokes_other_users_session(revoke_uow, session_manager):
    revoke_uow.sessions.get_by_session_id.return_value = _session(uuid4())

    use_case = RevokeSessionUseCase(revoke_uow, session_manager)
    result = await use_case.execute("s" * 64, uuid4(), UserRole.admin.value)

    assert result.is_ok()
    session_manager.deactivate_session.assert_called_once()


@pytest.mark.asyncio
async def test_user_cannot_revoke_other_users_session(revoke_uow, session_manager):
    revoke_uow.sessions.get_by_session_id.return_value = _session(uuid4())

    use_case = RevokeSessionUseCase(revoke_uow, session_manager)
    result = await use_case.execute("s" * 64, uuid4(), UserRole.user.value)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    session_manager.deactivate_session.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_unknown_session(revoke_uow, session_manager):
    revoke_uow.sessions.get_by_session_id.return_value = None

    use_case = RevokeSessionUseCase(revoke_uow, session_manager)
    result = await use_case.execute("missing", uuid4(), UserRole.admin.value)

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"
