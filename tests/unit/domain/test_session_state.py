"""
Unit tests for the derived session state
"""

from datetime import datetime, timedelta
from uuid import uuid4

from src.domain.entities import Session, SessionState

NOW = datetime(2030, 1, 1, 12, 0, 0)


def _session(**overrides):
    fields = dict(
        session_id="s" * 64,
        user_id=uuid4(),
        access_token="access",
        refresh_token="refresh",
        expires_at=NOW + timedelta(days=1),
        is_active=True,
    )
    fields.update(overrides)
    return Session(**fields)


def test_active_before_expiry():
    assert _session().state(NOW) is SessionState.active


def test_expiry_boundary_is_still_active():
    assert _session(expires_at=NOW).state(NOW) is SessionState.active


def test_expired_after_expiry():
    assert _session(expires_at=NOW - timedelta(seconds=1)).state(NOW) is SessionState.expired


def test_inactive_wins_over_expiry():
    assert _session(is_active=False).state(NOW) is SessionState.inactive
    assert (
        _session(is_active=False, expires_at=NOW - timedelta(days=1)).state(NOW)
        is SessionState.inactive
    )
