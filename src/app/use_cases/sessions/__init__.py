"""
Session Use Cases

Session lifecycle business logic.
"""

from .session_manager import SessionManager, generate_session_id
from .revoke_session_use_case import RevokeSessionUseCase
from .dtos import RenewedSession, SessionInfo, SessionSummary, UserInfo

__all__ = [
    "SessionManager",
    "generate_session_id",
    "RevokeSessionUseCase",
    # DTOs
    "SessionInfo",
    "RenewedSession",
    "SessionSummary",
    "UserInfo",
]
