"""
Revoke Session Use Case

Revokes a single session on behalf of its owner or an admin.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from .session_manager import SessionManager


class RevokeSessionUseCase:
    """
    Use case for revoking one session by id.

    Business Rules:
    - Users can revoke their own sessions
    - Admins can revoke any user's session
    - Revoking an already inactive session is not an error
    """

    def __init__(self, uow: UnitOfWork, session_manager: SessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(
        self, session_id: str, requesting_user_id: UUID, requesting_role: str
    ) -> Result[bool]:
        async with self.uow:
            session = await self.uow.sessions.get_by_session_id(session_id)
            if session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            is_self = session.user_id == requesting_user_id
            is_admin = requesting_role == UserRole.admin.value
            if not is_self and not is_admin:
                return Return.err(
                    Error("FORBIDDEN", "Only admins can revoke other users' sessions")
                )

        return await self.session_manager.deactivate_session(session_id)
