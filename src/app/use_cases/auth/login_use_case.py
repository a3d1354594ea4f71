"""
Login Use Case

Checks credentials and opens a session. Only the opaque session id is
returned to the caller.
"""

import logging
from typing import Optional

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import SessionInfo, SessionManager

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Email lookup is case-insensitive
    - User must be active
    - Creates a new session per login, tagged with client ip and user agent
    """

    def __init__(self, uow: UnitOfWork, session_manager: SessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[SessionInfo]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            ip_address: Client address
            user_agent: Client user agent

        Returns:
            Result with SessionInfo, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())

            # Always perform a hash check even if the user is not found
            if user is None:
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not user.is_active:
                return Return.err(Error("USER_DISABLED", "User account is disabled"))

            # Rows are expired once the block exits
            user_id = user.id

        result = await self.session_manager.create_session(user_id, ip_address, user_agent)
        if result.is_ok():
            logger.info(f"Login succeeded for user {user_id}")
        return result
