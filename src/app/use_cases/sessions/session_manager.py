"""
Session Manager

Lifecycle of opaque sessions backed by an access/refresh token pair.
"""

import logging
import secrets
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.errors import PersistenceError, TokenSigningError
from src.app.services.token_codec import ITokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Session, SessionState, TokenType, User, UserRole
from .dtos import RenewedSession, SessionInfo, SessionSummary, UserInfo

logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 32  # 256 bits


def generate_session_id() -> str:
    return secrets.token_hex(SESSION_ID_BYTES)


class SessionManager:
    """
    Creates, verifies, renews and revokes sessions.

    Business Rules:
    - Clients only ever hold session_id; tokens never leave this class
    - expires_at is fixed at creation from the refresh token lifetime
    - An expired access token is renewed silently during verification
    - Expired sessions are deactivated the next time they are read
    - Deactivation is terminal and idempotent
    - Verification never raises for business failures, it returns None;
      infrastructure errors propagate
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: ITokenCodec,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.clock = clock

    async def create_session(
        self,
        user_id: UUID,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[SessionInfo]:
        """
        Open a new session for a user after successful login.

        Args:
            user_id: Owner of the session
            ip_address: Client address, stored for audit only
            user_agent: Client user agent, stored for audit only

        Returns:
            Result with SessionInfo (no tokens), or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            if not user.is_active:
                return Return.err(Error("USER_INACTIVE", "User account is inactive"))

            session_id = generate_session_id()
            refresh = self.token_codec.sign_refresh_token(user.id, session_id)
            access = self.token_codec.sign_access_token(
                user.id, session_id, not_after=refresh.expires_at
            )

            now = self.clock()
            session = Session(
                session_id=session_id,
                user_id=user.id,
                access_token=access.token,
                refresh_token=refresh.token,
                ip_address=ip_address,
                user_agent=user_agent,
                is_active=True,
                expires_at=refresh.expires_at,
                created_at=now,
                updated_at=now,
            )
            await self.uow.sessions.create(session)
            await self.uow.users.touch_last_login(user.id)
            await self.uow.commit()

            logger.info(f"Session created for user {user.id}")
            return Return.ok(self._project(session, user))

    async def verify_session(self, session_id: str) -> Optional[SessionInfo]:
        """
        Resolve a session id to its projection, or None if not authenticated.

        This is the per-request path. A stale access token is re-signed and
        stored in place without touching expires_at.
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_session_id(session_id)
            if session is None:
                return None

            state = session.state(self.clock())
            if state is SessionState.inactive:
                return None
            if state is SessionState.expired:
                await self._deactivate(session, "expired")
                return None

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None or not user.is_active:
                await self._deactivate(session, "user inactive")
                return None

            if self._access_token_valid(session):
                return self._project(session, user)

            try:
                access = self.token_codec.sign_access_token(
                    session.user_id, session.session_id, not_after=session.expires_at
                )
            except TokenSigningError:
                logger.error(f"Access token renewal failed for user {session.user_id}")
                await self._deactivate(session, "renewal failed")
                return None

            try:
                await self.uow.sessions.update_access_token(session.session_id, access.token)
                await self.uow.commit()
            except PersistenceError:
                logger.warning(
                    f"Could not persist renewed access token for user {session.user_id}"
                )
                await self.uow.rollback()
                return None

            logger.debug(f"Access token renewed for user {session.user_id}")
            return self._project(session, user)

    async def renew_access_token(self, session_id: str) -> Result[RenewedSession]:
        """
        Explicitly re-sign the access token of a live session.

        Returns:
            Result with RenewedSession, or Error SESSION_NOT_FOUND / SESSION_EXPIRED
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_session_id(session_id)
            if session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            state = session.state(self.clock())
            if state is SessionState.inactive:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))
            if state is SessionState.expired:
                await self._deactivate(session, "expired")
                return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

            access = self.token_codec.sign_access_token(
                session.user_id, session.session_id, not_after=session.expires_at
            )
            await self.uow.sessions.update_access_token(session.session_id, access.token)
            await self.uow.commit()

            logger.info(f"Access token renewed on request for user {session.user_id}")
            return Return.ok(
                RenewedSession(session_id=session.session_id, expires_at=session.expires_at)
            )

    async def deactivate_session(self, session_id: str) -> Result[bool]:
        """
        Revoke one session.

        Returns:
            Result with True if the session was active, False if it already
            was not, or Error SESSION_NOT_FOUND for an unknown id
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_session_id(session_id)
            if session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            changed = await self.uow.sessions.deactivate(session_id)
            await self.uow.commit()

            if changed:
                logger.info(f"Session revoked for user {session.user_id}")
            return Return.ok(changed)

    async def deactivate_all_user_sessions(self, user_id: UUID) -> int:
        """Revoke every active session of a user. Returns count revoked."""
        async with self.uow:
            count = await self.uow.sessions.deactivate_all_by_user_id(user_id)
            await self.uow.commit()

        logger.info(f"Revoked {count} session(s) for user {user_id}")
        return count

    async def cleanup_expired_sessions(self) -> int:
        """Deactivate all active sessions past expires_at. Returns count."""
        async with self.uow:
            count = await self.uow.sessions.deactivate_expired_before(self.clock())
            await self.uow.commit()

        logger.info(f"Expired session sweep deactivated {count} session(s)")
        return count

    async def get_user_sessions(self, user_id: UUID) -> List[SessionSummary]:
        """List a user's live sessions, newest first, without token material."""
        now = self.clock()
        async with self.uow:
            sessions = await self.uow.sessions.get_active_by_user_id(user_id)
            return [
                SessionSummary(
                    id=s.session_id,
                    ip_address=s.ip_address,
                    user_agent=s.user_agent,
                    created_at=s.created_at,
                    expires_at=s.expires_at,
                )
                for s in sessions
                if s.state(now) is SessionState.active
            ]

    def _access_token_valid(self, session: Session) -> bool:
        claims = self.token_codec.verify(session.access_token, TokenType.access)
        if claims.is_err():
            return False
        return (
            claims.value.session_id == session.session_id
            and claims.value.user_id == session.user_id
        )

    async def _deactivate(self, session: Session, reason: str) -> None:
        await self.uow.sessions.deactivate(session.session_id)
        await self.uow.commit()
        logger.info(f"Session deactivated for user {session.user_id}: {reason}")

    @staticmethod
    def _project(session: Session, user: User) -> SessionInfo:
        return SessionInfo(
            session_id=session.session_id,
            expires_at=session.expires_at,
            user=UserInfo(
                id=str(user.id),
                email=user.email,
                name=user.name,
                role=UserRole(user.role).value,
            ),
        )
