from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.app.services.errors import PersistenceError
from src.domain.base import utc_now
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Insert a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_session_id(self, session_id: str) -> Optional[Session]:
        """Get session by its opaque session id"""
        # populate_existing: renewals in this unit of work must be visible
        stmt = (
            select(Session)
            .where(Session.session_id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_user_id(self, user_id: UUID) -> List[Session]:
        """Get active sessions for a user, newest first"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id, Session.is_active == True)
            .order_by(Session.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_access_token(self, session_id: str, access_token: str) -> None:
        """Replace the stored access token"""
        stmt = (
            update(Session)
            .where(Session.session_id == session_id)
            .values(access_token=access_token, updated_at=utc_now())
        )
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to update access token") from exc

    async def deactivate(self, session_id: str) -> bool:
        """Deactivate a session if it is still active"""
        stmt = (
            update(Session)
            .where(Session.session_id == session_id, Session.is_active == True)
            .values(is_active=False, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def deactivate_all_by_user_id(self, user_id: UUID) -> int:
        """Deactivate all active sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.is_active == True)
            .values(is_active=False, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def deactivate_expired_before(self, now: datetime) -> int:
        """Deactivate active sessions whose expires_at is before now"""
        stmt = (
            update(Session)
            .where(Session.expires_at < now, Session.is_active == True)
            .values(is_active=False, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
