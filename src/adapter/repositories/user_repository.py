from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.base import utc_now
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def touch_last_login(self, user_id: UUID) -> None:
        """Set last_login_at to now"""
        stmt = update(User).where(User.id == user_id).values(last_login_at=utc_now())
        await self.session.execute(stmt)
        await self.session.flush()

    async def update(self, user: User) -> User:
        """Flush changes on a user loaded in this session"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def count(self) -> int:
        stmt = select(func.count()).select_from(User)
        result = await self.session.exec(stmt)
        return result.one()
