from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """Read access to accounts that own sessions, plus login bookkeeping"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Lookup by lowercased email"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user; email uniqueness is checked by the caller"""

    @abstractmethod
    async def touch_last_login(self, user_id: UUID) -> None:
        """Stamp last_login_at with the current time"""

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changes made to a loaded user"""

    @abstractmethod
    async def count(self) -> int:
        ...
