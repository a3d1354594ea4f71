from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer

    Pure data access. Deactivation methods only touch rows that are still
    active, so repeating them is a no-op.
    """

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Insert a new session"""
        pass

    @abstractmethod
    async def get_by_session_id(self, session_id: str) -> Optional[Session]:
        """Get session by its opaque session id, active or not"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID) -> List[Session]:
        """Get all sessions of a user with is_active=True, newest first"""
        pass

    @abstractmethod
    async def update_access_token(self, session_id: str, access_token: str) -> None:
        """Replace the stored access token of a session"""
        pass

    @abstractmethod
    async def deactivate(self, session_id: str) -> bool:
        """Deactivate one session. Returns True if an active row was flipped."""
        pass

    @abstractmethod
    async def deactivate_all_by_user_id(self, user_id: UUID) -> int:
        """Deactivate all active sessions of a user. Returns count flipped."""
        pass

    @abstractmethod
    async def deactivate_expired_before(self, now: datetime) -> int:
        """Deactivate active sessions with expires_at < now. Returns count flipped."""
        pass
