"""
In-memory repositories.

Back the session core without a database: tests, local runs and the
`memory` store backend. Rows live in dicts owned by an InMemoryStore and
are shared by every unit of work built on it.
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository
from src.domain.base import utc_now
from src.domain.entities import Session, User


class InMemoryStore:
    """Holds rows for the in-memory repositories"""

    def __init__(self):
        self.users: Dict[UUID, User] = {}
        self.sessions: Dict[str, Session] = {}


class InMemoryUserRepository(IUserRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self.store.users.values():
            if user.email == email:
                return user
        return None

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.store.users.get(user_id)

    async def create(self, user: User) -> User:
        self.store.users[user.id] = user
        return user

    async def touch_last_login(self, user_id: UUID) -> None:
        user = self.store.users.get(user_id)
        if user is not None:
            user.last_login_at = utc_now()

    async def update(self, user: User) -> User:
        self.store.users[user.id] = user
        return user

    async def count(self) -> int:
        return len(self.store.users)


class InMemorySessionRepository(ISessionRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, session: Session) -> Session:
        if session.session_id in self.store.sessions:
            raise ValueError("Duplicate session_id")
        self.store.sessions[session.session_id] = session
        return session

    async def get_by_session_id(self, session_id: str) -> Optional[Session]:
        return self.store.sessions.get(session_id)

    async def get_active_by_user_id(self, user_id: UUID) -> List[Session]:
        sessions = [
            s
            for s in self.store.sessions.values()
            if s.user_id == user_id and s.is_active
        ]
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    async def update_access_token(self, session_id: str, access_token: str) -> None:
        session = self.store.sessions.get(session_id)
        if session is not None:
            session.access_token = access_token
            session.updated_at = utc_now()

    async def deactivate(self, session_id: str) -> bool:
        session = self.store.sessions.get(session_id)
        if session is None or not session.is_active:
            return False
        session.is_active = False
        session.updated_at = utc_now()
        return True

    async def deactivate_all_by_user_id(self, user_id: UUID) -> int:
        count = 0
        for session in self.store.sessions.values():
            if session.user_id == user_id and session.is_active:
                session.is_active = False
                session.updated_at = utc_now()
                count += 1
        return count

    async def deactivate_expired_before(self, now: datetime) -> int:
        count = 0
        for session in self.store.sessions.values():
            if session.is_active and session.expires_at < now:
                session.is_active = False
                session.updated_at = now
                count += 1
        return count
