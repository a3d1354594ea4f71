from abc import ABC, abstractmethod

from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Transaction boundary for the session core.

    `users` and `sessions` are bound on entry. Leaving the block without
    commit() discards pending writes.
    """

    users: IUserRepository
    sessions: ISessionRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        ...

    @abstractmethod
    async def __aexit__(self, *args) -> None:
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Persist pending writes; raises PersistenceError on store failure"""

    @abstractmethod
    async def rollback(self) -> None:
        ...
