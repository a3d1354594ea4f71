from typing import Optional

from src.adapter.repositories.in_memory import (
    InMemorySessionRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from src.app.services.unit_of_work import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """UnitOfWork over an InMemoryStore.

    Writes are applied immediately; commit and rollback only count calls.
    """

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()
        self.committed = 0
        self.rolled_back = 0

    async def __aenter__(self):
        self.users = InMemoryUserRepository(self.store)
        self.sessions = InMemorySessionRepository(self.store)
        return self

    async def __aexit__(self, *args):
        pass

    async def commit(self):
        self.committed += 1

    async def rollback(self):
        self.rolled_back += 1
