from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.errors import PersistenceError
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """UnitOfWork over one AsyncSession; both repositories share it"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        return self

    async def __aexit__(self, *args) -> None:
        # no-op after a successful commit
        await self.rollback()

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistenceError("Could not commit session store changes") from exc

    async def rollback(self) -> None:
        await self.session.rollback()
