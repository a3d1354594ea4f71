"""
Register Initial Admin Use Case

Unauthenticated bootstrap: creates the first account, always as admin, and
only while the user table is empty.
"""

from libs.result import Error, Result, Return

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from .dtos import RegisterUserCommand, UserProfile
from .register_user_use_case import BCRYPT_ROUNDS, add_user


class RegisterInitialAdminUseCase:
    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = BCRYPT_ROUNDS):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, command: RegisterUserCommand) -> Result[UserProfile]:
        """
        Returns:
            Result with UserProfile, or Error(USERS_ALREADY_EXIST) once any
            user exists. The role on the command is ignored.
        """
        async with self.uow:
            if await self.uow.users.count() > 0:
                return Return.err(
                    Error(
                        "USERS_ALREADY_EXIST",
                        "Users already exist; an admin must register new accounts",
                    )
                )
            return await add_user(self.uow, command, UserRole.admin, self.bcrypt_rounds)
