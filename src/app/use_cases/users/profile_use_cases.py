"""
Profile Use Cases

Read and update the account behind the current session.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return

from src.app.services.unit_of_work import UnitOfWork
from .dtos import UpdateProfileCommand, UserProfile
from .register_user_use_case import BCRYPT_ROUNDS, hash_password

logger = logging.getLogger(__name__)


def _user_not_found() -> Result[UserProfile]:
    return Return.err(Error("USER_NOT_FOUND", "User not found"))


class GetProfileUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserProfile]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return _user_not_found()
            return Return.ok(UserProfile.from_user(user))


class UpdateProfileUseCase:
    """
    Use case for a user editing their own name, email or password.

    Business Rules:
    - A new email is lowercased and must not belong to another user
    - A new password is bcrypt hashed
    - Role and active flag cannot be changed here
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = BCRYPT_ROUNDS):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self, user_id: UUID, command: UpdateProfileCommand
    ) -> Result[UserProfile]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return _user_not_found()

            if command.email is not None:
                email = command.email.lower()
                if email != user.email:
                    if await self.uow.users.get_by_email(email) is not None:
                        return Return.err(
                            Error("EMAIL_ALREADY_EXISTS", "Email already in use")
                        )
                    user.email = email

            if command.name is not None:
                user.name = command.name
            if command.password is not None:
                user.password_hash = hash_password(command.password, self.bcrypt_rounds)

            user = await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Profile updated for user {user.id}")
            return Return.ok(UserProfile.from_user(user))
