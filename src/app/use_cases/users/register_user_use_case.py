"""
Register User Use Case

Admin-driven account creation. Registering does not open a session; the new
user logs in separately.
"""

import logging

import bcrypt
from libs.result import Error, Result, Return

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from .dtos import RegisterUserCommand, UserProfile

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


async def add_user(
    uow: UnitOfWork, command: RegisterUserCommand, role: UserRole, rounds: int
) -> Result[UserProfile]:
    """Create and commit a user. Must run inside an open `async with uow` block."""
    email = command.email.lower()
    if await uow.users.get_by_email(email) is not None:
        return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

    user = await uow.users.create(
        User(
            email=email,
            password_hash=hash_password(command.password, rounds),
            name=command.name,
            role=role,
            is_active=True,
        )
    )
    await uow.commit()

    logger.info(f"User {user.id} registered with role {role.value}")
    return Return.ok(UserProfile.from_user(user))


class RegisterUserUseCase:
    """
    Use case for creating a user account.

    Business Rules:
    - Email is stored lowercased and must be unique
    - Password hashed with bcrypt
    - New accounts are active
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = BCRYPT_ROUNDS):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, command: RegisterUserCommand) -> Result[UserProfile]:
        """
        Returns:
            Result with UserProfile, or Error(EMAIL_ALREADY_EXISTS)
        """
        async with self.uow:
            return await add_user(self.uow, command, command.role, self.bcrypt_rounds)
