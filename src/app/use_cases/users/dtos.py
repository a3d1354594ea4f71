"""
User Use Case DTOs

Commands carry validated intent from the API layer; UserProfile is the only
user shape handed back. Password hashes never leave the use cases.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


class RegisterUserCommand(BaseModel):
    email: str
    password: str
    name: str
    role: UserRole = UserRole.user


class UpdateProfileCommand(BaseModel):
    """Fields left as None are not changed"""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserProfile(BaseModel):
    id: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime]

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=UserRole(user.role).value,
            is_active=user.is_active,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )
