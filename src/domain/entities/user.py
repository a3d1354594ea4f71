"""
User Entity

Owner of sessions. Managed outside the session core; the core only reads it
and touches last_login_at.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a person who can hold many sessions.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash
    - Inactive users cannot hold a valid session
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    name: str = Field(max_length=100)
    role: UserRole = Field(default=UserRole.user)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
