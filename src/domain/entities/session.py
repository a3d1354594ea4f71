"""
Session Entity

One row per login. Clients only ever see session_id; both tokens stay
server-side.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utc_now

from .enums import SessionState


class Session(SQLModel, table=True):
    """
    Session entity - opaque session id backed by an access/refresh token pair.

    Business Rules:
    - session_id is 256 bits from a CSPRNG and never reused
    - expires_at comes from the refresh token lifetime; access token
      renewal never moves it
    - A session with is_active=False is terminal
    - Rows are soft-deactivated, never deleted
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    session_id: str = Field(unique=True, index=True, max_length=64)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    access_token: str = Field(sa_column=Column(Text, nullable=False))
    refresh_token: str = Field(sa_column=Column(Text, nullable=False))

    ip_address: Optional[str] = Field(default=None, max_length=45)  # IPv6 text form
    user_agent: Optional[str] = Field(default=None, sa_column=Column(Text))

    is_active: bool = Field(default=True)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_is_active", "is_active"),
    )

    def state(self, now: datetime) -> SessionState:
        """Single place where the activity flag and expiry are combined."""
        if not self.is_active:
            return SessionState.inactive
        if now > self.expires_at:
            return SessionState.expired
        return SessionState.active
