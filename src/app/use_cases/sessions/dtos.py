"""
Session Use Case DTOs (Data Transfer Objects)

Projections handed to callers. None of them carries token material.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserInfo(BaseModel):
    """Minimal user projection attached to a verified session"""

    id: str
    email: str
    name: str
    role: str


class SessionInfo(BaseModel):
    """Result of creating or verifying a session"""

    session_id: str
    expires_at: datetime
    user: UserInfo


class RenewedSession(BaseModel):
    """Result of an explicit access token renewal"""

    session_id: str
    expires_at: datetime


class SessionSummary(BaseModel):
    """One entry of a user's session listing"""

    id: str
    ip_address: Optional[str]
    user_agent: Optional[str]
    created_at: datetime
    expires_at: datetime
