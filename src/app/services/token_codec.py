from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Result
from src.domain.entities import TokenType


class TokenClaims(BaseModel):
    """Identity carried by a verified token"""

    user_id: UUID
    session_id: str
    type: TokenType


class SignedToken(BaseModel):
    """Freshly signed token and the expiry encoded in it"""

    token: str
    expires_at: datetime


class ITokenCodec(ABC):
    """Signs and verifies access/refresh tokens bound to a session"""

    @abstractmethod
    def sign_access_token(
        self, user_id: UUID, session_id: str, not_after: Optional[datetime] = None
    ) -> SignedToken:
        """Sign a short-lived access token. Expiry never exceeds not_after."""
        pass

    @abstractmethod
    def sign_refresh_token(self, user_id: UUID, session_id: str) -> SignedToken:
        """Sign a long-lived refresh token"""
        pass

    @abstractmethod
    def verify(self, token: str, expected_type: TokenType) -> Result[TokenClaims]:
        """Verify signature, expiry and type. Never raises for a bad token."""
        pass
