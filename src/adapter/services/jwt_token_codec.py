import calendar
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from jose import jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel, ConfigDict, ValidationError

from libs.result import Error, Result, Return
from src.app.services.errors import TokenConfigurationError, TokenSigningError
from src.app.services.token_codec import ITokenCodec, SignedToken, TokenClaims
from src.domain.base import utc_now
from src.domain.entities import TokenType

ALGORITHM = "HS256"


class _TokenPayload(BaseModel):
    """Exact claim set accepted on decode; anything else is rejected"""

    model_config = ConfigDict(extra="forbid")

    user_id: UUID
    session_id: str
    type: TokenType
    exp: int
    iat: int


def _invalid() -> Result[TokenClaims]:
    return Return.err(Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired token"))


def _timestamp(moment: datetime) -> int:
    return calendar.timegm(moment.utctimetuple())


class JwtTokenCodec(ITokenCodec):
    """
    HS256 JWT codec with one secret per token type.

    Keeping the secrets apart means a leaked access secret cannot mint
    refresh tokens, and the embedded type claim stops an access token from
    being replayed as a refresh token.
    """

    def __init__(
        self,
        access_secret: Optional[str],
        refresh_secret: Optional[str],
        access_lifetime: timedelta = timedelta(minutes=30),
        refresh_lifetime: timedelta = timedelta(days=30),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not access_secret or not refresh_secret:
            raise TokenConfigurationError("Access and refresh token secrets are required")
        if access_secret == refresh_secret:
            raise TokenConfigurationError("Access and refresh token secrets must differ")

        self._secrets = {
            TokenType.access: access_secret,
            TokenType.refresh: refresh_secret,
        }
        self.access_lifetime = access_lifetime
        self.refresh_lifetime = refresh_lifetime
        self._clock = clock

    def sign_access_token(
        self, user_id: UUID, session_id: str, not_after: Optional[datetime] = None
    ) -> SignedToken:
        now = self._clock()
        expires_at = now + self.access_lifetime
        if not_after is not None and not_after < expires_at:
            expires_at = not_after
        return self._sign(TokenType.access, user_id, session_id, now, expires_at)

    def sign_refresh_token(self, user_id: UUID, session_id: str) -> SignedToken:
        now = self._clock()
        return self._sign(
            TokenType.refresh, user_id, session_id, now, now + self.refresh_lifetime
        )

    def verify(self, token: str, expected_type: TokenType) -> Result[TokenClaims]:
        try:
            # exp is checked below against the codec clock, not the wall clock
            raw = jwt.decode(
                token,
                self._secrets[expected_type],
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
            payload = _TokenPayload.model_validate(raw)
        except (JOSEError, ValidationError):
            return _invalid()

        if payload.type != expected_type:
            return _invalid()
        if payload.exp < _timestamp(self._clock()):
            return _invalid()

        return Return.ok(
            TokenClaims(
                user_id=payload.user_id,
                session_id=payload.session_id,
                type=payload.type,
            )
        )

    def _sign(
        self,
        token_type: TokenType,
        user_id: UUID,
        session_id: str,
        issued_at: datetime,
        expires_at: datetime,
    ) -> SignedToken:
        payload = {
            "user_id": str(user_id),
            "session_id": session_id,
            "type": token_type.value,
            "exp": expires_at,
            "iat": issued_at,
        }
        try:
            token = jwt.encode(payload, self._secrets[token_type], algorithm=ALGORITHM)
        except JOSEError as exc:
            raise TokenSigningError(f"Could not sign {token_type.value} token") from exc
        return SignedToken(token=token, expires_at=expires_at)
