import datetime as dt
from typing import Any, Dict, Optional

import jwt
from pydantic import BaseModel, ValidationError as ClaimsError, field_validator

from guardian.core.errors import AuthError
from guardian.core.settings import Settings


# Subject keys written by earlier token issuers
_LEGACY_SUBJECT_KEYS = ("userId", "id")


def _utc_now() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


class SessionClaims(BaseModel):
    sub: str
    email: str
    iat: dt.datetime
    exp: dt.datetime

    @field_validator("sub")
    @classmethod
    def numeric_subject(cls, value: str) -> str:
        if not value.isdigit():
            raise ValueError("subject must be a user id")
        return value

    @property
    def user_id(self) -> int:
        return int(self.sub)


class TokenSigner:
    """Issues and verifies session tokens with an explicitly supplied secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: dt.timedelta = dt.timedelta(days=7),
        accept_legacy_claims: bool = False,
    ) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.accept_legacy_claims = accept_legacy_claims

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSigner":
        return cls(
            secret=settings.session_secret,
            algorithm=settings.jwt_algorithm,
            ttl=dt.timedelta(days=settings.session_ttl_days),
            accept_legacy_claims=settings.accept_legacy_claims,
        )

    def issue(self, user_id: int, email: str, issued_at: Optional[dt.datetime] = None) -> str:
        issued_at = issued_at or _utc_now()
        payload: Dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionClaims:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError:
            raise AuthError("Invalid token")

        if "sub" not in payload and self.accept_legacy_claims:
            for key in _LEGACY_SUBJECT_KEYS:
                if key in payload:
                    payload["sub"] = str(payload[key])
                    break

        try:
            return SessionClaims.model_validate(payload)
        except ClaimsError:
            raise AuthError("Invalid token")
