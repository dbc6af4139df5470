# /app/core/security.py

"""
Token handling for the external identity boundary.

The service does not log anyone in. It only needs to turn a bearer credential
into a verified user id, which is what `IdentityVerifier` describes.
`JWTIdentityVerifier` is the shipped implementation; `create_access_token`
mints compatible tokens for operators and for the test-suite.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

import jwt

from .config import Settings, get_settings
from .errors import AuthenticationError


class IdentityVerifier(Protocol):
    def verify(self, credential: Optional[str]) -> str:
        """Returns the verified user id or raises AuthenticationError."""
        ...


class JWTIdentityVerifier:
    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, credential: Optional[str]) -> str:
        if not credential:
            raise AuthenticationError()
        try:
            payload = jwt.decode(credential, self.secret_key, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError() from e

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise AuthenticationError()
        return user_id


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Signs a token whose `sub` claim is the given user id."""
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": str(subject), "iat": now, "exp": now + expires_delta}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
