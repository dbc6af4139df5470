# /app/core/deps.py

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, get_settings
from .security import IdentityVerifier, JWTIdentityVerifier

# auto_error=False: a missing header must become our 401, not FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_verifier(settings: Settings = Depends(get_settings)) -> IdentityVerifier:
    return JWTIdentityVerifier(settings.jwt_secret_key, settings.jwt_algorithm)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """
    Resolves the request's bearer token to a verified user id.

    Protected routes depend on this; it raises AuthenticationError (401)
    when the header is absent or the token does not verify.
    """
    return verifier.verify(credentials.credentials if credentials else None)
