"""Caller identity: resolves the bearer token on a request to a user id.

The user id returned here is trusted as-is by everything downstream.
"""

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ordering.config import settings

_bearer = HTTPBearer(auto_error=False)


def _user_id_from_claims(claims: dict) -> str | None:
    user = claims.get("user")
    if isinstance(user, dict):
        user_id = user.get("_id") or user.get("id")
        if user_id:
            return str(user_id)
    sub = claims.get("sub")
    return str(sub) if sub else None


def decode_token(token: str) -> dict:
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def issue_token(user_id: str, **claims) -> str:
    """Sign a token for ``user_id``. Used by tooling and tests."""
    payload = {"sub": str(user_id), **claims}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def current_user_id(credentials: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        claims = decode_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token") from None

    user_id = _user_id_from_claims(claims)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token carries no user")
    return user_id
