# app/core/auth.py
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.security import Authenticator, get_authenticator

# HTTP Bearer scheme:
# - auto_error=False => a missing/non-Bearer Authorization header yields None
#   so we can answer with our own 401 message instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    authenticator: Authenticator = Depends(get_authenticator),
) -> uuid.UUID:
    """
    Gate for every protected route.

    Flow:
      1. Authorization header must be `Bearer <token>`.
      2. Token signature and expiry must verify.
      3. The user id from the token is returned and passed explicitly
         into service calls by the routers.

    The user row is not loaded here; services report 404 themselves
    if the account no longer exists.

    Raises:
        HTTPException(401): missing header, wrong scheme, invalid/expired token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = authenticator.decode_access_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id
