# app/core/security.py
import logging
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from jose import jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class TokenIssueError(RuntimeError):
    """Raised when an access token cannot be signed (misconfigured secret)."""


class Authenticator:
    """
    Password hashing and access token handling.

    - Passwords: bcrypt via passlib, cost factor from settings.
    - Tokens: HS256 JWT carrying only the user id in `sub`, plus `iat`/`exp`.

    Authorization ("does this task belong to the caller") is not decided
    here; services scope every query by the caller's id.
    """

    def __init__(self, settings: Settings):
        self.secret = settings.JWT_SECRET
        self.algorithm = settings.JWT_ALG
        self.expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.pwd_ctx = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS,
        )

    # ----- Passwords -----

    def hash_password(self, raw: str) -> str:
        """Return a salted bcrypt hash of `raw`."""
        return self.pwd_ctx.hash(raw)

    def verify_password(self, raw: str, hashed: str) -> bool:
        """
        Check `raw` against a stored hash using passlib's comparison.
        A stored value that is not a recognizable hash never matches.
        """
        try:
            return self.pwd_ctx.verify(raw, hashed)
        except ValueError:
            logger.warning("Stored password hash has an unknown format")
            return False

    # ----- Tokens -----

    def create_access_token(self, user_id: uuid.UUID) -> str:
        """
        Issue a signed token for `user_id`, valid for `expire_minutes`.

        Raises:
            TokenIssueError: if signing fails.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        try:
            return jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except JOSEError as e:
            logger.error("Failed to sign access token: %s", e)
            raise TokenIssueError("Could not sign access token") from e

    def decode_access_token(self, token: str) -> uuid.UUID | None:
        """
        Verify signature and expiry and return the user id in the token.

        Returns None for any invalid token (bad signature, expired,
        malformed, missing or non-UUID `sub`); never raises.
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JOSEError:
            return None

        sub = claims.get("sub")
        if not isinstance(sub, str):
            return None
        try:
            return uuid.UUID(sub)
        except ValueError:
            return None


@lru_cache
def get_authenticator() -> Authenticator:
    """Process-wide Authenticator built from the cached settings."""
    return Authenticator(get_settings())
