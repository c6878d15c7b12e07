"""
Security: bcrypt password hashing and signed access tokens.
Tokens carry the user id as `sub` and expire after `jwt_expire_minutes`.
"""

from datetime import datetime, timezone, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from marketplace.config import get_settings

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Check a login attempt against the stored hash (constant time)."""
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: int, expires_in: timedelta | None = None) -> str:
    """Sign a token whose subject is the user id."""
    lifetime = expires_in if expires_in is not None else timedelta(minutes=settings.jwt_expire_minutes)
    now = datetime.now(timezone.utc)
    claims: dict[str, Any] = {"sub": str(user_id), "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Verify signature and expiry. Returns the claims, or None when the token is unusable."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def token_subject(token: str) -> int | None:
    """User id carried by a valid token; None for bad signatures, expiry or a malformed `sub`."""
    payload = decode_access_token(token)
    if not payload:
        return None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
