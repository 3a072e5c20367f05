"""
Security: password hashing, verification tokens and JWT bearer tokens.
No plain-text passwords are stored; tokens carry the full identity claim.
"""

import secrets
from datetime import datetime, timezone, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from aubazaar.config import Settings
from aubazaar.schemas.auth import TokenClaims

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """One-way salted hash for storage."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


def generate_verification_token() -> str:
    return secrets.token_urlsafe(24)


def create_access_token(claims: TokenClaims, settings: Settings) -> str:
    """Sign a time-limited JWT for the given identity."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    to_encode: dict[str, Any] = {
        "sub": str(claims.id),
        "email": claims.email,
        "role": claims.role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenClaims | None:
    """Verify signature and expiry. Returns the identity claim or None if invalid."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    try:
        return TokenClaims(id=int(payload["sub"]), email=payload["email"], role=payload["role"])
    except (KeyError, TypeError, ValueError):
        return None
