# app/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext
from jose import jwt, JWTError

from app.core.config import (
    JWT_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.logger import get_logger

logger = get_logger("auth.security")

# =====================================================
# PASSWORD HASHING
# =====================================================
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


def hash_password(password: str) -> Optional[str]:
    """Return the bcrypt hash of ``password``, or ``None`` if it cannot be hashed.

    Callers must treat ``None`` as invalid input and never persist it.
    """
    try:
        return pwd_context.hash(password)
    except (TypeError, ValueError) as exc:
        logger.warning("Password hashing rejected input", extra={"reason": str(exc)})
        return None


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except (TypeError, ValueError):
        # unknown hash format or unusable plaintext never matches
        return False

# =====================================================
# ACCESS TOKEN
# =====================================================
def create_access_token(
    user_id: int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta
        if expires_delta
        else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    payload = {
        "sub": str(user_id),
        "type": "access",
        "iat": now,
        "exp": expire,
    }

    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)

# =====================================================
# DECODE + VALIDATE TOKEN
# =====================================================
def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
        )
    except JWTError:
        raise AppException("Invalid or expired token", ErrorCode.UNAUTHORIZED)

    if payload.get("type") != "access":
        raise AppException("Invalid token type", ErrorCode.UNAUTHORIZED)

    return payload


def decode_user_id(token: str) -> int:
    """Decode a bearer token and return the user id it was issued for."""
    payload = decode_access_token(token)

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AppException("Invalid token subject", ErrorCode.UNAUTHORIZED)
