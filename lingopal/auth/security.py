"""Security primitives for local auth (password hashing + JWT)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

from lingopal.auth.exceptions import InvalidTokenError, TokenExpiredError
from lingopal.config.settings import get_settings


# Argon2 for new hashes; bcrypt kept so legacy hashes still verify and get upgraded
password_hash = PasswordHash((Argon2Hasher(), BcryptHasher()))
ALGORITHM = "HS256"


def create_access_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT access token for bearer transport."""
    if expires_delta is None:
        expires_delta = timedelta(hours=get_settings().JWT_EXPIRE_HOURS)
    now = datetime.now(UTC)
    to_encode = {"exp": now + expires_delta, "iat": now, "sub": str(subject)}
    return jwt.encode(to_encode, get_settings().JWT_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify an access token, raising auth errors on failure."""
    try:
        return jwt.decode(token, get_settings().JWT_SECRET, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError from e


def verify_password(plain: str, hashed: str) -> tuple[bool, str | None]:
    """Verify password and return (verified, updated_hash_if_any)."""
    return password_hash.verify_and_update(plain, hashed)


def get_password_hash(password: str) -> str:
    """Hash password for storage."""
    return password_hash.hash(password)
