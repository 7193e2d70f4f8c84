"""
Security utilities
Password hashing, JWT issuance/verification and password-reset token helpers
"""

import hashlib
import logging
import re
import secrets
from datetime import timedelta
from typing import Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_EXPIRES_IN, JWT_SECRET
from .shared.time_utils import utcnow

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against bcrypt hash"""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# JWT
# ============================================================================


def parse_duration(value: str) -> timedelta:
    """Parse "7d", "12h", "30m", "45s" or a bare number of seconds"""
    match = _DURATION_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit])


def create_access_token(user_id: str, roles: list[str], expires_in: Optional[timedelta] = None) -> str:
    """Sign a JWT carrying the user id and role list"""
    expire = utcnow() + (expires_in or parse_duration(JWT_EXPIRES_IN))
    payload = {"userId": user_id, "roles": list(roles), "exp": expire}
    return jose_jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Return the token payload, or None if the signature or expiry is invalid"""
    try:
        return jose_jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None


# ============================================================================
# PASSWORD RESET TOKENS
# ============================================================================


def generate_reset_token() -> str:
    """32 random bytes, hex encoded. Only the sha256 digest is stored."""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
