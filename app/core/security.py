"""Credential primitives — password hashing, bearer tokens, reset-token digests."""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

RESET_TOKEN_BYTES = 32
# bcrypt ignores everything past this many bytes of input
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised or corrupted hash
        return False


@dataclass(frozen=True)
class TokenPayload:
    subject_id: str
    issued_at: datetime
    expires_at: datetime


def create_access_token(subject_id, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a bearer token for ``subject_id``.

    ``iat`` is kept as a float so that staleness checks against
    ``password_changed_at`` work at sub-second resolution.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.JWT_EXPIRATION_DAYS))
    claims = {
        "sub": str(subject_id),
        "iat": now.timestamp(),
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """Check signature and expiry. Returns None for any invalid token."""
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    subject_id = payload.get("sub")
    issued_at = payload.get("iat")
    expires_at = payload.get("exp")
    if not subject_id or not isinstance(issued_at, (int, float)) or expires_at is None:
        return None

    return TokenPayload(
        subject_id=subject_id,
        issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
    )


def generate_reset_token() -> str:
    return secrets.token_hex(RESET_TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
