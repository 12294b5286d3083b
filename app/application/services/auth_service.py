"""Auth service — accounts, login, bearer-token checks and password recovery."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Protocol

import structlog

from app.config import get_settings
from app.core.exceptions import (
    DeliveryFailedException,
    EntityNotFoundException,
    ForbiddenException,
    InvalidResetTokenException,
    UnauthorizedException,
    ValidationFailedException,
)
from app.core.security import (
    BCRYPT_MAX_PASSWORD_BYTES,
    create_access_token,
    decode_access_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    pwd_context,
    verify_password,
)
from app.domain.models.user import User, UserRole
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.notification import EmailMessage

settings = get_settings()
logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"
NOT_LOGGED_IN = "You are not logged in! Please log in to get access."
PROFILE_FIELDS = ("name", "email", "photo")


class Mailer(Protocol):
    async def send(self, message: EmailMessage) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def check_password_policy(password: Optional[str], password_confirm: Optional[str] = None) -> None:
    if not password or len(password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationFailedException(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
        )
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationFailedException(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
        )
    if password_confirm is not None and password != password_confirm:
        raise ValidationFailedException("Passwords are not the same!")


def _set_password(user: User, password: str) -> None:
    user.password_hash = hash_password(password)
    user.password_changed_at = _utcnow()


# =============================================================================
# Accounts
# =============================================================================

def create_user(
    repo: UserRepository,
    email: str,
    password: str,
    password_confirm: Optional[str] = None,
    name: Optional[str] = None,
    role: UserRole = UserRole.USER,
    photo: Optional[str] = None,
) -> User:
    """Create an account. The password is hashed here, before anything is stored."""
    if not email:
        raise ValidationFailedException("Please provide your email!")
    check_password_policy(password, password_confirm)

    user = User(
        name=name,
        email=email,
        photo=photo,
        role=UserRole(role).value,
        password_hash=hash_password(password),
        is_active=True,
    )
    user = repo.save(user)
    logger.info("User signed up", user_id=user.id, role=user.role)
    return user


def authenticate_user(repo: UserRepository, email: Optional[str], password: Optional[str]) -> User:
    """Check login credentials.

    Unknown email and wrong password produce the same error.
    """
    if not email or not password:
        raise ValidationFailedException("Please provide email and password!")

    user = repo.find_by_email(email)
    if user is None:
        # Burn comparable time so response latency does not reveal the account
        pwd_context.dummy_verify()
        logger.info("Login failed", reason="unknown_email")
        raise UnauthorizedException(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.info("Login failed", reason="bad_password", user_id=user.id)
        raise UnauthorizedException(INVALID_CREDENTIALS)
    return user


def issue_token(user: User) -> str:
    return create_access_token(user.id)


def change_password(
    repo: UserRepository,
    user: User,
    password_current: str,
    password: str,
    password_confirm: Optional[str] = None,
) -> User:
    if not verify_password(password_current, user.password_hash):
        raise UnauthorizedException("Your current password is wrong.")
    check_password_policy(password, password_confirm)

    _set_password(user, password)
    user = repo.save(user)
    logger.info("Password changed", user_id=user.id)
    return user


def update_profile(repo: UserRepository, user: User, data: Dict[str, Any]) -> User:
    """Update non-credential profile fields only."""
    if {"password", "passwordConfirm", "password_confirm"} & set(data):
        raise ValidationFailedException(
            "This route is not for password updates. Please use /updateMyPassword."
        )
    for field in PROFILE_FIELDS:
        if data.get(field) is not None:
            setattr(user, field, data[field])
    return repo.save(user)


def deactivate_user(repo: UserRepository, user: User) -> None:
    """Soft delete: the account disappears from every default read."""
    user.is_active = False
    repo.save(user)
    logger.info("Account deactivated", user_id=user.id)


# =============================================================================
# Bearer-token guard
# =============================================================================

def resolve_user_from_token(repo: UserRepository, token: Optional[str]) -> User:
    """Turn a bearer token into a live, active, non-stale identity.

    Every failure is reported as UnauthorizedException; role checks are
    separate (see ``ensure_role``).
    """
    if not token:
        raise UnauthorizedException(NOT_LOGGED_IN)

    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedException("Invalid or expired token. Please log in again.")

    try:
        user_id = int(payload.subject_id)
    except ValueError:
        raise UnauthorizedException("Invalid or expired token. Please log in again.")

    user = repo.get_by_id(user_id)
    if user is None:
        raise UnauthorizedException("The user belonging to this token no longer exists.")

    if user.changed_password_after(payload.issued_at):
        raise UnauthorizedException("User recently changed password! Please log in again.")

    return user


def ensure_role(user: User, roles: Iterable) -> User:
    roles = tuple(roles)
    if roles and not user.has_role(*roles):
        logger.info("Permission denied", user_id=user.id, role=user.role)
        raise ForbiddenException("You do not have permission to perform this action")
    return user


# =============================================================================
# Password reset
# =============================================================================

def create_password_reset_token(repo: UserRepository, user: User) -> str:
    """Store the digest of a fresh reset token and return the plaintext.

    A newer token replaces any older one for the same user.
    """
    plaintext = generate_reset_token()
    user.password_reset_token = hash_reset_token(plaintext)
    user.password_reset_expires_at = _utcnow() + timedelta(
        minutes=settings.PASSWORD_RESET_EXPIRATION_MINUTES
    )
    repo.save(user)
    return plaintext


def clear_password_reset_token(repo: UserRepository, user: User) -> None:
    user.password_reset_token = None
    user.password_reset_expires_at = None
    repo.save(user)


async def request_password_reset(
    repo: UserRepository,
    mailer: Mailer,
    email: str,
    reset_url_for: Callable[[str], str],
) -> None:
    user = repo.find_by_email(email)
    if user is None:
        raise EntityNotFoundException("There is no user with that email address.")

    token = create_password_reset_token(repo, user)
    message = EmailMessage(
        recipient=user.email,
        subject=f"Your password reset token (valid for {settings.PASSWORD_RESET_EXPIRATION_MINUTES} min)",
        body=(
            f"Forgot your password? Submit a PATCH request with your new password "
            f"and passwordConfirm to: {reset_url_for(token)}\n"
            f"If you didn't forget your password, please ignore this email!"
        ),
    )

    try:
        await mailer.send(message)
    except Exception as e:
        # Any failure after the token is stored must leave no redeemable token behind
        clear_password_reset_token(repo, user)
        logger.error("Reset email delivery failed; token revoked", user_id=user.id, error=type(e).__name__)
        raise DeliveryFailedException() from e

    logger.info("Password reset requested", user_id=user.id)


def reset_password(
    repo: UserRepository,
    token: str,
    password: str,
    password_confirm: Optional[str] = None,
) -> User:
    """Redeem a reset token. Wrong and expired tokens fail identically."""
    user = repo.find_by_reset_token(hash_reset_token(token), _utcnow())
    if user is None:
        raise InvalidResetTokenException()
    check_password_policy(password, password_confirm)

    _set_password(user, password)
    user.password_reset_token = None
    user.password_reset_expires_at = None
    user = repo.save(user)
    logger.info("Password reset completed", user_id=user.id)
    return user
