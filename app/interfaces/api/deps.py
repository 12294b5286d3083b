"""FastAPI dependency — bearer-token guard and role checks."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.application.services.auth_service import ensure_role, resolve_user_from_token
from app.domain.models.user import User, UserRole
from app.domain.repositories.user_repository import UserRepository
from app.interfaces.deps import get_user_repository

TOKEN_COOKIE = "jwt"

security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Authenticate the request from the Authorization header or the session cookie."""
    token = credentials.credentials if credentials else request.cookies.get(TOKEN_COOKIE)
    user = resolve_user_from_token(repo, token)
    request.state.user = user
    return user


def require_roles(*roles: UserRole):
    """Build a dependency that lets only the given roles through."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        return ensure_role(user, roles)

    return dependency


require_admin = require_roles(UserRole.ADMIN)
