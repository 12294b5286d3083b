"""User administration routes — admin only."""

from fastapi import APIRouter, Depends, Query

from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import UserAdminRead
from app.interfaces.api.deps import require_admin
from app.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.get("")
def list_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    users = repo.list(skip=(page - 1) * page_size, limit=page_size)
    return {
        "status": "success",
        "results": len(users),
        "data": {"users": [UserAdminRead.model_validate(u) for u in users]},
    }


@router.get("/including-inactive")
def list_users_including_inactive(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: UserRepository = Depends(get_user_repository),
    admin: User = Depends(require_admin),
):
    """Every account, deactivated ones included."""
    users = repo.list_including_inactive(skip=(page - 1) * page_size, limit=page_size)
    return {
        "status": "success",
        "results": len(users),
        "data": {"users": [UserAdminRead.model_validate(u) for u in users]},
    }
