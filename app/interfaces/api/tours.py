"""Tours API routes — public reads, stats, admin maintenance."""

from fastapi import APIRouter, Depends, Query, status

from app.application.services.tour_service import (
    create_tour,
    delete_tour,
    get_tour,
    get_tour_stats,
)
from app.domain.models.user import User, UserRole
from app.domain.repositories.tour_repository import TourRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.tour import TourAdminRead, TourCreate, TourRead
from app.interfaces.api.deps import require_admin, require_roles
from app.interfaces.deps import get_tour_repository, get_user_repository

router = APIRouter(prefix="/api/v1/tours", tags=["Tours"])

require_tour_manager = require_roles(UserRole.ADMIN, UserRole.LEAD_GUIDE)


@router.get("")
def list_tours(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: TourRepository = Depends(get_tour_repository),
):
    tours = repo.list(skip=(page - 1) * page_size, limit=page_size)
    return {
        "status": "success",
        "results": len(tours),
        "data": {"tours": [TourRead.model_validate(t) for t in tours]},
    }


@router.get("/tour-stats")
def tour_stats(repo: TourRepository = Depends(get_tour_repository)):
    return {"status": "success", "data": {"stats": get_tour_stats(repo)}}


@router.get("/including-secret")
def list_tours_including_secret(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: TourRepository = Depends(get_tour_repository),
    admin: User = Depends(require_admin),
):
    tours = repo.list_including_private(skip=(page - 1) * page_size, limit=page_size)
    return {
        "status": "success",
        "results": len(tours),
        "data": {"tours": [TourAdminRead.model_validate(t) for t in tours]},
    }


@router.get("/{tour_id}")
def read_tour(tour_id: int, repo: TourRepository = Depends(get_tour_repository)):
    return {"status": "success", "data": {"tour": TourRead.model_validate(get_tour(repo, tour_id))}}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_tour(
    body: TourCreate,
    repo: TourRepository = Depends(get_tour_repository),
    users: UserRepository = Depends(get_user_repository),
    manager: User = Depends(require_tour_manager),
):
    tour = create_tour(repo, users, body)
    return {"status": "success", "data": {"tour": TourAdminRead.model_validate(tour)}}


@router.delete("/{tour_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_tour(
    tour_id: int,
    repo: TourRepository = Depends(get_tour_repository),
    manager: User = Depends(require_tour_manager),
):
    delete_tour(repo, tour_id)
