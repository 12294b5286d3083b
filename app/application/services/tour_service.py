"""Tour service — tour reads and admin maintenance."""

import re
from typing import Any, Dict, List

from app.core.exceptions import EntityNotFoundException, ValidationFailedException
from app.domain.models.tour import Tour
from app.domain.models.user import UserRole
from app.domain.repositories.tour_repository import TourRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.tour import TourCreate

GUIDE_ROLES = (UserRole.GUIDE, UserRole.LEAD_GUIDE)


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def get_tour(repo: TourRepository, tour_id: int) -> Tour:
    tour = repo.get_by_id(tour_id)
    if tour is None:
        raise EntityNotFoundException("No tour found with that ID")
    return tour


def create_tour(repo: TourRepository, users: UserRepository, body: TourCreate) -> Tour:
    guides = []
    for guide_id in body.guide_ids:
        guide = users.get_by_id(guide_id)
        if guide is None or not guide.has_role(*GUIDE_ROLES):
            raise ValidationFailedException(f"User {guide_id} is not an active guide")
        guides.append(guide)

    tour = Tour(
        name=body.name.strip(),
        slug=slugify(body.name),
        duration=body.duration,
        max_group_size=body.max_group_size,
        difficulty=body.difficulty,
        ratings_average=body.ratings_average,
        price=body.price,
        summary=body.summary.strip(),
        secret_tour=body.secret_tour,
        all_guides=guides,
    )
    return repo.save(tour)


def delete_tour(repo: TourRepository, tour_id: int) -> None:
    tour = repo.get_by_id_including_private(tour_id)
    if tour is None:
        raise EntityNotFoundException("No tour found with that ID")
    repo.delete(tour)


def get_tour_stats(repo: TourRepository) -> List[Dict[str, Any]]:
    return repo.get_stats_by_difficulty()
