"""
SQLAlchemy Implementation of Tour Repository.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictException
from app.domain.models.tour import Tour
from app.domain.repositories.tour_repository import TourRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyTourRepository(SQLAlchemyRepository[Tour], TourRepository):
    """Tour repository implementation using SQLAlchemy. Secret tours are hidden."""

    def visibility_clause(self) -> ColumnElement[bool]:
        return Tour.secret_tour.is_not(True)

    def find_by_slug(self, slug: str) -> Optional[Tour]:
        return self.find_one(Tour.slug == slug)

    def get_stats_by_difficulty(self, min_rating: float = 4.5) -> List[Dict[str, Any]]:
        def build(visible):
            return (
                select(
                    func.upper(visible.c.difficulty).label("difficulty"),
                    func.count(visible.c.id).label("num_tours"),
                    func.sum(visible.c.ratings_quantity).label("num_ratings"),
                    func.avg(visible.c.ratings_average).label("avg_rating"),
                    func.avg(visible.c.price).label("avg_price"),
                    func.min(visible.c.price).label("min_price"),
                    func.max(visible.c.price).label("max_price"),
                )
                .where(visible.c.ratings_average >= min_rating)
                .group_by(func.upper(visible.c.difficulty))
                .order_by(func.avg(visible.c.price))
            )

        return [
            {
                "difficulty": r.difficulty,
                "num_tours": r.num_tours,
                "num_ratings": r.num_ratings or 0,
                "avg_rating": round(float(r.avg_rating), 2),
                "avg_price": round(float(r.avg_price), 2),
                "min_price": r.min_price,
                "max_price": r.max_price,
            }
            for r in self.aggregate(build)
        ]

    def save(self, obj: Tour) -> Tour:
        try:
            return super().save(obj)
        except IntegrityError:
            self.db.rollback()
            raise ConflictException("A tour with this name already exists")
