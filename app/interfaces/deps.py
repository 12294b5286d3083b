"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.infrastructure.mailer import EmailClient
from app.domain.models.tour import Tour
from app.domain.models.user import User
from app.domain.repositories.tour_repository import TourRepository
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.tour_repository import SQLAlchemyTourRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_tour_repository(db: Session = Depends(get_db)) -> TourRepository:
    """Get tour repository instance."""
    return SQLAlchemyTourRepository(db, Tour)


def get_mailer() -> EmailClient:
    return EmailClient()
