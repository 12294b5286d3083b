"""
SQLAlchemy Implementation of User Repository.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import ColumnElement
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictException
from app.domain.models.user import User
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """Credential store backed by the 'users' table. Deactivated accounts are hidden."""

    def visibility_clause(self) -> ColumnElement[bool]:
        return User.is_active.is_not(False)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_one(User.email == email.strip().lower())

    def find_by_reset_token(self, token_hash: str, now: datetime) -> Optional[User]:
        return self.find_one(
            User.password_reset_token == token_hash,
            User.password_reset_expires_at > now,
        )

    def list_including_inactive(self, skip: int = 0, limit: int = 100) -> List[User]:
        return self.list_including_private(skip, limit)

    def save(self, obj: User) -> User:
        obj.email = obj.email.strip().lower()
        try:
            return super().save(obj)
        except IntegrityError:
            self.db.rollback()
            raise ConflictException("Email is already registered")
