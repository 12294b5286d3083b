"""
User Repository Interface.
The credential store: identity lookups and persistence.
"""

from datetime import datetime
from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def find_by_email(self, email: str) -> Optional[User]:
        """Find an active user by (case-insensitive) email."""
        ...

    def find_by_reset_token(self, token_hash: str, now: datetime) -> Optional[User]:
        """Find an active user holding this reset-token hash with an unexpired window."""
        ...

    def list_including_inactive(self, skip: int = 0, limit: int = 100) -> List[User]:
        """List every account, deactivated ones included."""
        ...
