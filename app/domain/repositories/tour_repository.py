"""
Tour Repository Interface.
"""

from typing import Any, Dict, List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.tour import Tour


class TourRepository(BaseRepository[Tour]):
    """Interface for Tour-specific operations."""

    def find_by_slug(self, slug: str) -> Optional[Tour]:
        """Find a visible tour by slug."""
        ...

    def get_stats_by_difficulty(self, min_rating: float = 4.5) -> List[Dict[str, Any]]:
        """Aggregate visible tours grouped by difficulty."""
        ...
