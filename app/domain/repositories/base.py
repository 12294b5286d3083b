"""
Base Repository Interface.
Defines the standard contract for data access operations.

Reads are visibility-scoped by default. Hidden records (secret tours,
deactivated accounts) are only reachable through the explicitly named
``*_including_private`` operations.
"""

from typing import Any, Callable, List, Optional, Protocol, TypeVar

from sqlalchemy import Select

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for visibility-scoped CRUD operations."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single visible entity by ID."""
        ...

    def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        """List visible entities with pagination."""
        ...

    def count(self) -> int:
        """Count visible entities."""
        ...

    def aggregate(self, build: Callable[[Any], Select]) -> List[Any]:
        """Run an aggregation over the visible rows only."""
        ...

    def get_by_id_including_private(self, id: int) -> Optional[T]:
        """Get an entity by ID, hidden or not."""
        ...

    def list_including_private(self, skip: int = 0, limit: int = 100) -> List[T]:
        """List every entity, hidden ones included."""
        ...

    def save(self, obj: T) -> T:
        """Insert or update an entity."""
        ...

    def delete(self, obj: T) -> None:
        """Delete an entity."""
        ...
