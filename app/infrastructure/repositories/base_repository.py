"""
SQLAlchemy implementation of the Base Repository.

Subclasses declare which rows are publicly visible; every default read is
narrowed by that predicate before results leave this layer. Only the
``*_including_private`` methods skip it.
"""

from abc import abstractmethod
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.orm import Query, Session

from app.domain.repositories.base import BaseRepository
from app.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Abstract visibility-scoped repository for SQLAlchemy models.

    Concrete repositories must define ``visibility_clause``.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @abstractmethod
    def visibility_clause(self) -> ColumnElement[bool]:
        """Predicate matching the rows default reads may return."""

    def _query(self) -> Query:
        return self.db.query(self.model).filter(self.visibility_clause())

    def _unscoped_query(self) -> Query:
        return self.db.query(self.model)

    # Scoped reads

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self._query().filter(self.model.id == id).first()

    def find_one(self, *criteria) -> Optional[ModelType]:
        return self._query().filter(*criteria).first()

    def list(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return self._query().order_by(self.model.id).offset(skip).limit(limit).all()

    def count(self) -> int:
        return self._query().count()

    def aggregate(self, build: Callable[[Any], Select]) -> List[Any]:
        """Run ``build(visible)`` where ``visible`` is the pre-filtered subquery.

        The visibility predicate is the innermost stage, so grouping and
        ordering applied by ``build`` only ever see visible rows.
        """
        visible = select(self.model).where(self.visibility_clause()).subquery()
        return self.db.execute(build(visible)).all()

    # Explicit bypass

    def get_by_id_including_private(self, id: int) -> Optional[ModelType]:
        return self._unscoped_query().filter(self.model.id == id).first()

    def list_including_private(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return self._unscoped_query().order_by(self.model.id).offset(skip).limit(limit).all()

    # Writes are never scoped

    def save(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: ModelType) -> None:
        self.db.delete(obj)
        self.db.commit()
