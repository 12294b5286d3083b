"""Tour domain model — maps to the 'tours' table."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    and_,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base
from app.domain.models.user import User

tour_guides = Table(
    "tour_guides",
    Base.metadata,
    Column("tour_id", Integer, ForeignKey("tours.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Tour(Base):
    __tablename__ = "tours"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(40), unique=True, nullable=False)
    slug = Column(String(60), nullable=False, index=True)
    duration = Column(Integer, nullable=False)
    max_group_size = Column(Integer, nullable=False)
    difficulty = Column(String(20), nullable=False)
    ratings_average = Column(Float, nullable=False, default=4.5)
    ratings_quantity = Column(Integer, nullable=False, default=0)
    price = Column(Float, nullable=False)
    summary = Column(Text, nullable=False)
    secret_tour = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Writable association; includes deactivated guide accounts
    all_guides = relationship(User, secondary=tour_guides, lazy="selectin")

    # Read path: deactivated accounts are hidden like any other user read
    guides = relationship(
        User,
        secondary=tour_guides,
        primaryjoin=lambda: Tour.id == tour_guides.c.tour_id,
        secondaryjoin=lambda: and_(
            tour_guides.c.user_id == User.id,
            User.is_active.is_not(False),
        ),
        viewonly=True,
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Tour {self.id} - {self.name}>"
