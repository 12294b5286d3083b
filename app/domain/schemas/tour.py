"""Pydantic schemas for Tour."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.schemas.auth import UserRead


class TourCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=10, max_length=40)
    duration: int = Field(gt=0)
    max_group_size: int = Field(gt=0, alias="maxGroupSize")
    difficulty: Literal["easy", "medium", "difficult"]
    ratings_average: float = Field(default=4.5, ge=1, le=5, alias="ratingsAverage")
    price: float = Field(gt=0)
    summary: str = Field(min_length=1)
    secret_tour: bool = Field(default=False, alias="secretTour")
    guide_ids: List[int] = Field(default_factory=list, alias="guides")

    @model_validator(mode="after")
    def round_rating(self):
        self.ratings_average = round(self.ratings_average, 1)
        return self


class TourRead(BaseModel):
    id: int
    name: str
    slug: str
    duration: int
    max_group_size: int
    difficulty: str
    ratings_average: float
    ratings_quantity: int
    price: float
    summary: str
    guides: List[UserRead] = []
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TourAdminRead(TourRead):
    secret_tour: bool
