# prodirectory/schemas/rating.py
from pydantic import BaseModel, Field, conint
from typing import Optional
from datetime import datetime


class RatingCreate(BaseModel):
    rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    comment: Optional[str] = None


class RatingResponse(BaseModel):
    id: int
    user_id: Optional[int]
    professional_id: int
    rating: int
    comment: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class RecommendationResponse(BaseModel):
    id: int
    user_id: int
    professional_id: int
    score: int
    created_at: datetime

    class Config:
        from_attributes = True
