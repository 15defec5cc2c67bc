# prodirectory/schemas/professional.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


# Shared fields
class ProfessionalBase(BaseModel):
    name: str = Field(..., min_length=1)
    occupation: str = Field(..., min_length=1)
    description: str
    detailed_description: str
    photo_url: str
    whatsapp: str
    location: str = ""
    category_id: Optional[int] = None


# Admin creates a listing
class ProfessionalCreate(ProfessionalBase):
    pass


# Admin edits a listing; rating aggregates are not writable here
class ProfessionalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    occupation: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    detailed_description: Optional[str] = None
    photo_url: Optional[str] = None
    whatsapp: Optional[str] = None
    location: Optional[str] = None
    category_id: Optional[int] = None


# What API returns
class ProfessionalResponse(BaseModel):
    id: int

    name: str
    occupation: str
    description: str
    detailed_description: str
    photo_url: str
    whatsapp: str
    location: str
    category_id: Optional[int]

    average_rating: int
    total_ratings: int

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
