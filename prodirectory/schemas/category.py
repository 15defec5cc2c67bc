from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: bool = True


class CategoryCreate(CategoryBase):
    # derived from the name when omitted
    slug: Optional[str] = Field(None, min_length=1, pattern=r"^[\w-]+$")


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    parent_id: Optional[int] = None
    slug: Optional[str] = Field(None, min_length=1, pattern=r"^[\w-]+$")
    is_active: Optional[bool] = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    parent_id: Optional[int]
    slug: str
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfessionalCategoryResponse(BaseModel):
    id: int
    professional_id: int
    category_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
