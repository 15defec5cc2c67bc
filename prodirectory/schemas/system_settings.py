from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class SystemSettingsUpdate(BaseModel):
    show_ratings: Optional[bool] = None
    allow_ratings: Optional[bool] = None


class SystemSettingsResponse(BaseModel):
    show_ratings: bool
    allow_ratings: bool
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
