from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from prodirectory.db.base import get_db
from prodirectory.db.models.user import User
from prodirectory.schemas.professional import ProfessionalResponse
from prodirectory.schemas.rating import RecommendationResponse
from prodirectory.services.recommendations import get_recommendations, get_stored_recommendations
from prodirectory.core.security import get_current_user

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.get("", response_model=List[ProfessionalResponse])
def read_recommendations(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_recommendations(db, current_user.id)


# last set stored by a rating submission
@router.get("/stored", response_model=List[RecommendationResponse])
def read_stored_recommendations(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_stored_recommendations(db, current_user.id)
