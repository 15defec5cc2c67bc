# prodirectory/api/routes/ratings.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from prodirectory.db.base import get_db
from prodirectory.db.models.user import User
from prodirectory.schemas.rating import RatingCreate, RatingResponse
from prodirectory.services.ratings import ProfessionalNotFoundError, add_rating, get_professional_ratings
from prodirectory.services.recommendations import update_recommendations
from prodirectory.services.system_settings import (
    RatingsDisabledError,
    ensure_ratings_allowed,
    get_system_settings,
)
from prodirectory.core.security import get_current_user, get_optional_user

router = APIRouter(prefix="/api/professionals", tags=["ratings"])


# Rate a professional (any logged-in user)
@router.post("/{professional_id}/rate", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
def rate_professional(
    professional_id: int,
    rating_in: RatingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ensure_ratings_allowed(db)
        rating = add_rating(
            db,
            user_id=current_user.id,
            professional_id=professional_id,
            rating=rating_in.rating,
            comment=rating_in.comment,
        )
    except RatingsDisabledError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ProfessionalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    # refresh this user's suggestions now that their ratings changed
    update_recommendations(db, current_user.id)

    return rating


# List ratings for a professional (public unless ratings are hidden)
@router.get("/{professional_id}/ratings", response_model=List[RatingResponse])
def list_professional_ratings(
    professional_id: int,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    if not get_system_settings(db).show_ratings and not (current_user and current_user.can_administer):
        return []
    return get_professional_ratings(db, professional_id)
