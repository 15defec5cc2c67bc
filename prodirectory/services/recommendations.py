"""
Per-user recommendations.

Users without ratings get the globally best-rated professionals. Otherwise the
suggestions are professionals sharing an occupation with any professional the
user rated 4 or more, best-rated first. The stored set is replaced wholesale on
every refresh; the replace is not transactional, readers may briefly see a
partial set.
"""
import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from prodirectory.core.config import settings
from prodirectory.db.models.professional import Professional
from prodirectory.db.models.rating import Rating, Recommendation

logger = logging.getLogger(__name__)

LIKED_RATING = 4


def get_recommendations(db: Session, user_id: int, limit: Optional[int] = None) -> List[Professional]:
    limit = limit or settings.RECOMMENDATION_LIMIT
    ordering = (desc(Professional.average_rating), Professional.id)

    has_ratings = db.query(Rating.id).filter(Rating.user_id == user_id).first() is not None
    if not has_ratings:
        return db.query(Professional).order_by(*ordering).limit(limit).all()

    liked_occupations = (
        select(Professional.occupation)
        .join(Rating, Rating.professional_id == Professional.id)
        .where(Rating.user_id == user_id, Rating.rating >= LIKED_RATING)
    )
    return (
        db.query(Professional)
        .filter(Professional.occupation.in_(liked_occupations))
        .order_by(*ordering)
        .limit(limit)
        .all()
    )


def update_recommendations(db: Session, user_id: int) -> List[Recommendation]:
    """Recompute the user's suggestions and replace the stored rows."""
    professionals = get_recommendations(db, user_id)

    # also evicts the old rows from the identity map
    db.query(Recommendation).filter(Recommendation.user_id == user_id).delete(synchronize_session="fetch")
    db.commit()

    rows = [
        Recommendation(
            user_id=user_id,
            professional_id=professional.id,
            score=professional.average_rating or 0,
        )
        for professional in professionals
    ]
    db.add_all(rows)
    db.commit()

    logger.info("Refreshed %d recommendations for user %s", len(rows), user_id)
    return rows


def get_stored_recommendations(db: Session, user_id: int) -> List[Recommendation]:
    return (
        db.query(Recommendation)
        .filter(Recommendation.user_id == user_id)
        .order_by(desc(Recommendation.score), Recommendation.id)
        .all()
    )
