"""
Rating submission and maintenance of the per-professional aggregates.

`Professional.average_rating` and `Professional.total_ratings` are only ever
written here. The average is kept as an integer: each new rating folds into the
previous (already rounded) average, so it drifts from the exact mean over many
ratings. That approximation is intentional.
"""
import logging
import math
from typing import List, Optional

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from prodirectory.db.models.professional import Professional
from prodirectory.db.models.rating import Rating

logger = logging.getLogger(__name__)


class ProfessionalNotFoundError(Exception):
    """Rated professional does not exist."""
    pass


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def next_average(average: int, total: int, rating: int) -> int:
    """Average after folding one more rating into `total` previous ones."""
    return round_half_up((average * total + rating) / (total + 1))


def add_rating(
    db: Session,
    user_id: int,
    professional_id: int,
    rating: int,
    comment: Optional[str] = None,
) -> Rating:
    """
    Store a rating and update the professional's aggregates in one transaction.

    The aggregate read-modify-write is a single UPDATE evaluated by the database
    against the current row, so concurrent ratings of the same professional
    serialise on the row (or, on SQLite, on the write lock) and none are lost.
    The SQL expression is the integer form of `next_average`:
    floor(x / n + 1/2) == (2x + n) // 2n for non-negative integers.
    """
    professional = db.get(Professional, professional_id)
    if professional is None:
        raise ProfessionalNotFoundError(f"Professional {professional_id} not found")

    try:
        new_rating = Rating(
            user_id=user_id,
            professional_id=professional_id,
            rating=rating,
            comment=comment,
        )
        db.add(new_rating)
        db.flush()

        total = func.coalesce(Professional.total_ratings, 0)
        average = func.coalesce(Professional.average_rating, 0)
        db.query(Professional).filter(Professional.id == professional_id).update(
            {
                Professional.total_ratings: total + 1,
                Professional.average_rating: (2 * (average * total + rating) + total + 1) // (2 * (total + 1)),
            },
            synchronize_session=False,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.expire(professional)
    logger.info(
        "User %s rated professional %s with %s", user_id, professional_id, rating
    )
    return new_rating


def get_professional_ratings(db: Session, professional_id: int) -> List[Rating]:
    """Ratings of a professional, newest first."""
    return (
        db.query(Rating)
        .filter(Rating.professional_id == professional_id)
        .order_by(desc(Rating.created_at), desc(Rating.id))
        .all()
    )
