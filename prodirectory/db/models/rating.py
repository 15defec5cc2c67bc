# prodirectory/db/models/rating.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from prodirectory.db.base import Base, utcnow


class Rating(Base):
    """
    Immutable once created. A user may rate the same professional more than once;
    every rating counts towards the professional's aggregates.
    """
    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_ratings_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # kept when the author's account is deleted
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    professional_id = Column(Integer, ForeignKey("professionals.id", ondelete="CASCADE"), nullable=False, index=True)

    rating = Column(Integer, nullable=False)   # 1..5
    comment = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", foreign_keys=[user_id])
    professional = relationship("Professional", foreign_keys=[professional_id])


class Recommendation(Base):
    """Cached suggestion row; the whole set for a user is replaced on each refresh."""
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    professional_id = Column(Integer, ForeignKey("professionals.id", ondelete="CASCADE"), nullable=False)
    score = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=utcnow)

    professional = relationship("Professional", foreign_keys=[professional_id])
