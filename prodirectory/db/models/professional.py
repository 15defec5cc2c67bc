# prodirectory/db/models/professional.py

from sqlalchemy import Column, DateTime, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from prodirectory.db.base import Base, utcnow


class Professional(Base):
    __tablename__ = "professionals"

    id = Column(Integer, primary_key=True, index=True)

    # Profile
    name = Column(String, nullable=False)
    occupation = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    detailed_description = Column(String, nullable=False)
    photo_url = Column(String, nullable=False)
    whatsapp = Column(String, nullable=False)
    location = Column(String, nullable=False, default="", server_default="")

    # Primary category
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)

    # Rating aggregates, written only by the rating service
    average_rating = Column(Integer, nullable=False, default=0, server_default="0")
    total_ratings = Column(Integer, nullable=False, default=0, server_default="0")

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    category = relationship("Category", foreign_keys=[category_id])
