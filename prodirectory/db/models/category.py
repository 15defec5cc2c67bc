# prodirectory/db/models/category.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint, true
from sqlalchemy.orm import relationship
from prodirectory.db.base import Base, utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    # self reference, one level of nesting in practice; cycles are not checked
    parent_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    slug = Column(String, nullable=False, unique=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime, default=utcnow)

    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship("Category", back_populates="parent")


class ProfessionalCategory(Base):
    """Auxiliary categories of a professional, beyond its primary `category_id`."""
    __tablename__ = "professional_categories"
    __table_args__ = (
        UniqueConstraint("professional_id", "category_id", name="uq_professional_category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    professional_id = Column(Integer, ForeignKey("professionals.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    professional = relationship("Professional", foreign_keys=[professional_id])
    category = relationship("Category", foreign_keys=[category_id])
