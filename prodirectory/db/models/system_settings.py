# prodirectory/db/models/system_settings.py
from sqlalchemy import Column, Integer, Boolean, DateTime, true
from prodirectory.db.base import Base, utcnow


class SystemSettings(Base):
    """Singleton row (id = 1) holding the public rating toggles."""
    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True)
    show_ratings = Column(Boolean, nullable=False, default=True, server_default=true())
    allow_ratings = Column(Boolean, nullable=False, default=True, server_default=true())
    updated_at = Column(DateTime, default=utcnow)
