# prodirectory/db/models/session.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from prodirectory.db.base import Base, utcnow


class UserSession(Base):
    """
    Server-side login session.
    The cookie only carries `id`; everything else stays in the database.
    """
    __tablename__ = "user_sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    user = relationship("User", back_populates="sessions")

    def is_expired(self) -> bool:
        return self.expires_at <= utcnow()
