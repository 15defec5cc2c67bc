# prodirectory/db/models/user.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, false
from sqlalchemy.orm import relationship
from prodirectory.db.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # escalating privilege flags: super-admin implies admin
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
    is_super_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    created_at = Column(DateTime, default=utcnow)

    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    @property
    def role(self) -> str:
        if self.is_super_admin:
            return "superadmin"
        if self.is_admin:
            return "admin"
        return "user"

    @property
    def can_administer(self) -> bool:
        return bool(self.is_admin or self.is_super_admin)
