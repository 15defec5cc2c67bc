"""
Database initialisation: creates the tables and, when configured, the
bootstrap super-admin account.
"""
import logging

from prodirectory.core.config import settings
from prodirectory.core.security import hash_password
from prodirectory.db.base import Base, SessionLocal, engine
from prodirectory.db.models import User

logger = logging.getLogger(__name__)


def create_all_tables() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables.keys())))


def ensure_superadmin() -> None:
    """Create the SUPERADMIN_USERNAME account if it does not exist yet."""
    if not settings.superadmin_configured:
        return

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == settings.SUPERADMIN_USERNAME).first()
        if existing:
            logger.info("Super-admin %s already exists", existing.username)
            return

        db.add(
            User(
                username=settings.SUPERADMIN_USERNAME,
                password_hash=hash_password(settings.SUPERADMIN_PASSWORD),
                is_admin=True,
                is_super_admin=True,
            )
        )
        db.commit()
        logger.info("Super-admin %s created", settings.SUPERADMIN_USERNAME)
    finally:
        db.close()


def init_db() -> None:
    create_all_tables()
    ensure_superadmin()
