"""
Singleton system settings: whether ratings are shown publicly and whether new
ratings are accepted.
"""
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from prodirectory.db.base import utcnow
from prodirectory.db.models.system_settings import SystemSettings

logger = logging.getLogger(__name__)

SINGLETON_ID = 1
DEFAULTS = {"show_ratings": True, "allow_ratings": True}


class RatingsDisabledError(Exception):
    """Rating submission is switched off."""
    pass


def get_system_settings(db: Session) -> SystemSettings:
    """
    Return the settings row.

    Before the first update nothing is stored; an unsaved instance carrying the
    defaults is returned instead.
    """
    row = db.get(SystemSettings, SINGLETON_ID)
    if row is None:
        return SystemSettings(updated_at=None, **DEFAULTS)
    return row


def update_system_settings(db: Session, changes: Dict[str, Any]) -> SystemSettings:
    """
    Upsert the singleton, merging `changes` over the last-known values.

    Keys mapped to None are ignored; `updated_at` is always refreshed.
    """
    row = db.get(SystemSettings, SINGLETON_ID)
    if row is None:
        row = SystemSettings(id=SINGLETON_ID, **DEFAULTS)
        db.add(row)

    for field, value in changes.items():
        if field in DEFAULTS and value is not None:
            setattr(row, field, value)
    row.updated_at = utcnow()

    db.commit()
    db.refresh(row)
    logger.info(
        "System settings updated: show_ratings=%s allow_ratings=%s",
        row.show_ratings,
        row.allow_ratings,
    )
    return row


def ensure_ratings_allowed(db: Session) -> None:
    if not get_system_settings(db).allow_ratings:
        raise RatingsDisabledError("Ratings are currently disabled")
