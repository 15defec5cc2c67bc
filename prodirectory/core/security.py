"""
Password hashing, server-side sessions and the access-control dependencies.

Routes gate mutations with:
    current_user: User = Depends(get_current_user)      # any logged-in user, else 401
    admin: User = Depends(require_admin)                # admin or super-admin, else 401/403
    admin: User = Depends(require_super_admin)          # super-admin only, else 401/403
"""
import logging
import secrets
from datetime import timedelta
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from prodirectory.core.config import settings
from prodirectory.db.base import get_db, utcnow
from prodirectory.db.models.session import UserSession
from prodirectory.db.models.user import User

logger = logging.getLogger(__name__)

session_cookie = APIKeyCookie(
    name=settings.SESSION_COOKIE_NAME,
    scheme_name="SessionCookie",
    description="Server-side session id issued by /api/login",
    auto_error=False,
)


# =============================================================================
# PASSWORDS
# =============================================================================

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against its stored bcrypt hash.

    Malformed hashes count as a mismatch rather than an error.
    """
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


# =============================================================================
# SESSIONS
# =============================================================================

def create_session(db: Session, user: User) -> UserSession:
    now = utcnow()
    user_session = UserSession(
        id=secrets.token_urlsafe(32),
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(hours=settings.SESSION_MAX_AGE_HOURS),
    )
    db.add(user_session)
    db.commit()
    return user_session


def destroy_session(db: Session, session_id: Optional[str]) -> bool:
    if not session_id:
        return False
    deleted = db.query(UserSession).filter(UserSession.id == session_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)


def set_session_cookie(response: Response, user_session: UserSession) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=user_session.id,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_optional_user(
    session_id: Optional[str] = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the session cookie to a user, or None for anonymous callers."""
    if not session_id:
        return None

    user_session = db.get(UserSession, session_id)
    if user_session is None:
        return None

    if user_session.is_expired():
        logger.info("Expired session dropped for user %s", user_session.user_id)
        db.delete(user_session)
        db.commit()
        return None

    return db.get(User, user_session.user_id)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.can_administer:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return current_user


def require_super_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_super_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return current_user
