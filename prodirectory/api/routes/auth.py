import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from prodirectory.db.base import get_db
from prodirectory.db.models.user import User
from prodirectory.schemas.user import UserCreate, LoginRequest, UserResponse
from prodirectory.core.security import (
    authenticate_user,
    clear_session_cookie,
    create_session,
    destroy_session,
    get_current_user,
    hash_password,
    session_cookie,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, response: Response, db: Session = Depends(get_db)):
    existing = db.query(User).filter(User.username == user.username).first()
    if existing:
        raise HTTPException(status_code=400, detail="Username already exists")

    new_user = User(
        username=user.username,
        password_hash=hash_password(user.password),
        is_admin=False,
        is_super_admin=False,
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    # registering also logs the new user in
    set_session_cookie(response, create_session(db, new_user))
    logger.info("Registered user %s (id=%s)", new_user.username, new_user.id)

    return new_user


@router.post("/login", response_model=UserResponse)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = authenticate_user(db, credentials.username, credentials.password)
    if not user:
        logger.info("Failed login for username %s", credentials.username)
        raise HTTPException(status_code=401, detail="Invalid username or password")

    set_session_cookie(response, create_session(db, user))
    logger.info("User %s logged in", user.id)
    return user


@router.post("/logout")
def logout(
    response: Response,
    session_id: Optional[str] = Depends(session_cookie),
    db: Session = Depends(get_db),
):
    if destroy_session(db, session_id):
        logger.info("Session closed")
    clear_session_cookie(response)
    return {"ok": True}


@router.get("/user", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
