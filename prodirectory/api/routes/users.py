# prodirectory/api/routes/users.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prodirectory.db.base import get_db
from prodirectory.db.models.rating import Rating, Recommendation
from prodirectory.db.models.user import User
from prodirectory.schemas.user import AdminUserCreate, RoleUpdate, UserUpdate, UserResponse
from prodirectory.core.security import hash_password, require_super_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def role_flags(role: str) -> dict:
    return {
        "is_admin": role in ("admin", "superadmin"),
        "is_super_admin": role == "superadmin",
    }


def _get_other_user_or_error(db: Session, user_id: int, current_user: User, action: str) -> User:
    # a super-admin never acts on their own account here
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail=f"Cannot {action} your own account")
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db), admin: User = Depends(require_super_admin)):
    return db.query(User).order_by(User.id).all()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: AdminUserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_super_admin),
):
    existing = db.query(User).filter(User.username == user_in.username).first()
    if existing:
        raise HTTPException(status_code=400, detail="Username already exists")

    user = User(
        username=user_in.username,
        password_hash=hash_password(user_in.password),
        **role_flags(user_in.role),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Super-admin %s created user %s with role %s", admin.id, user.id, user_in.role)
    return user


@router.patch("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: int,
    role_in: RoleUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_super_admin),
):
    user = _get_other_user_or_error(db, user_id, admin, "modify the role of")

    for field, value in role_flags(role_in.role).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)

    logger.info("Super-admin %s set role of user %s to %s", admin.id, user.id, role_in.role)
    return user


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_super_admin),
):
    user = _get_other_user_or_error(db, user_id, admin, "modify")

    changes = {k: v for k, v in update_data.model_dump(exclude_unset=True).items() if v is not None}

    if "username" in changes and changes["username"] != user.username:
        taken = db.query(User).filter(User.username == changes["username"]).first()
        if taken:
            raise HTTPException(status_code=400, detail="Username already exists")

    password = changes.pop("password", None)
    if password:
        user.password_hash = hash_password(password)

    for field, value in changes.items():
        setattr(user, field, value)
    # super-admin implies admin
    if user.is_super_admin:
        user.is_admin = True

    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_super_admin),
):
    user = _get_other_user_or_error(db, user_id, admin, "delete")

    # ratings stay and keep counting towards the aggregates
    db.query(Rating).filter(Rating.user_id == user_id).update(
        {Rating.user_id: None}, synchronize_session=False
    )
    db.query(Recommendation).filter(Recommendation.user_id == user_id).delete(synchronize_session="fetch")
    db.delete(user)
    db.commit()

    logger.info("Super-admin %s deleted user %s", admin.id, user_id)
    return
