# prodirectory/api/routes/categories.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prodirectory.db.base import get_db
from prodirectory.db.models.category import Category
from prodirectory.db.models.user import User
from prodirectory.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from prodirectory.schemas.professional import ProfessionalResponse
from prodirectory.services.categories import (
    InvalidParentError,
    delete_category,
    get_professionals_by_category,
    slugify,
    validate_parent,
)
from prodirectory.core.security import require_admin, require_super_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["categories"])


def _ensure_slug_available(db: Session, slug: str, category_id: int = None) -> None:
    q = db.query(Category).filter(Category.slug == slug)
    if category_id is not None:
        q = q.filter(Category.id != category_id)
    if q.first():
        raise HTTPException(status_code=400, detail=f"Slug '{slug}' already exists")


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return db.query(Category).filter(Category.is_active == True).order_by(Category.id).all()


@router.get("/{category_id}/subcategories", response_model=List[CategoryResponse])
def list_subcategories(category_id: int, db: Session = Depends(get_db)):
    return db.query(Category).filter(Category.parent_id == category_id).order_by(Category.id).all()


@router.get("/{category_id}/professionals", response_model=List[ProfessionalResponse])
def list_category_professionals(category_id: int, db: Session = Depends(get_db)):
    return get_professionals_by_category(db, category_id)


@router.get("/{slug}", response_model=CategoryResponse)
def get_category_by_slug(slug: str, db: Session = Depends(get_db)):
    category = db.query(Category).filter(Category.slug == slug).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CategoryCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    slug = category_in.slug or slugify(category_in.name)
    if not slug:
        raise HTTPException(status_code=400, detail="Cannot derive a slug from this name")
    _ensure_slug_available(db, slug)

    try:
        validate_parent(db, category_in.parent_id)
    except InvalidParentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    category = Category(**category_in.model_dump(exclude={"slug"}), slug=slug)
    db.add(category)
    db.commit()
    db.refresh(category)

    logger.info("Admin %s created category %s (%s)", admin.id, category.id, category.slug)
    return category


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    update_data: CategoryUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    category = db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    changes = update_data.model_dump(exclude_unset=True)
    if changes.get("slug"):
        _ensure_slug_available(db, changes["slug"], category_id)
    if "parent_id" in changes:
        try:
            validate_parent(db, changes["parent_id"], category_id)
        except InvalidParentError as e:
            raise HTTPException(status_code=400, detail=str(e))

    # parent_id and description may be cleared, the rest are required columns
    for field, value in changes.items():
        if value is None and field not in ("parent_id", "description"):
            continue
        setattr(category, field, value)

    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_category(
    category_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_super_admin),
):
    category = db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    delete_category(db, category)
    logger.info("Super-admin %s deleted category %s", admin.id, category_id)
    return
