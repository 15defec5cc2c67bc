# prodirectory/api/routes/professionals.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from prodirectory.db.base import get_db
from prodirectory.db.models.category import Category, ProfessionalCategory
from prodirectory.db.models.professional import Professional
from prodirectory.db.models.rating import Rating, Recommendation
from prodirectory.db.models.user import User
from prodirectory.schemas.category import CategoryResponse, ProfessionalCategoryResponse
from prodirectory.schemas.professional import ProfessionalCreate, ProfessionalUpdate, ProfessionalResponse
from prodirectory.services.categories import get_categories_by_professional
from prodirectory.core.security import require_admin, require_super_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/professionals", tags=["professionals"])


def _get_professional_or_404(db: Session, professional_id: int) -> Professional:
    professional = db.get(Professional, professional_id)
    if not professional:
        raise HTTPException(status_code=404, detail="Professional not found")
    return professional


def _ensure_category_exists(db: Session, category_id: Optional[int]) -> None:
    if category_id is not None and db.get(Category, category_id) is None:
        raise HTTPException(status_code=404, detail="Category not found")


# Public listing with search / filters

@router.get("", response_model=List[ProfessionalResponse])
def list_professionals(
    q: Optional[str] = Query(None, description="Case-insensitive match on the name"),
    occupation: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None, description="Primary or auxiliary category"),
    location: Optional[str] = Query(None),
    min_rating: Optional[int] = Query(None, ge=0, le=5),
    db: Session = Depends(get_db),
):
    query = db.query(Professional)

    if q:
        query = query.filter(Professional.name.ilike(f"%{q.strip()}%"))

    if occupation:
        query = query.filter(Professional.occupation == occupation)

    if category_id is not None:
        assigned = select(ProfessionalCategory.professional_id).where(
            ProfessionalCategory.category_id == category_id
        )
        query = query.filter(
            or_(Professional.category_id == category_id, Professional.id.in_(assigned))
        )

    if location:
        query = query.filter(Professional.location.ilike(f"%{location.strip()}%"))

    if min_rating is not None:
        query = query.filter(Professional.average_rating >= min_rating)

    return query.order_by(Professional.id).all()


@router.get("/occupations", response_model=List[str])
def list_occupations(db: Session = Depends(get_db)):
    rows = db.query(Professional.occupation).distinct().order_by(Professional.occupation).all()
    return [occupation for (occupation,) in rows]


@router.get("/{professional_id}", response_model=ProfessionalResponse)
def get_professional(professional_id: int, db: Session = Depends(get_db)):
    return _get_professional_or_404(db, professional_id)


# Admin curation

@router.post("", response_model=ProfessionalResponse, status_code=status.HTTP_201_CREATED)
def create_professional(
    professional_in: ProfessionalCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    _ensure_category_exists(db, professional_in.category_id)

    professional = Professional(**professional_in.model_dump())
    db.add(professional)
    db.commit()
    db.refresh(professional)

    logger.info("Admin %s created professional %s", admin.id, professional.id)
    return professional


@router.patch("/{professional_id}", response_model=ProfessionalResponse)
def update_professional(
    professional_id: int,
    update_data: ProfessionalUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    professional = _get_professional_or_404(db, professional_id)

    changes = update_data.model_dump(exclude_unset=True)
    if "category_id" in changes:
        _ensure_category_exists(db, changes["category_id"])

    # Update fields one-by-one; only category_id may be cleared
    for field, value in changes.items():
        if value is None and field != "category_id":
            continue
        setattr(professional, field, value)

    db.commit()
    db.refresh(professional)
    return professional


@router.delete("/{professional_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_professional(
    professional_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_super_admin),
):
    professional = _get_professional_or_404(db, professional_id)

    for model in (Rating, Recommendation, ProfessionalCategory):
        db.query(model).filter(model.professional_id == professional_id).delete(synchronize_session=False)
    db.delete(professional)
    db.commit()

    logger.info("Super-admin %s deleted professional %s", admin.id, professional_id)
    return


# Auxiliary categories (many-to-many)

@router.get("/{professional_id}/categories", response_model=List[CategoryResponse])
def list_professional_categories(professional_id: int, db: Session = Depends(get_db)):
    return get_categories_by_professional(db, professional_id)


@router.post(
    "/{professional_id}/categories/{category_id}",
    response_model=ProfessionalCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def assign_category(
    professional_id: int,
    category_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    _get_professional_or_404(db, professional_id)
    _ensure_category_exists(db, category_id)

    existing = db.query(ProfessionalCategory).filter(
        ProfessionalCategory.professional_id == professional_id,
        ProfessionalCategory.category_id == category_id,
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="Professional already assigned to this category")

    assignment = ProfessionalCategory(professional_id=professional_id, category_id=category_id)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


@router.delete("/{professional_id}/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_category(
    professional_id: int,
    category_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    deleted = db.query(ProfessionalCategory).filter(
        ProfessionalCategory.professional_id == professional_id,
        ProfessionalCategory.category_id == category_id,
    ).delete(synchronize_session=False)
    db.commit()

    if not deleted:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return
