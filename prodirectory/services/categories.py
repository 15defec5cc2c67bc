import re
from typing import List, Optional

from sqlalchemy.orm import Session

from prodirectory.db.models.category import Category, ProfessionalCategory
from prodirectory.db.models.professional import Professional


class InvalidParentError(Exception):
    """Parent category missing or pointing at the category itself."""
    pass


def slugify(name: str) -> str:
    """'Plumbing & Gas  24h' -> 'plumbing-gas-24h'"""
    slug = re.sub(r"[^\w\s-]", "", name.lower())
    return re.sub(r"\s+", "-", slug.strip())


def validate_parent(db: Session, parent_id: Optional[int], category_id: Optional[int] = None) -> None:
    if parent_id is None:
        return
    if category_id is not None and parent_id == category_id:
        raise InvalidParentError("A category cannot be its own parent")
    if db.get(Category, parent_id) is None:
        raise InvalidParentError(f"Parent category {parent_id} not found")


def delete_category(db: Session, category: Category) -> None:
    """Remove a category, detaching professionals and orphaning subcategories."""
    db.query(ProfessionalCategory).filter(
        ProfessionalCategory.category_id == category.id
    ).delete(synchronize_session=False)
    db.query(Professional).filter(Professional.category_id == category.id).update(
        {Professional.category_id: None}, synchronize_session=False
    )
    db.query(Category).filter(Category.parent_id == category.id).update(
        {Category.parent_id: None}, synchronize_session=False
    )
    db.delete(category)
    db.commit()
    # bulk updates above bypassed the identity map
    db.expire_all()


def get_professionals_by_category(db: Session, category_id: int) -> List[Professional]:
    return (
        db.query(Professional)
        .join(ProfessionalCategory, ProfessionalCategory.professional_id == Professional.id)
        .filter(ProfessionalCategory.category_id == category_id)
        .order_by(Professional.id)
        .all()
    )


def get_categories_by_professional(db: Session, professional_id: int) -> List[Category]:
    return (
        db.query(Category)
        .join(ProfessionalCategory, ProfessionalCategory.category_id == Category.id)
        .filter(ProfessionalCategory.professional_id == professional_id)
        .order_by(Category.id)
        .all()
    )
