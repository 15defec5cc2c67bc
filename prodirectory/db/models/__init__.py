# Every model is imported here so Base.metadata knows all tables before create_all().
from prodirectory.db.models.user import User
from prodirectory.db.models.session import UserSession
from prodirectory.db.models.category import Category, ProfessionalCategory
from prodirectory.db.models.professional import Professional
from prodirectory.db.models.rating import Rating, Recommendation
from prodirectory.db.models.system_settings import SystemSettings

__all__ = [
    "User",
    "UserSession",
    "Category",
    "ProfessionalCategory",
    "Professional",
    "Rating",
    "Recommendation",
    "SystemSettings",
]
