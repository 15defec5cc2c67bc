from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from prodirectory.db.base import get_db
from prodirectory.db.models.user import User
from prodirectory.schemas.system_settings import SystemSettingsResponse, SystemSettingsUpdate
from prodirectory.services.system_settings import get_system_settings, update_system_settings
from prodirectory.core.security import require_super_admin

router = APIRouter(prefix="/api/system-settings", tags=["system-settings"])


@router.get("", response_model=SystemSettingsResponse)
def read_system_settings(db: Session = Depends(get_db)):
    return get_system_settings(db)


@router.patch("", response_model=SystemSettingsResponse)
def patch_system_settings(
    update_data: SystemSettingsUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_super_admin),
):
    return update_system_settings(db, update_data.model_dump(exclude_unset=True))
