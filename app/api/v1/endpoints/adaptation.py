"""
Adaptation settings endpoints.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.adaptation import AdaptationSettingsResponse, AdaptationSettingsUpdate
from app.services.adaptation_settings_service import AdaptationSettingsService

router = APIRouter()


@router.get("/settings", summary="Adaptation settings (defaults if never saved).",
            response_model=AdaptationSettingsResponse)
def get_settings(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return AdaptationSettingsService(db).get(user.id)


@router.patch("/settings", summary="Update adaptation settings.", response_model=AdaptationSettingsResponse)
def update_settings(data: AdaptationSettingsUpdate, db: Session = Depends(get_db),
                    user: User = Depends(get_current_user)):
    return AdaptationSettingsService(db).update(user.id, data)
