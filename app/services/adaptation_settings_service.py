"""
Adaptation settings service.

Users without a stored row get the defaults; the first PATCH creates it.
"""

import datetime

from fastapi import HTTPException, status
from loguru import logger
from sqlmodel import Session

from app.db.repositories.adaptation import AdaptationSettingsRepository
from app.models.adaptation import AdaptationSettings
from app.schemas.adaptation import AdaptationSettingsBase, AdaptationSettingsResponse, AdaptationSettingsUpdate

# field → (low, high, message)
_RANGES: dict[str, tuple[float, float, str]] = {
    "weekly_review_day": (0, 6, "weekly_review_day must be 0-6 (Sunday-Saturday)"),
    "compliance_alert_threshold": (0, 1, "compliance_alert_threshold must be 0-1"),
    "readiness_alert_threshold": (0, 100, "readiness_alert_threshold must be 0-100"),
    "day_of_readiness_threshold": (0, 100, "day_of_readiness_threshold must be 0-100"),
}


class AdaptationSettingsService:
    """Service for per-user adaptation settings."""

    def __init__(self, session: Session):
        self.repository = AdaptationSettingsRepository(session)

    def get(self, user_id: int) -> AdaptationSettingsResponse:
        row = self.repository.get_by_user(user_id)
        if row is None:
            return AdaptationSettingsResponse(user_id=user_id, is_default=True)
        return AdaptationSettingsResponse.model_validate(row)

    def get_effective(self, user_id: int) -> AdaptationSettingsBase:
        """Stored settings, or defaults."""
        row = self.repository.get_by_user(user_id)
        if row is None:
            return AdaptationSettingsBase()
        return AdaptationSettingsBase.model_validate(row, from_attributes=True)

    def update(self, user_id: int, data: AdaptationSettingsUpdate) -> AdaptationSettingsResponse:
        """
        Apply a partial update, creating the row on first use.

        Raises:
            HTTPException 400: If no field is given or a value is out of range
        """
        updates = data.model_dump(exclude_none=True)
        if not updates:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid fields to update")

        for field, value in updates.items():
            if field in _RANGES:
                low, high, message = _RANGES[field]
                if not low <= value <= high:
                    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)

        row = self.repository.get_by_user(user_id) or AdaptationSettings(user_id=user_id)
        for field, value in updates.items():
            setattr(row, field, value)
        row.updated_at = datetime.datetime.utcnow()
        row = self.repository.save(row)

        logger.info(f"User {user_id} updated adaptation settings: {sorted(updates)}")
        return AdaptationSettingsResponse.model_validate(row)
