"""
Readiness baseline service.

Recomputes the per-user baselines from the trailing 30 days of
assessments.  The read-recompute-write cycle is guarded by the row's
``version``: if another request rewrote the row in between, the
recompute is retried from fresh data, up to ``max_attempts`` times.
"""

import datetime
from typing import Any, Optional

from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.db.repositories.readiness import ReadinessAssessmentRepository, ReadinessBaselinesRepository
from app.forge.baselines import compute_baselines, window_start
from app.models.readiness import ReadinessBaselines
from app.schemas.readiness import BaselineStats, ReadinessBaselinesResponse

DEFAULT_MAX_ATTEMPTS = 3


def _stats_to_columns(stats: BaselineStats) -> dict[str, Any]:
    return {
        "avg_grip_strength_lbs": stats.grip_strength.avg,
        "std_grip_strength": stats.grip_strength.std,
        "grip_sample_count": stats.grip_strength.count,
        "avg_vertical_jump_inches": stats.vertical_jump.avg,
        "std_vertical_jump": stats.vertical_jump.std,
        "jump_sample_count": stats.vertical_jump.count,
        "avg_hrv": stats.hrv.avg,
        "std_hrv": stats.hrv.std,
        "hrv_sample_count": stats.hrv.count,
        "avg_sleep_hours": stats.sleep_hours.avg,
        "std_sleep_hours": stats.sleep_hours.std,
        "sleep_sample_count": stats.sleep_hours.count,
        "avg_resting_hr": stats.resting_hr.avg,
        "std_resting_hr": stats.resting_hr.std,
        "resting_hr_sample_count": stats.resting_hr.count,
    }


class BaselineService:
    """Service for the rolling readiness baselines."""

    def __init__(self, session: Session, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.session = session
        self.assessments = ReadinessAssessmentRepository(session)
        self.repository = ReadinessBaselinesRepository(session)
        self.max_attempts = max_attempts

    def get(self, user_id: int) -> Optional[ReadinessBaselines]:
        return self.repository.get_by_user(user_id)

    def get_response(self, user_id: int) -> Optional[ReadinessBaselinesResponse]:
        row = self.repository.get_by_user(user_id)
        return ReadinessBaselinesResponse.model_validate(row) if row else None

    def prior_stats(self, user_id: int, day: datetime.date) -> Optional[BaselineStats]:
        """Baselines as they stood before ``day``: the window ending the day before.

        Readings on ``day`` itself are left out, so re-logging a day is
        never scored against its own earlier reading.

        Returns:
            None if no marker has a single earlier sample
        """
        previous = day - datetime.timedelta(days=1)
        rows = self.assessments.get_by_user_date_range(user_id, window_start(previous), previous)
        stats = compute_baselines(rows)
        if not any(getattr(stats, name).count for name in BaselineStats.model_fields):
            return None
        return stats

    def refresh(self, user_id: int, as_of: datetime.date) -> ReadinessBaselines:
        """Recompute baselines from assessments in the window ending at ``as_of``.

        Raises:
            HTTPException 409: If concurrent writers kept winning for every attempt
        """
        for attempt in range(1, self.max_attempts + 1):
            rows = self.assessments.get_by_user_date_range(user_id, window_start(as_of), as_of)
            values = _stats_to_columns(compute_baselines(rows))
            values["last_updated"] = datetime.datetime.utcnow()

            current = self.repository.get_by_user(user_id)
            if current is None:
                try:
                    created = self.repository.create(ReadinessBaselines(user_id=user_id, **values))
                except IntegrityError:
                    self.session.rollback()
                    logger.warning(f"Baselines for user {user_id} created concurrently (attempt {attempt})")
                    continue
                logger.info(f"Created baselines for user {user_id} from {len(rows)} assessments")
                return created

            if self.repository.update_if_version(user_id, current.version, values):
                logger.info(f"Refreshed baselines for user {user_id} from {len(rows)} assessments "
                            f"(version {current.version + 1})")
                return self.repository.get_by_user(user_id)

            logger.warning(f"Baselines for user {user_id} changed concurrently (attempt {attempt})")

        logger.error(f"Giving up on baselines for user {user_id} after {self.max_attempts} attempts")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Readiness baselines were updated concurrently, please retry",
        )
