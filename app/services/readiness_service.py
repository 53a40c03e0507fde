"""
Readiness service.

Logging an assessment:

1. compute the baselines from the days before the assessment and read
   the training load snapshot for the day,
2. score the assessment,
3. upsert it on (user, date),
4. refresh the baselines so the new readings are folded in.

Readings on the assessment date are never part of the baselines it is
scored against, so re-logging a day does not compare a reading with
itself.  The HRV mean used is stored on the assessment for the day-of
reasoning.
"""

import datetime
from typing import Optional

from loguru import logger
from sqlmodel import Session

from app.db.repositories.readiness import ReadinessAssessmentRepository
from app.forge.readiness import ReadinessConfig, calculate_readiness_score
from app.models.readiness import ReadinessAssessment
from app.models.user import User
from app.schemas.adaptation import ReadinessWithRecommendationsResponse
from app.schemas.readiness import (
    ReadinessAssessmentCreate,
    ReadinessAssessmentResponse,
    ReadinessBaselinesResponse,
    ReadinessInput,
    ReadinessListResponse,
    ReadinessLogResponse,
)
from app.services.baseline_service import BaselineService
from app.services.day_of_service import DayOfAdjustmentService, snapshot_from_assessment
from app.services.training_load_service import TrainingLoadService
from app.services.training_plan_service import TrainingPlanService


class ReadinessService:
    """Service for readiness assessments."""

    def __init__(self, session: Session, config: Optional[ReadinessConfig] = None):
        self.session = session
        self.repository = ReadinessAssessmentRepository(session)
        self.baselines = BaselineService(session)
        self.training_load = TrainingLoadService(session)
        self.config = config

    def log_assessment(
        self, user: User, data: ReadinessAssessmentCreate, today: Optional[datetime.date] = None,
    ) -> ReadinessLogResponse:
        """Score and store an assessment, then refresh the baselines."""
        assessment_date = data.assessment_date or today or datetime.date.today()

        baselines_used = self.baselines.prior_stats(user.id, assessment_date)
        snapshot = self.training_load.get_snapshot(user.id, assessment_date)

        scoring_input = ReadinessInput(
            **data.model_dump(exclude={"assessment_date", "notes"}),
            tsb_value=snapshot.tsb if snapshot else None,
            atl_value=snapshot.atl if snapshot else None,
            ctl_value=snapshot.ctl if snapshot else None,
        )
        result = calculate_readiness_score(scoring_input, baselines_used, self.config)

        values = scoring_input.model_dump()
        values.update(
            notes=data.notes,
            calculated_readiness_score=result.score,
            recommended_intensity=result.recommendation,
            adjustment_factor=result.adjustment_factor,
            baseline_hrv_avg=baselines_used.hrv.avg if baselines_used else None,
        )

        entry = self.repository.get_by_user_and_date(user.id, assessment_date)
        if entry:
            for key, value in values.items():
                setattr(entry, key, value)
            entry.updated_at = datetime.datetime.utcnow()
            entry = self.repository.update(entry)
        else:
            entry = self.repository.create(
                ReadinessAssessment(user_id=user.id, assessment_date=assessment_date, **values)
            )

        logger.info(f"User {user.id} readiness for {assessment_date}: score={result.score} "
                    f"({result.recommendation}, factor {result.adjustment_factor})")

        self.baselines.refresh(user.id, assessment_date)

        return ReadinessLogResponse(
            assessment=ReadinessAssessmentResponse.model_validate(entry),
            result=result,
            baselines=baselines_used,
        )

    def log_with_recommendations(
        self, user: User, data: ReadinessAssessmentCreate, now: Optional[datetime.datetime] = None,
    ) -> ReadinessWithRecommendationsResponse:
        """Log an assessment and evaluate the active plan for the same day."""
        now = now or datetime.datetime.utcnow()
        logged = self.log_assessment(user, data, today=now.date())

        plan = TrainingPlanService(self.session).get_active_plan(user.id)
        if plan is None:
            return ReadinessWithRecommendationsResponse(
                assessment=logged.assessment, result=logged.result,
            )

        snapshot = snapshot_from_assessment(logged.assessment)
        as_of = datetime.datetime.combine(logged.assessment.assessment_date, now.time())
        day_of = DayOfAdjustmentService(self.session).create_recommendation(user.id, plan.id, as_of, snapshot)

        return ReadinessWithRecommendationsResponse(
            assessment=logged.assessment,
            result=logged.result,
            day_of=day_of.result,
            recommendation_id=day_of.recommendation_id,
        )

    def list_assessments(
        self, user_id: int, day: Optional[datetime.date] = None, limit: int = 7,
    ) -> ReadinessListResponse:
        """One day's assessment, or the ``limit`` most recent, with current baselines."""
        if day is not None:
            entry = self.repository.get_by_user_and_date(user_id, day)
            rows = [entry] if entry else []
        else:
            rows = self.repository.get_latest_by_user(user_id, limit)

        return ReadinessListResponse(
            assessments=[ReadinessAssessmentResponse.model_validate(r) for r in rows],
            baselines=self.baselines.get_response(user_id),
        )

    def get_baselines(self, user_id: int) -> Optional[ReadinessBaselinesResponse]:
        return self.baselines.get_response(user_id)
