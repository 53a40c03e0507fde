"""
Day-of adjustment service.

Loads what the day-of evaluator needs (settings, today's suggested
workouts, today's readiness) and stores the recommendation it drafts.
At most one pending ``workout_intensity_scale`` recommendation is kept
per user, plan and day: re-evaluating returns the existing one.
"""

import datetime
from typing import Optional, Union

from loguru import logger
from sqlmodel import Session

from app.db.repositories.adaptation import PlanRecommendationRepository
from app.db.repositories.readiness import ReadinessAssessmentRepository
from app.db.repositories.training_plan import SuggestedWorkoutRepository
from app.forge.day_of import evaluate_day_of, hrv_percent_of_baseline
from app.models.adaptation import PlanRecommendation
from app.models.readiness import ReadinessAssessment
from app.schemas.adaptation import DayOfResponse, ReadinessSnapshot, WorkoutEvaluationResult
from app.schemas.readiness import ReadinessAssessmentResponse
from app.schemas.training_plan import WorkoutSummary
from app.services.adaptation_settings_service import AdaptationSettingsService
from app.services.training_plan_service import TrainingPlanService

INTENSITY_SCALE = "workout_intensity_scale"


def snapshot_from_assessment(
    assessment: Union[ReadinessAssessment, ReadinessAssessmentResponse],
) -> ReadinessSnapshot:
    """Evaluator view of a stored assessment, against the HRV mean it was scored with."""
    return ReadinessSnapshot(
        readiness_score=assessment.calculated_readiness_score,
        subjective_readiness=assessment.subjective_readiness,
        adjustment_factor=assessment.adjustment_factor,
        recommended_intensity=assessment.recommended_intensity,
        hrv_percent_baseline=hrv_percent_of_baseline(assessment.hrv_reading, assessment.baseline_hrv_avg),
        sleep_hours=assessment.sleep_hours,
        sleep_quality=assessment.sleep_quality,
        tsb=assessment.tsb_value,
        assessment_date=assessment.assessment_date,
    )


class DayOfAdjustmentService:
    """Service for day-of workout adjustments."""

    def __init__(self, session: Session):
        self.plans = TrainingPlanService(session)
        self.settings = AdaptationSettingsService(session)
        self.workouts = SuggestedWorkoutRepository(session)
        self.assessments = ReadinessAssessmentRepository(session)
        self.recommendations = PlanRecommendationRepository(session)

    def evaluate(
        self,
        user_id: int,
        plan_id: int,
        as_of: Optional[datetime.datetime] = None,
        readiness: Optional[ReadinessSnapshot] = None,
    ) -> WorkoutEvaluationResult:
        """Evaluate the plan's workouts on ``as_of``'s day.

        Args:
            user_id: Plan owner
            plan_id: Plan to evaluate
            as_of: Evaluation instant (naive UTC).  Defaults to now.
            readiness: Readiness to use instead of the stored assessment for that day

        Raises:
            HTTPException 404: If the plan does not belong to the user
        """
        as_of = as_of or datetime.datetime.utcnow()
        plan = self.plans.get_owned_plan(user_id, plan_id)
        prefs = self.settings.get_effective(user_id)

        workouts = [
            WorkoutSummary.model_validate(w)
            for w in self.workouts.get_suggested_for_day(plan.id, as_of.date())
        ]

        if readiness is None:
            readiness = self._load_readiness(user_id, as_of.date())

        return evaluate_day_of(readiness, workouts, prefs, as_of, user_id, plan.id)

    def create_recommendation(
        self,
        user_id: int,
        plan_id: int,
        as_of: Optional[datetime.datetime] = None,
        readiness: Optional[ReadinessSnapshot] = None,
    ) -> DayOfResponse:
        """Evaluate and store the drafted recommendation, once per day."""
        as_of = as_of or datetime.datetime.utcnow()
        result = self.evaluate(user_id, plan_id, as_of, readiness)
        if not result.has_recommendation or result.recommendation is None:
            return DayOfResponse(result=result)

        existing = self.recommendations.find_pending_for_day(user_id, plan_id, INTENSITY_SCALE, as_of.date())
        if existing:
            logger.debug(f"Pending intensity recommendation {existing.id} already exists for plan {plan_id}")
            return DayOfResponse(result=result, recommendation_id=existing.id)

        stored = self.recommendations.create(PlanRecommendation(**result.recommendation.model_dump()))
        logger.info(f"Created intensity recommendation {stored.id} for plan {plan_id}: "
                    f"score={result.readiness_score} factor={result.adjustment_factor}")
        return DayOfResponse(result=result, recommendation_id=stored.id)

    def _load_readiness(self, user_id: int, day: datetime.date) -> Optional[ReadinessSnapshot]:
        assessment = self.assessments.get_by_user_and_date(user_id, day)
        if assessment is None:
            return None
        return snapshot_from_assessment(assessment)
