"""
Recommendation service.

Lists plan recommendations and records the user's response.  A
recommendation can be answered once, while it is pending.  Accepting
(or modifying) applies its changes; dismissing does not.  Modified
changes are merged over the proposed ones and validated before they
touch a workout.
"""

import datetime
from typing import Any, Optional

from fastapi import HTTPException, status
from loguru import logger
from pydantic import ValidationError
from sqlmodel import Session

from app.db.repositories.adaptation import PlanRecommendationRepository
from app.db.repositories.training_plan import SuggestedWorkoutRepository
from app.models.adaptation import PlanRecommendation
from app.schemas.adaptation import (
    RecommendationListResponse,
    RecommendationRespondRequest,
    RecommendationRespondResponse,
    RecommendationResponse,
    WorkoutIntensityScaleChange,
)

_STATUS_FOR_ACTION = {"accept": "accepted", "modify": "modified", "dismiss": "dismissed"}


class RecommendationService:
    """Service for plan recommendations."""

    def __init__(self, session: Session):
        self.repository = PlanRecommendationRepository(session)
        self.workouts = SuggestedWorkoutRepository(session)

    def list_recommendations(
        self,
        user_id: int,
        status_filter: Optional[str] = "pending",
        plan_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> RecommendationListResponse:
        """Recommendations ordered by priority.  ``status_filter="all"`` disables the filter."""
        status_value = None if status_filter == "all" else status_filter
        rows = self.repository.get_all_by_user(user_id, status_value, plan_id, offset, limit)
        return RecommendationListResponse(
            recommendations=[RecommendationResponse.model_validate(r) for r in rows],
            pending_count=self.repository.count_by_status(user_id, "pending"),
        )

    def get(self, user_id: int, recommendation_id: int) -> RecommendationResponse:
        return RecommendationResponse.model_validate(self._get_owned(user_id, recommendation_id))

    def respond(
        self,
        user_id: int,
        recommendation_id: int,
        request: RecommendationRespondRequest,
        now: Optional[datetime.datetime] = None,
    ) -> RecommendationRespondResponse:
        """
        Accept, modify or dismiss a pending recommendation.

        Raises:
            HTTPException 404: Unknown recommendation
            HTTPException 400: Not pending, expired, or missing ``modified_changes`` for modify
            HTTPException 422: Changes outside the allowed range (adjustment factor 0.70-1.10)
        """
        now = now or datetime.datetime.utcnow()
        recommendation = self._get_owned(user_id, recommendation_id)

        if recommendation.status != "pending":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot respond to recommendation with status: {recommendation.status}",
            )

        if recommendation.expires_at is not None and now > recommendation.expires_at:
            recommendation.status = "expired"
            recommendation.updated_at = now
            self.repository.update(recommendation)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Recommendation has expired")

        if request.action == "modify" and not request.modified_changes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="modified_changes required when action is modify",
            )

        applied_at = None
        if request.action in ("accept", "modify"):
            changes = dict(recommendation.proposed_changes or {})
            changes.update(request.modified_changes or {})
            self._apply(recommendation, changes, now)
            applied_at = now

        recommendation.status = _STATUS_FOR_ACTION[request.action]
        recommendation.user_notes = request.notes
        recommendation.modified_changes = request.modified_changes
        recommendation.responded_at = now
        recommendation.applied_at = applied_at
        recommendation.updated_at = now
        recommendation = self.repository.update(recommendation)

        logger.info(f"User {user_id} {recommendation.status} recommendation {recommendation.id}")
        return RecommendationRespondResponse(
            recommendation=RecommendationResponse.model_validate(recommendation),
            applied=applied_at is not None,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned(self, user_id: int, recommendation_id: int) -> PlanRecommendation:
        recommendation = self.repository.get_by_id_for_user(recommendation_id, user_id)
        if not recommendation:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recommendation not found")
        return recommendation

    def _apply(self, recommendation: PlanRecommendation, changes: dict[str, Any], now: datetime.datetime) -> None:
        if recommendation.recommendation_type != "workout_intensity_scale":
            logger.debug(f"No apply step for {recommendation.recommendation_type}")
            return

        if recommendation.target_workout_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No target workout specified")
        try:
            change = WorkoutIntensityScaleChange.model_validate(changes)
        except ValidationError as e:
            logger.warning(f"Rejected changes for recommendation {recommendation.id}: {e.error_count()} error(s)")
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False, include_context=False),
            ) from e

        workout = self.workouts.get_by_id(recommendation.target_workout_id)
        if workout is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Target workout not found")

        workout.readiness_adjusted = True
        workout.adjustment_factor = change.adjustment_factor
        workout.original_intensity = change.original_intensity
        workout.updated_at = now
        self.workouts.update(workout)
