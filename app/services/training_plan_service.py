"""
Training plan service.

Plans and their suggested workouts.  Every plan access is scoped to its
owner; someone else's plan is reported as not found.
"""

import datetime
from typing import Optional

from fastapi import HTTPException, status
from loguru import logger
from sqlmodel import Session

from app.db.repositories.training_plan import SuggestedWorkoutRepository, TrainingPlanRepository
from app.models.training_plan import SuggestedWorkout, TrainingPlan
from app.schemas.training_plan import (
    SuggestedWorkoutCreate,
    SuggestedWorkoutResponse,
    TrainingPlanCreate,
    TrainingPlanResponse,
)


class TrainingPlanService:
    """Service for training plans and suggested workouts."""

    def __init__(self, session: Session):
        self.plans = TrainingPlanRepository(session)
        self.workouts = SuggestedWorkoutRepository(session)

    def create_plan(self, user_id: int, data: TrainingPlanCreate) -> TrainingPlanResponse:
        if data.end_date is not None and data.end_date < data.start_date:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="end_date must not be before start_date",
            )
        plan = self.plans.create(TrainingPlan(user_id=user_id, **data.model_dump()))
        logger.info(f"User {user_id} created plan {plan.id} ({plan.name})")
        return TrainingPlanResponse.model_validate(plan)

    def list_plans(self, user_id: int, status_filter: Optional[str] = None) -> list[TrainingPlanResponse]:
        return [TrainingPlanResponse.model_validate(p) for p in self.plans.get_all_by_user(user_id, status_filter)]

    def get_active_plan(self, user_id: int) -> Optional[TrainingPlan]:
        return self.plans.get_active_by_user(user_id)

    def get_owned_plan(self, user_id: int, plan_id: int) -> TrainingPlan:
        """Get a plan by id and verify ownership."""
        plan = self.plans.get_by_id(plan_id)
        if not plan or plan.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training plan not found")
        return plan

    def add_workout(self, user_id: int, plan_id: int, data: SuggestedWorkoutCreate) -> SuggestedWorkoutResponse:
        plan = self.get_owned_plan(user_id, plan_id)
        workout = self.workouts.create(SuggestedWorkout(plan_id=plan.id, **data.model_dump()))
        return SuggestedWorkoutResponse.model_validate(workout)

    def list_workouts(
        self, user_id: int, plan_id: int, day: Optional[datetime.date] = None,
    ) -> list[SuggestedWorkoutResponse]:
        plan = self.get_owned_plan(user_id, plan_id)
        return [SuggestedWorkoutResponse.model_validate(w) for w in self.workouts.get_by_plan(plan.id, day)]
