"""
Training plan repositories.

Handles database operations for TrainingPlan and SuggestedWorkout.
"""

import datetime
from typing import Optional

from sqlmodel import Session, select

from app.models.training_plan import SuggestedWorkout, TrainingPlan


class TrainingPlanRepository:
    """Repository for TrainingPlan database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, plan: TrainingPlan) -> TrainingPlan:
        self.session.add(plan)
        self.session.commit()
        self.session.refresh(plan)
        return plan

    def get_by_id(self, plan_id: int) -> Optional[TrainingPlan]:
        return self.session.get(TrainingPlan, plan_id)

    def get_all_by_user(self, user_id: int, status: Optional[str] = None) -> list[TrainingPlan]:
        """Plans of a user, most recent start first."""
        statement = select(TrainingPlan).where(TrainingPlan.user_id == user_id)
        if status is not None:
            statement = statement.where(TrainingPlan.status == status)
        statement = statement.order_by(TrainingPlan.start_date.desc(), TrainingPlan.id.desc())
        return list(self.session.exec(statement).all())

    def get_active_by_user(self, user_id: int) -> Optional[TrainingPlan]:
        """The user's most recently started active plan."""
        plans = self.get_all_by_user(user_id, status="active")
        return plans[0] if plans else None


class SuggestedWorkoutRepository:
    """Repository for SuggestedWorkout database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, workout: SuggestedWorkout) -> SuggestedWorkout:
        self.session.add(workout)
        self.session.commit()
        self.session.refresh(workout)
        return workout

    def get_by_id(self, workout_id: int) -> Optional[SuggestedWorkout]:
        return self.session.get(SuggestedWorkout, workout_id)

    def update(self, workout: SuggestedWorkout) -> SuggestedWorkout:
        self.session.add(workout)
        self.session.commit()
        self.session.refresh(workout)
        return workout

    def get_by_plan(
        self, plan_id: int, suggested_date: Optional[datetime.date] = None,
    ) -> list[SuggestedWorkout]:
        """Workouts of a plan, optionally on one date, in calendar order."""
        statement = select(SuggestedWorkout).where(SuggestedWorkout.plan_id == plan_id)
        if suggested_date is not None:
            statement = statement.where(SuggestedWorkout.suggested_date == suggested_date)
        statement = statement.order_by(
            SuggestedWorkout.suggested_date, SuggestedWorkout.order_in_day, SuggestedWorkout.id,
        )
        return list(self.session.exec(statement).all())

    def get_suggested_for_day(self, plan_id: int, day: datetime.date) -> list[SuggestedWorkout]:
        """Workouts still in ``suggested`` status on ``day``, ordered by ``order_in_day``."""
        statement = (
            select(SuggestedWorkout)
            .where(
                SuggestedWorkout.plan_id == plan_id,
                SuggestedWorkout.suggested_date == day,
                SuggestedWorkout.status == "suggested",
            )
            .order_by(SuggestedWorkout.order_in_day, SuggestedWorkout.id)
        )
        return list(self.session.exec(statement).all())
