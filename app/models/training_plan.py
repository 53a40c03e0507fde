"""
Training plan models.

A plan owns suggested workouts laid out on calendar dates.  Accepting a
``workout_intensity_scale`` recommendation flags the target workout as
``readiness_adjusted`` and records the factor applied.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class TrainingPlan(SQLModel, table=True):
    __tablename__ = "training_plans"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    name: str = Field(max_length=200, nullable=False)
    goal: Optional[str] = Field(default=None, max_length=500)
    start_date: datetime.date = Field(nullable=False)
    end_date: Optional[datetime.date] = Field(default=None)
    status: str = Field(default="active", max_length=20, index=True)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class SuggestedWorkout(SQLModel, table=True):
    __tablename__ = "suggested_workouts"

    id: Optional[int] = Field(default=None, primary_key=True)
    plan_id: int = Field(foreign_key="training_plans.id", nullable=False, index=True)
    suggested_date: datetime.date = Field(nullable=False, index=True)

    name: str = Field(max_length=200, nullable=False)
    category: str = Field(max_length=20, nullable=False)
    primary_intensity: Optional[str] = Field(default=None, max_length=50)
    planned_duration_minutes: Optional[int] = Field(default=None)
    planned_tss: Optional[float] = Field(default=None)
    order_in_day: int = Field(default=0)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: str = Field(default="suggested", max_length=20)

    # Day-of adjustment
    readiness_adjusted: bool = Field(default=False)
    adjustment_factor: Optional[float] = Field(default=None)
    original_intensity: Optional[str] = Field(default=None, max_length=100)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
