"""
Training plan schemas.

A plan owns suggested workouts laid out on calendar dates.  Within a day
workouts are ordered by ``order_in_day``; only workouts still in the
``suggested`` status take part in day-of adjustments.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

PlanStatus = Literal["draft", "active", "completed", "archived"]
WorkoutCategory = Literal["strength", "cardio", "mobility", "other"]
WorkoutStatus = Literal["suggested", "scheduled", "completed", "skipped"]


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

class TrainingPlanCreate(BaseModel):
    """Schema for creating a training plan."""

    name: str = Field(..., min_length=1, max_length=200)
    goal: Optional[str] = Field(None, max_length=500)
    start_date: datetime.date
    end_date: Optional[datetime.date] = None
    status: PlanStatus = "active"


class TrainingPlanResponse(TrainingPlanCreate):
    id: int
    user_id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Suggested workouts
# ---------------------------------------------------------------------------

class SuggestedWorkoutCreate(BaseModel):
    """Schema for adding a suggested workout to a plan."""

    suggested_date: datetime.date
    name: str = Field(..., min_length=1, max_length=200)
    category: WorkoutCategory
    primary_intensity: Optional[str] = Field(
        None, max_length=50,
        description="Free-form intensity label, e.g. 'z2', 'threshold', 'heavy'",
    )
    planned_duration_minutes: Optional[int] = Field(None, ge=0, le=1440)
    planned_tss: Optional[float] = Field(None, ge=0.0)
    order_in_day: int = Field(0, ge=0)
    description: Optional[str] = Field(None, max_length=2000)


class WorkoutSummary(BaseModel):
    """The fields of a suggested workout that the day-of evaluator reads."""

    id: int
    name: str
    category: str
    primary_intensity: Optional[str] = None
    order_in_day: int = 0

    class Config:
        from_attributes = True


class SuggestedWorkoutResponse(SuggestedWorkoutCreate):
    id: int
    plan_id: int
    status: WorkoutStatus
    readiness_adjusted: bool
    adjustment_factor: Optional[float] = None
    original_intensity: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
