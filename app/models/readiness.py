"""
Readiness models.

- ``readiness_assessments``: one scored assessment per user per day.
- ``readiness_baselines``: one row per user, recomputed from the trailing
  30 days of assessments after every write.  ``version`` is bumped on
  each recompute and checked on update (optimistic locking).
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class ReadinessAssessment(SQLModel, table=True):
    __tablename__ = "readiness_assessments"
    __table_args__ = (
        UniqueConstraint("user_id", "assessment_date", name="uq_readiness_user_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    assessment_date: datetime.date = Field(nullable=False, index=True)

    # Markers
    subjective_readiness: int = Field(nullable=False)
    grip_strength_lbs: Optional[float] = Field(default=None)
    vertical_jump_inches: Optional[float] = Field(default=None)
    hrv_reading: Optional[float] = Field(default=None)
    resting_hr: Optional[int] = Field(default=None)
    sleep_quality: Optional[int] = Field(default=None)
    sleep_hours: Optional[float] = Field(default=None)

    # Training load at the time of the assessment
    tsb_value: Optional[float] = Field(default=None)
    atl_value: Optional[float] = Field(default=None)
    ctl_value: Optional[float] = Field(default=None)
    # HRV mean of the baselines this assessment was scored against
    baseline_hrv_avg: Optional[float] = Field(default=None)

    # Result
    calculated_readiness_score: int = Field(nullable=False)
    recommended_intensity: str = Field(max_length=20, nullable=False)
    adjustment_factor: float = Field(default=1.0)
    notes: Optional[str] = Field(default=None, max_length=1000)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class ReadinessBaselines(SQLModel, table=True):
    __tablename__ = "readiness_baselines"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, unique=True, index=True)

    avg_grip_strength_lbs: Optional[float] = Field(default=None)
    avg_vertical_jump_inches: Optional[float] = Field(default=None)
    avg_hrv: Optional[float] = Field(default=None)
    avg_resting_hr: Optional[float] = Field(default=None)
    avg_sleep_hours: Optional[float] = Field(default=None)

    std_grip_strength: Optional[float] = Field(default=None)
    std_vertical_jump: Optional[float] = Field(default=None)
    std_hrv: Optional[float] = Field(default=None)
    std_resting_hr: Optional[float] = Field(default=None)
    std_sleep_hours: Optional[float] = Field(default=None)

    grip_sample_count: int = Field(default=0)
    jump_sample_count: int = Field(default=0)
    hrv_sample_count: int = Field(default=0)
    sleep_sample_count: int = Field(default=0)
    resting_hr_sample_count: int = Field(default=0)

    version: int = Field(default=1, nullable=False)
    last_updated: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
