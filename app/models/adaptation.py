"""
Adaptation models: per-user settings and plan recommendations.
"""

import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class AdaptationSettings(SQLModel, table=True):
    """One row per user.  Absent row means defaults."""

    __tablename__ = "adaptation_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, unique=True, index=True)

    auto_evaluate: bool = Field(default=True)
    weekly_review_day: int = Field(default=0)
    notify_pending_recommendations: bool = Field(default=True)
    compliance_alert_threshold: float = Field(default=0.8)
    tsb_alert_threshold: float = Field(default=-20.0)
    readiness_alert_threshold: int = Field(default=40)
    day_of_adjustment_enabled: bool = Field(default=True)
    day_of_readiness_threshold: int = Field(default=50)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class PlanRecommendation(SQLModel, table=True):
    __tablename__ = "plan_recommendations"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    plan_id: int = Field(foreign_key="training_plans.id", nullable=False, index=True)

    recommendation_type: str = Field(max_length=50, nullable=False, index=True)
    scope: str = Field(max_length=20, nullable=False)
    trigger_type: str = Field(max_length=20, nullable=False)
    trigger_date: datetime.datetime = Field(nullable=False, index=True)
    trigger_data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    target_workout_id: Optional[int] = Field(default=None, foreign_key="suggested_workouts.id")
    proposed_changes: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    reasoning: str = Field(nullable=False)
    confidence_score: float = Field(default=0.5)
    evidence_summary: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    projected_impact: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    priority: int = Field(default=5)
    expires_at: Optional[datetime.datetime] = Field(default=None)

    status: str = Field(default="pending", max_length=20, index=True)
    user_notes: Optional[str] = Field(default=None, max_length=1000)
    modified_changes: Optional[dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    responded_at: Optional[datetime.datetime] = Field(default=None)
    applied_at: Optional[datetime.datetime] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
