"""
Adaptation schemas: per-user settings, day-of evaluation and plan
recommendations.

A recommendation is a proposed change to a plan.  It starts ``pending``
and leaves that state exactly once, when the user accepts, modifies or
dismisses it.
"""

import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.readiness import ReadinessAssessmentResponse, ReadinessResult, Recommendation
from app.schemas.training_plan import WorkoutSummary

RecommendationStatus = Literal["pending", "accepted", "modified", "dismissed", "expired"]
RespondAction = Literal["accept", "modify", "dismiss"]
ApplyTo = Literal["strength", "cardio", "all"]

# Range of the intensity multiplier a workout may be scaled by.
ADJUSTMENT_FACTOR_MIN = 0.70
ADJUSTMENT_FACTOR_MAX = 1.10


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class AdaptationSettingsBase(BaseModel):
    """User preferences for plan adaptation.  Defaults apply when no row exists."""

    auto_evaluate: bool = True
    weekly_review_day: int = Field(0, ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    notify_pending_recommendations: bool = True
    compliance_alert_threshold: float = Field(0.8, ge=0.0, le=1.0)
    tsb_alert_threshold: float = -20.0
    readiness_alert_threshold: int = Field(40, ge=0, le=100)
    day_of_adjustment_enabled: bool = True
    day_of_readiness_threshold: int = Field(50, ge=0, le=100)


class AdaptationSettingsUpdate(BaseModel):
    """Partial update.  Range checks run in the service so the error names the field."""

    auto_evaluate: Optional[bool] = None
    weekly_review_day: Optional[int] = None
    notify_pending_recommendations: Optional[bool] = None
    compliance_alert_threshold: Optional[float] = None
    tsb_alert_threshold: Optional[float] = None
    readiness_alert_threshold: Optional[int] = None
    day_of_adjustment_enabled: Optional[bool] = None
    day_of_readiness_threshold: Optional[int] = None


class AdaptationSettingsResponse(AdaptationSettingsBase):
    user_id: int
    is_default: bool = False

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Day-of evaluation
# ---------------------------------------------------------------------------

class ReadinessSnapshot(BaseModel):
    """Today's readiness as seen by the day-of evaluator."""

    readiness_score: int = Field(..., ge=0, le=100)
    subjective_readiness: int = Field(..., ge=1, le=10)
    adjustment_factor: float = 1.0
    recommended_intensity: Recommendation = "maintain"
    hrv_percent_baseline: Optional[int] = Field(None, description="Today's HRV as a percentage of the baseline mean")
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[int] = None
    tsb: Optional[float] = None
    assessment_date: datetime.date


class WorkoutIntensityScaleChange(BaseModel):
    """Proposed changes of a ``workout_intensity_scale`` recommendation."""

    adjustment_factor: float = Field(..., ge=ADJUSTMENT_FACTOR_MIN, le=ADJUSTMENT_FACTOR_MAX)
    apply_to: ApplyTo
    reason: str = "readiness_low"
    original_intensity: str
    scaled_intensity: str


class RecommendationDraft(BaseModel):
    """A recommendation ready to be stored."""

    user_id: int
    plan_id: int
    recommendation_type: str = "workout_intensity_scale"
    scope: str = "workout"
    trigger_type: str = "readiness"
    trigger_date: datetime.datetime
    trigger_data: dict[str, Any]
    target_workout_id: Optional[int] = None
    proposed_changes: WorkoutIntensityScaleChange
    reasoning: str
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    evidence_summary: dict[str, Any] = Field(default_factory=dict)
    projected_impact: dict[str, Any] = Field(default_factory=dict)
    priority: int = Field(..., ge=1, le=5, description="1 = most urgent")
    expires_at: datetime.datetime
    status: RecommendationStatus = "pending"


class WorkoutEvaluationResult(BaseModel):
    """Outcome of evaluating one day of a plan against readiness."""

    has_recommendation: bool
    recommendation: Optional[RecommendationDraft] = None
    workouts: list[WorkoutSummary]
    readiness_score: Optional[int] = None
    adjustment_factor: float = 1.0
    recommended_intensity: Recommendation = "maintain"


class DayOfResponse(BaseModel):
    result: WorkoutEvaluationResult
    recommendation_id: Optional[int] = Field(
        None, description="Id of the stored (or already pending) recommendation",
    )


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

class RecommendationResponse(BaseModel):
    id: int
    user_id: int
    plan_id: int
    recommendation_type: str
    scope: str
    trigger_type: str
    trigger_date: datetime.datetime
    trigger_data: dict[str, Any]
    target_workout_id: Optional[int] = None
    proposed_changes: dict[str, Any]
    reasoning: str
    confidence_score: float
    evidence_summary: dict[str, Any]
    projected_impact: dict[str, Any]
    priority: int
    expires_at: Optional[datetime.datetime] = None
    status: RecommendationStatus
    user_notes: Optional[str] = None
    modified_changes: Optional[dict[str, Any]] = None
    responded_at: Optional[datetime.datetime] = None
    applied_at: Optional[datetime.datetime] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class RecommendationListResponse(BaseModel):
    recommendations: list[RecommendationResponse]
    pending_count: int


class RecommendationRespondRequest(BaseModel):
    action: RespondAction
    notes: Optional[str] = Field(None, max_length=1000)
    modified_changes: Optional[dict[str, Any]] = Field(
        None, description="Required when action is 'modify'",
    )


class RecommendationRespondResponse(BaseModel):
    recommendation: RecommendationResponse
    applied: bool


# ---------------------------------------------------------------------------
# Readiness with recommendations
# ---------------------------------------------------------------------------

class ReadinessWithRecommendationsResponse(BaseModel):
    """Readiness logged and today's plan evaluated in one call."""

    assessment: ReadinessAssessmentResponse
    result: ReadinessResult
    day_of: Optional[WorkoutEvaluationResult] = Field(
        None, description="None when the user has no active plan",
    )
    recommendation_id: Optional[int] = None
