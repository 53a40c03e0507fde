"""
Readiness schemas.

A readiness assessment combines a required subjective score (1-10) with
optional objective markers (HRV, resting HR, sleep, grip strength,
vertical jump) and the current training stress balance.  The scorer
turns it into a 0-100 readiness score, an intensity recommendation and an
adjustment factor:

    score >= 70  → push      (factor 1.00-1.10)
    score >= 40  → maintain  (factor 1.00)
    score <  40  → reduce    (factor 0.70-1.00)

Objective markers are compared with the athlete's own rolling 30-day
baseline (mean and sample standard deviation).
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Recommendation = Literal["reduce", "maintain", "push"]
ReadinessColor = Literal["red", "amber", "green"]


# ---------------------------------------------------------------------------
# Baselines
# ---------------------------------------------------------------------------

class MetricBaseline(BaseModel):
    """Rolling statistics for one marker.

    ``std`` is ``None`` with fewer than two samples; ``avg`` is ``None``
    with none.
    """

    avg: Optional[float] = None
    std: Optional[float] = None
    count: int = Field(0, ge=0)

    @property
    def is_defined(self) -> bool:
        """Mean and a positive standard deviation are both available."""
        return self.avg is not None and self.std is not None and self.std > 0


class BaselineStats(BaseModel):
    """Per-marker rolling baselines for one athlete."""

    grip_strength: MetricBaseline = Field(default_factory=MetricBaseline)
    vertical_jump: MetricBaseline = Field(default_factory=MetricBaseline)
    hrv: MetricBaseline = Field(default_factory=MetricBaseline)
    sleep_hours: MetricBaseline = Field(default_factory=MetricBaseline)
    resting_hr: MetricBaseline = Field(default_factory=MetricBaseline)


# ---------------------------------------------------------------------------
# Scorer input / output
# ---------------------------------------------------------------------------

class ReadinessMarkers(BaseModel):
    """Self-reported and measured readiness markers."""

    subjective_readiness: int = Field(..., ge=1, le=10, description="How ready do you feel? (1-10)")
    grip_strength_lbs: Optional[float] = Field(None, gt=0.0, le=400.0)
    vertical_jump_inches: Optional[float] = Field(None, gt=0.0, le=60.0)
    hrv_reading: Optional[float] = Field(None, gt=0.0, le=300.0, description="RMSSD (ms)")
    resting_hr: Optional[int] = Field(None, ge=25, le=120, description="Morning resting HR (bpm)")
    sleep_quality: Optional[int] = Field(None, ge=1, le=10)
    sleep_hours: Optional[float] = Field(None, ge=0.0, le=24.0)


class ReadinessInput(ReadinessMarkers):
    """Everything the scorer consumes, including the training load snapshot."""

    tsb_value: Optional[float] = None
    atl_value: Optional[float] = None
    ctl_value: Optional[float] = None


class FactorBreakdown(BaseModel):
    """Contribution of one factor to the readiness score."""

    value: float
    weight: float = Field(..., description="Configured weight of this factor")
    score: float = Field(..., ge=0.0, le=100.0, description="Factor sub-score (0-100)")
    contribution: float = Field(..., description="Points contributed to the final score after renormalisation")
    z_score: Optional[float] = Field(None, description="Deviation from the personal baseline, in std units")


class ReadinessFactors(BaseModel):
    """Per-factor breakdown.  Absent factors are ``None``."""

    subjective: FactorBreakdown
    hrv: Optional[FactorBreakdown] = None
    sleep: Optional[FactorBreakdown] = None
    tsb: Optional[FactorBreakdown] = None
    grip_strength: Optional[FactorBreakdown] = None
    vertical_jump: Optional[FactorBreakdown] = None


class ReadinessResult(BaseModel):
    """Output of the readiness scorer."""

    score: int = Field(..., ge=0, le=100)
    recommendation: Recommendation
    adjustment_factor: float = Field(..., description="Intensity multiplier (0.70-1.10)")
    color: ReadinessColor
    factors: ReadinessFactors
    suggestions: list[str]


# ---------------------------------------------------------------------------
# Entity schemas
# ---------------------------------------------------------------------------

class ReadinessAssessmentCreate(ReadinessMarkers):
    """Schema for logging a readiness assessment."""

    assessment_date: Optional[datetime.date] = Field(None, description="Defaults to today")
    notes: Optional[str] = Field(None, max_length=1000)


class ReadinessAssessmentResponse(ReadinessMarkers):
    """Stored readiness assessment."""

    id: int
    user_id: int
    assessment_date: datetime.date
    tsb_value: Optional[float] = None
    atl_value: Optional[float] = None
    ctl_value: Optional[float] = None
    baseline_hrv_avg: Optional[float] = Field(None, description="HRV baseline mean used when scoring")
    calculated_readiness_score: int
    recommended_intensity: Recommendation
    adjustment_factor: float
    notes: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class ReadinessBaselinesResponse(BaseModel):
    """Stored rolling baselines."""

    user_id: int
    avg_grip_strength_lbs: Optional[float] = None
    avg_vertical_jump_inches: Optional[float] = None
    avg_hrv: Optional[float] = None
    avg_resting_hr: Optional[float] = None
    avg_sleep_hours: Optional[float] = None
    std_hrv: Optional[float] = None
    std_grip_strength: Optional[float] = None
    std_vertical_jump: Optional[float] = None
    std_sleep_hours: Optional[float] = None
    std_resting_hr: Optional[float] = None
    grip_sample_count: int = 0
    jump_sample_count: int = 0
    hrv_sample_count: int = 0
    sleep_sample_count: int = 0
    resting_hr_sample_count: int = 0
    last_updated: datetime.datetime

    class Config:
        from_attributes = True


class ReadinessLogResponse(BaseModel):
    """Result of logging an assessment."""

    assessment: ReadinessAssessmentResponse
    result: ReadinessResult
    baselines: Optional[BaselineStats] = Field(
        None, description="Baselines used for scoring: the window ending the day before the assessment",
    )


class ReadinessListResponse(BaseModel):
    """Recent assessments with the current baselines."""

    assessments: list[ReadinessAssessmentResponse]
    baselines: Optional[ReadinessBaselinesResponse] = None


class ReadinessBaselineEnvelope(BaseModel):
    baselines: Optional[ReadinessBaselinesResponse] = None
