"""
Training load schemas.

Daily load entries (request/response) and the derived Banister/Foster
metrics:

- ``ctl``: chronic training load, 42-day EWMA of TSS ("fitness")
- ``atl``: acute training load, 7-day EWMA of TSS ("fatigue")
- ``tsb``: training stress balance, ``ctl - atl`` ("form")
- ``monotony``: mean / stddev of daily load over a week
- ``strain``: weekly load × monotony
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

# How a daily total_tss was obtained.
TSSSource = Literal["manual", "power", "hr", "rpe", "default", "none"]


# ---------------------------------------------------------------------------
# Derived metric schemas
# ---------------------------------------------------------------------------

class TSSEntry(BaseModel):
    """A single day's training stress score."""

    date: datetime.date
    tss: float = Field(0.0, ge=0.0)


class TrainingLoadPoint(BaseModel):
    """CTL/ATL/TSB snapshot for one date."""

    date: datetime.date
    ctl: float
    atl: float
    tsb: float
    monotony: Optional[float] = None
    strain: Optional[float] = None


class TSBRange(BaseModel):
    """Classification of a TSB value."""

    band: str = Field(..., description="very_fresh, fresh, optimal, tired, fatigued or very_fatigued")
    label: str
    color: str
    recommendation: str


class TrainingStrainAnalysis(BaseModel):
    """Foster monotony/strain analysis combined with ACWR."""

    weekly_load: float
    monotony: float
    strain: float
    acwr: float
    monotony_risk: str
    strain_risk: str
    acwr_risk: str
    risk_level: str = Field(..., description="low, moderate, high or very_high")
    recommendation: str


class ZoneDistribution(BaseModel):
    """Time in each heart-rate zone (seconds)."""

    zone_1_seconds: int = Field(0, ge=0)
    zone_2_seconds: int = Field(0, ge=0)
    zone_3_seconds: int = Field(0, ge=0)
    zone_4_seconds: int = Field(0, ge=0)
    zone_5_seconds: int = Field(0, ge=0)

    @property
    def total_seconds(self) -> int:
        return (self.zone_1_seconds + self.zone_2_seconds + self.zone_3_seconds
                + self.zone_4_seconds + self.zone_5_seconds)


class PolarizedAnalysis(BaseModel):
    """Compliance of a zone distribution with the polarized 80/20 model."""

    low_intensity_pct: float
    mid_intensity_pct: float
    high_intensity_pct: float
    is_polarized: bool
    compliance_score: int = Field(..., ge=0, le=100)
    recommendation: str
    target_low_pct: float
    target_high_pct: float


# ---------------------------------------------------------------------------
# Daily load entity schemas
# ---------------------------------------------------------------------------

class DailyLoadCreate(ZoneDistribution):
    """Schema for logging (or overwriting) one day of training load."""

    log_date: datetime.date = Field(..., description="Calendar date (YYYY-MM-DD)")
    total_tss: Optional[float] = Field(
        None, ge=0.0, le=2000.0,
        description="Total training stress score. Estimated from power, HR or RPE when omitted.",
    )
    total_duration_minutes: int = Field(0, ge=0, le=1440)
    session_rpe_avg: Optional[float] = Field(None, ge=1.0, le=10.0, description="Average session RPE (1-10)")
    avg_hr: Optional[int] = Field(
        None, ge=30, le=230,
        description="Average heart rate. Used to estimate RPE from the athlete's LTHR when RPE is omitted.",
    )
    normalized_power: Optional[int] = Field(
        None, ge=0, le=2500, description="Normalized power (W). Used with the athlete's FTP to estimate TSS.",
    )
    training_load: Optional[float] = Field(
        None, ge=0.0,
        description="Foster session load (duration × RPE). Derived from duration and RPE when omitted.",
    )


class DailyLoadResponse(DailyLoadCreate):
    """Daily load with its metric snapshot, kept current by every write."""

    id: int
    user_id: int
    total_tss: float
    tss_source: Optional[TSSSource] = None
    ctl: Optional[float] = None
    atl: Optional[float] = None
    tsb: Optional[float] = None
    monotony: Optional[float] = None
    strain: Optional[float] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class TrainingLoadSummary(BaseModel):
    """Current training state over the requested window."""

    current_ctl: float
    current_atl: float
    current_tsb: float
    tsb_range: TSBRange
    monotony: float
    strain: float
    acwr: float
    weekly_load: float
    weekly_tss: float
    strain_analysis: TrainingStrainAnalysis
    polarized: PolarizedAnalysis


class TrainingLoadResponse(BaseModel):
    """Training load history plus summary."""

    history: list[DailyLoadResponse]
    series: list[TrainingLoadPoint]
    summary: TrainingLoadSummary


class DailyLoadWriteResponse(BaseModel):
    """Result of logging a daily load."""

    record: DailyLoadResponse
    ctl: float
    atl: float
    tsb: float
