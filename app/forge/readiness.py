"""
Readiness scorer: daily readiness from subjective and objective markers.

Model
-----
Each factor that is actually available produces a 0-100 sub-score.  The
final score is the weighted mean over the *present* factors only:

    score = Σ subscore_i × weight_i / Σ weight_i

so a missing marker neither pulls the score toward a neutral value nor
penalises the athlete.  Subjective readiness is always present.

Objective markers (HRV, grip strength, vertical jump) are compared with
the athlete's own rolling baseline via a z-score:

    z        = (value - baseline.avg) / baseline.std
    subscore = clamp(center + slope × z, 0, 100)

A marker with no defined baseline (fewer than two samples, or zero
spread) is left out rather than guessed.  Sleep and TSB are scored on
absolute scales: 7 h or more of sleep is optimal, and TSB is neutral-to-good
down to a floor, decreasing linearly below it.  Both are non-decreasing,
so more sleep or a fresher TSB never lowers the score.

The score maps to an intensity recommendation and an adjustment factor
that is monotone in the score:

    score >= push_threshold    → push      1.00 → ceiling
    score >= reduce_threshold  → maintain  1.00
    otherwise                  → reduce    floor → 1.00
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.forge.baselines import z_score
from app.schemas.readiness import (
    BaselineStats,
    FactorBreakdown,
    ReadinessFactors,
    ReadinessInput,
    ReadinessResult,
)

# ======================================================================
# Configuration
# ======================================================================

_DEFAULT_WEIGHTS: dict[str, float] = {
    "subjective": 35.0,
    "hrv": 20.0,
    "sleep": 20.0,
    "tsb": 15.0,
    "grip_strength": 5.0,
    "vertical_jump": 5.0,
}


class ReadinessConfig(BaseModel):
    """Tunable constants of the readiness scorer."""

    weights: dict[str, float] = Field(default_factory=lambda: dict(_DEFAULT_WEIGHTS))

    # z-score → sub-score mapping (z=0 → 60, z=+2 → 100, z=-3 → 0).
    z_center: float = 60.0
    z_slope: float = 20.0
    low_z_threshold: float = -1.0

    # Sleep.
    sleep_optimal_min: float = 7.0
    sleep_short_hours: float = 6.0

    # TSB.
    tsb_floor: float = -10.0
    tsb_slope: float = 3.0
    tsb_fresh_score: float = 90.0
    tsb_high_stress: float = -15.0

    # Recommendation.
    low_subjective: int = 4
    push_threshold: float = Field(70.0, ge=0.0, le=100.0)
    reduce_threshold: float = Field(40.0, ge=0.0, le=100.0)
    adjustment_floor: float = Field(0.70, gt=0.0, le=1.0)
    adjustment_ceiling: float = Field(1.10, ge=1.0, le=2.0)


DEFAULT_READINESS_CONFIG = ReadinessConfig()


# ======================================================================
# Factor sub-scores
# ======================================================================


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _z_subscore(z: float, cfg: ReadinessConfig) -> float:
    return _clamp(cfg.z_center + cfg.z_slope * z)


def _sleep_hours_subscore(hours: float, cfg: ReadinessConfig) -> float:
    if hours >= cfg.sleep_optimal_min:
        return 100.0
    if hours >= cfg.sleep_short_hours:
        # 6 h → 60, 7 h → 100
        span = cfg.sleep_optimal_min - cfg.sleep_short_hours
        return 60.0 + (hours - cfg.sleep_short_hours) / span * 40.0
    return _clamp(hours * 10.0)


def _sleep_subscore(quality: Optional[int], hours: Optional[float], cfg: ReadinessConfig) -> Optional[float]:
    parts: list[float] = []
    if quality is not None:
        parts.append(quality * 10.0)
    if hours is not None:
        parts.append(_sleep_hours_subscore(hours, cfg))
    if not parts:
        return None
    return sum(parts) / len(parts)


def _tsb_subscore(tsb: float, cfg: ReadinessConfig) -> float:
    if tsb >= cfg.tsb_floor:
        return cfg.tsb_fresh_score
    return _clamp(cfg.tsb_fresh_score + (tsb - cfg.tsb_floor) * cfg.tsb_slope)


# ======================================================================
# Recommendation mapping
# ======================================================================


def _recommend(score: int, cfg: ReadinessConfig) -> str:
    if score >= cfg.push_threshold:
        return "push"
    if score >= cfg.reduce_threshold:
        return "maintain"
    return "reduce"


def adjustment_factor_for(score: float, config: Optional[ReadinessConfig] = None) -> float:
    """Intensity multiplier for a readiness score; monotone non-decreasing in the score."""
    cfg = config or DEFAULT_READINESS_CONFIG
    if score >= cfg.push_threshold:
        headroom = max(100.0 - cfg.push_threshold, 1.0)
        factor = 1.0 + (score - cfg.push_threshold) / headroom * (cfg.adjustment_ceiling - 1.0)
    elif score >= cfg.reduce_threshold:
        factor = 1.0
    else:
        factor = cfg.adjustment_floor + (score / cfg.reduce_threshold) * (1.0 - cfg.adjustment_floor)

    return round(_clamp(factor, cfg.adjustment_floor, cfg.adjustment_ceiling), 2)


def readiness_color(score: float, config: Optional[ReadinessConfig] = None) -> str:
    """Traffic-light color for a readiness score, on the recommendation bands."""
    cfg = config or DEFAULT_READINESS_CONFIG
    if score >= cfg.push_threshold:
        return "green"
    if score >= cfg.reduce_threshold:
        return "amber"
    return "red"


# ======================================================================
# Main entry point
# ======================================================================


def calculate_readiness_score(
    assessment: ReadinessInput,
    baselines: Optional[BaselineStats],
    config: Optional[ReadinessConfig] = None,
) -> ReadinessResult:
    """Score a readiness assessment against the athlete's baselines.

    Args:
        assessment: Markers for the day.  ``subjective_readiness`` is
            validated to 1-10 when the model is built.
        baselines: Rolling baselines, or ``None`` for a new athlete.
        config: Optional :class:`ReadinessConfig` override.

    Returns:
        :class:`ReadinessResult` with score, recommendation, adjustment
        factor, per-factor breakdown and suggestions.
    """
    cfg = config or DEFAULT_READINESS_CONFIG
    stats = baselines or BaselineStats()
    suggestions: list[str] = []

    # name → (value, subscore, z)
    present: dict[str, tuple[float, float, Optional[float]]] = {}

    subjective = assessment.subjective_readiness
    present["subjective"] = (float(subjective), subjective * 10.0, None)
    if subjective <= cfg.low_subjective:
        suggestions.append("Consider a lighter session or active recovery")

    hrv_z = z_score(assessment.hrv_reading, stats.hrv)
    if hrv_z is not None:
        present["hrv"] = (assessment.hrv_reading, _z_subscore(hrv_z, cfg), hrv_z)
        if hrv_z < cfg.low_z_threshold:
            suggestions.append("HRV is significantly below baseline - prioritize recovery")

    sleep_score = _sleep_subscore(assessment.sleep_quality, assessment.sleep_hours, cfg)
    if sleep_score is not None:
        sleep_value = assessment.sleep_quality if assessment.sleep_quality is not None else assessment.sleep_hours
        present["sleep"] = (float(sleep_value), sleep_score, None)
        if assessment.sleep_hours is not None and assessment.sleep_hours < cfg.sleep_short_hours:
            suggestions.append("Sleep was inadequate - consider reducing intensity")

    if assessment.tsb_value is not None:
        present["tsb"] = (assessment.tsb_value, _tsb_subscore(assessment.tsb_value, cfg), None)
        if assessment.tsb_value < cfg.tsb_high_stress:
            suggestions.append("Training stress is high - deload may be needed")

    grip_z = z_score(assessment.grip_strength_lbs, stats.grip_strength)
    if grip_z is not None:
        present["grip_strength"] = (assessment.grip_strength_lbs, _z_subscore(grip_z, cfg), grip_z)
        if grip_z < cfg.low_z_threshold:
            suggestions.append("Grip strength is below baseline - CNS may be fatigued")

    jump_z = z_score(assessment.vertical_jump_inches, stats.vertical_jump)
    if jump_z is not None:
        present["vertical_jump"] = (assessment.vertical_jump_inches, _z_subscore(jump_z, cfg), jump_z)
        if jump_z < cfg.low_z_threshold:
            suggestions.append("Jump performance is reduced - consider power-dominant exercises another day")

    total_weight = sum(cfg.weights.get(name, 0.0) for name in present)
    weighted_sum = sum(sub * cfg.weights.get(name, 0.0) for name, (_, sub, _) in present.items())
    raw = weighted_sum / total_weight if total_weight > 0 else present["subjective"][1]
    score = int(round(_clamp(raw)))

    breakdown: dict[str, FactorBreakdown] = {}
    for name, (value, sub, z) in present.items():
        weight = cfg.weights.get(name, 0.0)
        breakdown[name] = FactorBreakdown(
            value=value,
            weight=weight,
            score=round(sub, 1),
            contribution=round(sub * weight / total_weight, 2) if total_weight > 0 else 0.0,
            z_score=round(z, 2) if z is not None else None,
        )

    recommendation = _recommend(score, cfg)

    if not suggestions:
        if recommendation == "push":
            suggestions.append("Good readiness - train as planned or push slightly")
        elif recommendation == "maintain":
            suggestions.append("Moderate readiness - stick to planned workout")
        else:
            suggestions.append("Low readiness - reduce intensity today")

    return ReadinessResult(
        score=score,
        recommendation=recommendation,
        adjustment_factor=adjustment_factor_for(score, cfg),
        color=readiness_color(score, cfg),
        factors=ReadinessFactors(**breakdown),
        suggestions=suggestions,
    )
