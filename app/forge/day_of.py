"""
Day-of adjustment evaluator.

Decides, for one plan on one day, whether today's suggested workouts
should be scaled down because readiness is low.  The evaluation is a
small state machine over data the caller has already loaded:

    adjustments disabled         → passthrough, no recommendation
    no readiness assessment      → no recommendation
    no suggested workouts        → no recommendation
    score >= threshold           → no recommendation
    score <  threshold           → ``workout_intensity_scale`` draft

The workouts are always returned exactly as given; the evaluator never
modifies them.  Persisting the draft (and de-duplicating it per day) is
the caller's job.
"""

from __future__ import annotations

import datetime
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field

from app.schemas.adaptation import (
    AdaptationSettingsBase,
    ReadinessSnapshot,
    RecommendationDraft,
    WorkoutEvaluationResult,
    WorkoutIntensityScaleChange,
)
from app.schemas.training_plan import WorkoutSummary

# ======================================================================
# Configuration
# ======================================================================


class DayOfConfig(BaseModel):
    """Constants of the day-of evaluator."""

    # (upper bound exclusive, priority); scores above every bound get ``default_priority``.
    priority_bands: list[tuple[float, int]] = Field(
        default_factory=lambda: [(30.0, 1), (40.0, 2), (50.0, 3)],
    )
    default_priority: int = 5

    base_confidence: float = 0.5
    subjective_confidence: float = 0.2
    hrv_confidence: float = 0.15
    sleep_confidence: float = 0.1
    tsb_confidence: float = 0.05

    # Reasoning triggers.
    low_subjective: int = 4
    short_sleep_hours: float = 6.0
    low_hrv_percent: int = 85
    fatigued_tsb: float = -15.0


DEFAULT_DAY_OF_CONFIG = DayOfConfig()
DEFAULT_ADAPTATION_SETTINGS = AdaptationSettingsBase()


# ======================================================================
# Helpers
# ======================================================================


def hrv_percent_of_baseline(hrv: Optional[float], avg_hrv: Optional[float]) -> Optional[int]:
    """Today's HRV as a rounded percentage of the baseline mean."""
    if hrv is None or not avg_hrv:
        return None
    return int(round(hrv / avg_hrv * 100))


def end_of_day(moment: datetime.datetime) -> datetime.datetime:
    """Last representable instant of ``moment``'s calendar day, same tzinfo."""
    return datetime.datetime.combine(moment.date(), datetime.time.max, tzinfo=moment.tzinfo)


def priority_for(score: float, config: Optional[DayOfConfig] = None) -> int:
    """Lower readiness → more urgent (smaller) priority."""
    cfg = config or DEFAULT_DAY_OF_CONFIG
    for upper, priority in cfg.priority_bands:
        if score < upper:
            return priority
    return cfg.default_priority


def confidence_for(readiness: ReadinessSnapshot, config: Optional[DayOfConfig] = None) -> float:
    """Confidence grows with the number of data sources behind the score."""
    cfg = config or DEFAULT_DAY_OF_CONFIG
    confidence = cfg.base_confidence + cfg.subjective_confidence
    if readiness.hrv_percent_baseline is not None:
        confidence += cfg.hrv_confidence
    if readiness.sleep_hours is not None:
        confidence += cfg.sleep_confidence
    if readiness.tsb is not None:
        confidence += cfg.tsb_confidence
    return round(min(confidence, 1.0), 2)


def _original_intensity(workouts: Sequence[WorkoutSummary]) -> str:
    labels = ", ".join(w.primary_intensity for w in workouts if w.primary_intensity)
    if not labels:
        return "Standard intensity"
    return f"{labels.upper()} intensity"


def _scaled_intensity(factor: float) -> str:
    if factor >= 1.0:
        return "No reduction needed"
    return f"Reduce intensity by {int(round((1 - factor) * 100))}%"


def _format_number(value: float) -> str:
    return f"{value:g}"


def build_reasoning(
    readiness: ReadinessSnapshot,
    workouts: Sequence[WorkoutSummary],
    config: Optional[DayOfConfig] = None,
) -> str:
    """Human-readable explanation listing the factors that pulled readiness down."""
    cfg = config or DEFAULT_DAY_OF_CONFIG
    parts = [
        f"Your readiness score is {readiness.readiness_score}/100 this morning, "
        "which is below the threshold for normal training."
    ]

    factors: list[str] = []
    if readiness.subjective_readiness <= cfg.low_subjective:
        factors.append(f"subjective readiness of {readiness.subjective_readiness}/10")
    if readiness.sleep_hours is not None and readiness.sleep_hours < cfg.short_sleep_hours:
        factors.append(f"only {_format_number(readiness.sleep_hours)} hours of sleep")
    if readiness.hrv_percent_baseline is not None and readiness.hrv_percent_baseline < cfg.low_hrv_percent:
        factors.append(f"HRV at {readiness.hrv_percent_baseline}% of baseline")
    if readiness.tsb is not None and readiness.tsb < cfg.fatigued_tsb:
        factors.append(f"TSB of {_format_number(readiness.tsb)} (fatigued)")
    if factors:
        parts.append(f"Contributing factors: {', '.join(factors)}.")

    reduction = int(round((1 - readiness.adjustment_factor) * 100))
    categories = " and ".join(dict.fromkeys(w.category for w in workouts))
    if reduction > 0:
        parts.append(
            f"I recommend reducing today's {categories} workout intensity by {reduction}%. "
            "This allows you to maintain training consistency while respecting your body's recovery state."
        )
    else:
        parts.append("Consider taking today easier or focusing on technique rather than intensity.")

    parts.append("You can push harder when your readiness improves.")
    return " ".join(parts)


def _build_draft(
    readiness: ReadinessSnapshot,
    workouts: Sequence[WorkoutSummary],
    as_of: datetime.datetime,
    user_id: int,
    plan_id: int,
    cfg: DayOfConfig,
) -> RecommendationDraft:
    strength = [w for w in workouts if w.category == "strength"]
    apply_to = "strength" if strength else "all"
    targets = strength or list(workouts)

    trigger_data: dict[str, Any] = {
        "readiness_score": readiness.readiness_score,
        "subjective_readiness": readiness.subjective_readiness,
        "hrv_percent_baseline": readiness.hrv_percent_baseline,
        "sleep_hours": readiness.sleep_hours,
        "tsb": readiness.tsb,
        "trend": "stable",
    }

    return RecommendationDraft(
        user_id=user_id,
        plan_id=plan_id,
        trigger_date=as_of,
        trigger_data=trigger_data,
        target_workout_id=targets[0].id,
        proposed_changes=WorkoutIntensityScaleChange(
            adjustment_factor=readiness.adjustment_factor,
            apply_to=apply_to,
            original_intensity=_original_intensity(targets),
            scaled_intensity=_scaled_intensity(readiness.adjustment_factor),
        ),
        reasoning=build_reasoning(readiness, workouts, cfg),
        confidence_score=confidence_for(readiness, cfg),
        evidence_summary={
            "readiness": {"current": readiness.readiness_score, "trend": "stable"},
            "recovery_quality": {"sleep_hours": readiness.sleep_hours},
        },
        projected_impact={"affected_workouts": len(targets)},
        priority=priority_for(readiness.readiness_score, cfg),
        expires_at=end_of_day(as_of),
    )


# ======================================================================
# Main entry point
# ======================================================================


def evaluate_day_of(
    readiness: Optional[ReadinessSnapshot],
    workouts: Sequence[WorkoutSummary],
    settings: Optional[AdaptationSettingsBase],
    as_of: datetime.datetime,
    user_id: int,
    plan_id: int,
    config: Optional[DayOfConfig] = None,
) -> WorkoutEvaluationResult:
    """Evaluate today's suggested workouts of a plan against readiness.

    Args:
        readiness: Today's readiness, or ``None`` if none was logged.
        workouts: Today's ``suggested`` workouts, ordered by ``order_in_day``.
        settings: The user's adaptation settings; ``None`` means defaults.
        as_of: Evaluation instant.  The draft expires at the end of its day.
        user_id: Owner of the plan.
        plan_id: Plan being evaluated.
        config: Optional :class:`DayOfConfig` override.

    Returns:
        :class:`WorkoutEvaluationResult`.  ``workouts`` is always the input
        list, unchanged.
    """
    cfg = config or DEFAULT_DAY_OF_CONFIG
    prefs = settings or DEFAULT_ADAPTATION_SETTINGS
    passthrough = list(workouts)

    if not prefs.day_of_adjustment_enabled:
        return WorkoutEvaluationResult(
            has_recommendation=False,
            workouts=passthrough,
            readiness_score=readiness.readiness_score if readiness else None,
        )

    if readiness is None:
        return WorkoutEvaluationResult(has_recommendation=False, workouts=passthrough)

    result = WorkoutEvaluationResult(
        has_recommendation=False,
        workouts=passthrough,
        readiness_score=readiness.readiness_score,
        adjustment_factor=readiness.adjustment_factor,
        recommended_intensity=readiness.recommended_intensity,
    )

    if not passthrough or readiness.readiness_score >= prefs.day_of_readiness_threshold:
        return result

    result.has_recommendation = True
    result.recommendation = _build_draft(readiness, passthrough, as_of, user_id, plan_id, cfg)
    return result
