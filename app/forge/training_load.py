"""
Training load: Banister impulse-response and Foster session-RPE metrics.

Model
-----
Daily training stress (TSS) is smoothed with two exponentially weighted
moving averages:

    load_today = load_yesterday + k × (tss_today - load_yesterday)
    k = 2 / (time_constant + 1)

with a 42-day time constant for CTL ("fitness") and a 7-day time constant
for ATL ("fatigue").  Their difference is TSB ("form"):

    tsb = ctl - atl

Days without an entry are treated as TSS = 0; the history is densified
day by day between its first and last date before smoothing.  Nothing is
interpolated.

Foster's method complements the EWMA model with:

    session load = duration (min) × session RPE
    monotony     = mean(daily load) / stddev(daily load)   (one week)
    strain       = weekly load × monotony

All functions here are pure.  Callers are responsible for windowing the
history (typically the last 90-100 days).
"""

from __future__ import annotations

import datetime
import statistics
from collections import defaultdict
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from app.forge.classifiers import (
    RISK_LEVELS,
    classify_acwr,
    classify_monotony,
    classify_strain,
)
from app.schemas.training_load import (
    PolarizedAnalysis,
    TrainingLoadPoint,
    TrainingStrainAnalysis,
    TSSEntry,
    TSSSource,
    ZoneDistribution,
)

# ======================================================================
# Configuration
# ======================================================================

_CTL_DAYS = 42
_ATL_DAYS = 7

# Returned when every daily load is identical and non-zero: maximal
# monotony, but a finite number that can be stored and compared.
_MONOTONY_CAP = 10.0


class TrainingLoadConfig(BaseModel):
    """Configuration for the training load computation."""

    ctl_days: int = Field(_CTL_DAYS, ge=7, le=90)
    atl_days: int = Field(_ATL_DAYS, ge=3, le=21)
    monotony_cap: float = Field(_MONOTONY_CAP, gt=0.0)

    resting_hr: int = Field(50, ge=25, le=120)
    max_hr: int = Field(190, ge=120, le=230)
    # Assumed session RPE when a day carries no power, HR or RPE.
    default_session_rpe: float = Field(5.0, ge=1.0, le=10.0)

    polarized_target_low_pct: float = Field(80.0, ge=0.0, le=100.0)
    polarized_target_high_pct: float = Field(20.0, ge=0.0, le=100.0)


DEFAULT_TRAINING_LOAD_CONFIG = TrainingLoadConfig()


# ======================================================================
# CTL / ATL / TSB
# ======================================================================


def _daily_series(history: Iterable[TSSEntry]) -> tuple[Optional[datetime.date], list[float]]:
    """Densify a TSS history into one value per calendar day.

    Multiple entries on the same date are summed.

    Returns:
        ``(first_date, values)`` where ``values[i]`` is the TSS on
        ``first_date + i days``.  ``(None, [])`` for an empty history.
    """
    by_date: dict[datetime.date, float] = defaultdict(float)
    for entry in history:
        by_date[entry.date] += entry.tss

    if not by_date:
        return None, []

    first, last = min(by_date), max(by_date)
    span = (last - first).days + 1
    return first, [by_date.get(first + datetime.timedelta(days=i), 0.0) for i in range(span)]


def _smoothing(days: int) -> float:
    return 2.0 / (days + 1)


def _ewma(values: Sequence[float], days: int) -> float:
    k = _smoothing(days)
    value = 0.0
    for tss in values:
        value += k * (tss - value)
    return value


def calculate_ctl(history: Iterable[TSSEntry], days: int = _CTL_DAYS) -> float:
    """Chronic training load at the most recent date in ``history``."""
    _, values = _daily_series(history)
    if not values:
        return 0.0
    return round(_ewma(values, days), 1)


def calculate_atl(history: Iterable[TSSEntry], days: int = _ATL_DAYS) -> float:
    """Acute training load at the most recent date in ``history``."""
    _, values = _daily_series(history)
    if not values:
        return 0.0
    return round(_ewma(values, days), 1)


def calculate_tsb(ctl: float, atl: float) -> float:
    """Training stress balance: positive = fresh, negative = fatigued."""
    return ctl - atl


def calculate_load_history(
    history: Iterable[TSSEntry],
    start: datetime.date,
    end: datetime.date,
    config: Optional[TrainingLoadConfig] = None,
) -> list[TrainingLoadPoint]:
    """CTL/ATL/TSB for every date in ``[start, end]``.

    Each point uses all history up to and including its date.  The
    averages are carried forward in a single pass, so this is linear in
    the number of days covered.
    """
    cfg = config or DEFAULT_TRAINING_LOAD_CONFIG
    if end < start:
        return []

    first, values = _daily_series(history)
    k_ctl = _smoothing(cfg.ctl_days)
    k_atl = _smoothing(cfg.atl_days)

    ctl = atl = 0.0
    points: list[TrainingLoadPoint] = []
    day = min(first, start) if first is not None else start

    while day <= end:
        idx = (day - first).days if first is not None else -1
        tss = values[idx] if 0 <= idx < len(values) else 0.0
        ctl += k_ctl * (tss - ctl)
        atl += k_atl * (tss - atl)
        if day >= start:
            rounded_ctl, rounded_atl = round(ctl, 1), round(atl, 1)
            points.append(TrainingLoadPoint(
                date=day,
                ctl=rounded_ctl,
                atl=rounded_atl,
                tsb=calculate_tsb(rounded_ctl, rounded_atl),
            ))
        day += datetime.timedelta(days=1)

    return points


# ======================================================================
# Session RPE, monotony, strain, ACWR (Foster)
# ======================================================================


def calculate_session_load(duration_minutes: float, session_rpe: float) -> float:
    """Foster session load: duration (minutes) × session RPE."""
    return float(round(duration_minutes * session_rpe))


def estimate_session_rpe(avg_hr: float, lthr: float, config: Optional[TrainingLoadConfig] = None) -> int:
    """Estimate session RPE (1-10) from average HR relative to threshold HR."""
    cfg = config or DEFAULT_TRAINING_LOAD_CONFIG
    hr_reserve = cfg.max_hr - cfg.resting_hr
    lthr_pct = (lthr - cfg.resting_hr) / hr_reserve
    avg_pct = (avg_hr - cfg.resting_hr) / hr_reserve
    if lthr_pct <= 0:
        return 5

    ratio = avg_pct / lthr_pct
    for limit, rpe in ((0.6, 2), (0.7, 3), (0.8, 4), (0.9, 5), (0.95, 6), (1.0, 7), (1.05, 8), (1.1, 9)):
        if ratio < limit:
            return rpe
    return 10


def calculate_monotony(daily_loads: Sequence[float], config: Optional[TrainingLoadConfig] = None) -> float:
    """Foster monotony: mean / population stddev of daily loads.

    Fewer than two points, or all-zero loads, return ``0.0``.  Identical
    non-zero loads (zero variance) return the configured cap.
    """
    cfg = config or DEFAULT_TRAINING_LOAD_CONFIG
    loads = [float(x) for x in daily_loads]
    if len(loads) < 2:
        return 0.0

    mean = statistics.fmean(loads)
    sd = statistics.pstdev(loads)
    if sd == 0:
        return cfg.monotony_cap if mean > 0 else 0.0

    return round(mean / sd, 2)


def calculate_strain(weekly_load: float, monotony: float) -> float:
    """Foster strain: weekly load × monotony."""
    return float(round(weekly_load * monotony))


def calculate_acwr(atl: float, ctl: float) -> float:
    """Acute:chronic workload ratio.  ``0.0`` when there is no chronic load."""
    if ctl <= 0:
        return 0.0
    return round(atl / ctl, 2)


def analyze_training_strain(
    daily_loads: Sequence[float],
    atl: float,
    ctl: float,
    config: Optional[TrainingLoadConfig] = None,
) -> TrainingStrainAnalysis:
    """Weekly strain analysis: monotony, strain and ACWR with a risk level."""
    weekly_load = float(sum(daily_loads))
    monotony = calculate_monotony(daily_loads, config)
    strain = calculate_strain(weekly_load, monotony)
    acwr = calculate_acwr(atl, ctl)

    monotony_risk = classify_monotony(monotony)
    strain_risk = classify_strain(strain)
    acwr_risk = classify_acwr(acwr) if ctl > 0 else "insufficient_history"

    # ACWR contributes at most "high"; monotony/strain can reach "very_high".
    acwr_level = {"caution": "moderate", "high_risk": "high"}.get(acwr_risk, "low")
    risk_level = max((monotony_risk, strain_risk, acwr_level), key=RISK_LEVELS.index)

    recommendation = {
        "low": "Training load is appropriate",
        "moderate": "Monitor fatigue and recovery closely",
        "high": "Elevated risk - consider reducing load",
        "very_high": "High injury risk - reduce load and add variety",
    }[risk_level]

    if acwr_risk == "undertrained" and ctl > 20:
        recommendation = "Training load may be too low to maintain fitness"

    return TrainingStrainAnalysis(
        weekly_load=weekly_load,
        monotony=monotony,
        strain=strain,
        acwr=acwr,
        monotony_risk=monotony_risk,
        strain_risk=strain_risk,
        acwr_risk=acwr_risk,
        risk_level=risk_level,
        recommendation=recommendation,
    )


# ======================================================================
# TSS estimation
# ======================================================================


def calculate_hr_tss(
    avg_hr: float,
    duration_minutes: float,
    lthr: float,
    config: Optional[TrainingLoadConfig] = None,
) -> float:
    """Heart-rate TSS: hours × IF² × 100 with IF from heart-rate reserve."""
    cfg = config or DEFAULT_TRAINING_LOAD_CONFIG
    lthr_reserve = lthr - cfg.resting_hr
    if lthr_reserve <= 0 or avg_hr <= 0 or duration_minutes <= 0:
        return 0.0

    intensity_factor = max(0.0, avg_hr - cfg.resting_hr) / lthr_reserve
    return float(round(duration_minutes / 60 * intensity_factor ** 2 * 100))


def calculate_power_tss(normalized_power: float, duration_minutes: float, ftp: float) -> float:
    """Power TSS: hours × (NP / FTP)² × 100."""
    if ftp <= 0 or normalized_power <= 0 or duration_minutes <= 0:
        return 0.0
    intensity_factor = normalized_power / ftp
    return float(round(duration_minutes / 60 * intensity_factor ** 2 * 100))


def estimate_tss_from_rpe(duration_minutes: float, session_rpe: float) -> float:
    """Rough TSS when neither HR nor power is available (RPE 5 ≈ 0.9 TSS/min)."""
    tss_per_min = 0.3 + (session_rpe / 10) * 1.2
    return float(round(duration_minutes * tss_per_min))


def estimate_daily_tss(
    duration_minutes: float,
    normalized_power: Optional[float] = None,
    ftp: Optional[float] = None,
    avg_hr: Optional[float] = None,
    lthr: Optional[float] = None,
    session_rpe: Optional[float] = None,
    config: Optional[TrainingLoadConfig] = None,
) -> tuple[float, TSSSource]:
    """TSS from the best data available: power, then heart rate, then RPE.

    Falls back to ``config.default_session_rpe`` when none is given.

    Returns:
        ``(tss, source)``; ``(0.0, "none")`` for a day without duration
    """
    cfg = config or DEFAULT_TRAINING_LOAD_CONFIG
    if duration_minutes <= 0:
        return 0.0, "none"
    if normalized_power and ftp and ftp > 0:
        return calculate_power_tss(normalized_power, duration_minutes, ftp), "power"
    if avg_hr and lthr and lthr > 0:
        return calculate_hr_tss(avg_hr, duration_minutes, lthr, cfg), "hr"
    if session_rpe:
        return estimate_tss_from_rpe(duration_minutes, session_rpe), "rpe"
    return estimate_tss_from_rpe(duration_minutes, cfg.default_session_rpe), "default"


# ======================================================================
# Polarized distribution (Seiler)
# ======================================================================


def analyze_polarized_distribution(
    zones: ZoneDistribution,
    config: Optional[TrainingLoadConfig] = None,
) -> PolarizedAnalysis:
    """Compare time-in-zone against the polarized target (≈80% easy, ≈20% hard).

    Zones 1-2 are low intensity, zone 3 is the "gray zone", zones 4-5 are
    high intensity.
    """
    cfg = config or DEFAULT_TRAINING_LOAD_CONFIG
    target_low, target_high = cfg.polarized_target_low_pct, cfg.polarized_target_high_pct
    total = zones.total_seconds

    if total == 0:
        return PolarizedAnalysis(
            low_intensity_pct=0.0, mid_intensity_pct=0.0, high_intensity_pct=0.0,
            is_polarized=False, compliance_score=0,
            recommendation="No training data available",
            target_low_pct=target_low, target_high_pct=target_high,
        )

    low_pct = (zones.zone_1_seconds + zones.zone_2_seconds) / total * 100
    mid_pct = zones.zone_3_seconds / total * 100
    high_pct = (zones.zone_4_seconds + zones.zone_5_seconds) / total * 100

    mid_penalty = max(0.0, mid_pct - 10) * 2
    compliance = max(0.0, 100 - abs(low_pct - target_low) - abs(high_pct - target_high) - mid_penalty)
    is_polarized = low_pct >= 75 and mid_pct <= 15 and high_pct >= 10

    if mid_pct > 20:
        recommendation = (f'Too much Zone 3 "gray zone" training ({mid_pct:.0f}%). '
                          "Reduce tempo work and focus on truly easy or truly hard efforts.")
    elif low_pct < 70:
        recommendation = (f"Not enough easy training ({low_pct:.0f}%). "
                          "Add more Zone 1-2 volume for better recovery and adaptation.")
    elif high_pct < 10:
        recommendation = (f"Not enough high-intensity work ({high_pct:.0f}%). "
                          "Add interval sessions for fitness gains.")
    elif is_polarized:
        recommendation = "Excellent polarized distribution! Keep it up."
    else:
        recommendation = "Good distribution. Minor adjustments could optimize your training."

    return PolarizedAnalysis(
        low_intensity_pct=round(low_pct, 1),
        mid_intensity_pct=round(mid_pct, 1),
        high_intensity_pct=round(high_pct, 1),
        is_polarized=is_polarized,
        compliance_score=int(round(compliance)),
        recommendation=recommendation,
        target_low_pct=target_low,
        target_high_pct=target_high,
    )
