"""
Risk and range classifiers for training load metrics.

Each table is an ordered list of ``(label, low, high)`` bands.  A value
belongs to the band with ``low <= value < high``, so a value sitting
exactly on a boundary falls in the upper band.  Bands are contiguous and
cover the whole real line.

Thresholds are operational categories (Foster monotony/strain, Gabbett
ACWR "sweet spot", Coggan TSB form ranges), not absolute truths.
"""

from __future__ import annotations

from app.schemas.training_load import TSBRange

_INF = float("inf")

# Ordered from least to most severe.
RISK_LEVELS: list[str] = ["low", "moderate", "high", "very_high"]

# ======================================================================
# Threshold tables
# ======================================================================

_TSB_BANDS: list[tuple[str, float, float]] = [
    ("very_fatigued", -_INF, -40.0),
    ("fatigued", -40.0, -25.0),
    ("tired", -25.0, -10.0),
    ("optimal", -10.0, 10.0),
    ("fresh", 10.0, 25.0),
    ("very_fresh", 25.0, _INF),
]

_TSB_DETAILS: dict[str, tuple[str, str, str]] = {
    "very_fresh": ("Very Fresh", "green", "Ready for a big effort or race"),
    "fresh": ("Fresh", "blue", "Good for quality training"),
    "optimal": ("Optimal", "blue", "Balanced fitness and freshness"),
    "tired": ("Tired", "amber", "Building fitness, monitor recovery"),
    "fatigued": ("Fatigued", "orange", "Consider easier training or rest"),
    "very_fatigued": ("Very Fatigued", "red", "High injury risk - rest recommended"),
}

_MONOTONY_BANDS: list[tuple[str, float, float]] = [
    ("low", -_INF, 1.5),
    ("moderate", 1.5, 2.0),
    ("high", 2.0, 2.5),
    ("very_high", 2.5, _INF),
]

_STRAIN_BANDS: list[tuple[str, float, float]] = [
    ("low", -_INF, 3000.0),
    ("moderate", 3000.0, 5000.0),
    ("high", 5000.0, 7000.0),
    ("very_high", 7000.0, _INF),
]

_ACWR_BANDS: list[tuple[str, float, float]] = [
    ("undertrained", -_INF, 0.8),
    ("optimal", 0.8, 1.3),
    ("caution", 1.3, 1.5),
    ("high_risk", 1.5, _INF),
]


def _classify(value: float, bands: list[tuple[str, float, float]]) -> str:
    for label, low, high in bands:
        if low <= value < high:
            return label
    # Only reachable for +inf / NaN.
    return bands[-1][0]


# ======================================================================
# Public classifiers
# ======================================================================


def classify_tsb(tsb: float) -> str:
    """Map a TSB value to its form band."""
    return _classify(tsb, _TSB_BANDS)


def get_tsb_range(tsb: float) -> TSBRange:
    """TSB band with its display label, color and recommendation."""
    band = classify_tsb(tsb)
    label, color, recommendation = _TSB_DETAILS[band]
    return TSBRange(band=band, label=label, color=color, recommendation=recommendation)


def classify_monotony(monotony: float) -> str:
    """Map a weekly monotony value to a risk level."""
    return _classify(monotony, _MONOTONY_BANDS)


def classify_strain(strain: float) -> str:
    """Map a weekly strain value to a risk level."""
    return _classify(strain, _STRAIN_BANDS)


def classify_acwr(acwr: float) -> str:
    """Map an ACWR value to its injury-risk band."""
    return _classify(acwr, _ACWR_BANDS)
