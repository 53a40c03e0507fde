"""Forge core algorithms: training load, readiness, baselines, day-of adjustments."""

from app.forge.baselines import compute_baselines, z_score
from app.forge.classifiers import classify_acwr, classify_monotony, classify_strain, classify_tsb, get_tsb_range
from app.forge.day_of import DayOfConfig, evaluate_day_of
from app.forge.readiness import ReadinessConfig, calculate_readiness_score
from app.forge.training_load import (
    TrainingLoadConfig,
    calculate_acwr,
    calculate_atl,
    calculate_ctl,
    calculate_monotony,
    calculate_strain,
    calculate_tsb,
)

__all__ = [
    "DayOfConfig",
    "ReadinessConfig",
    "TrainingLoadConfig",
    "calculate_acwr",
    "calculate_atl",
    "calculate_ctl",
    "calculate_monotony",
    "calculate_readiness_score",
    "calculate_strain",
    "calculate_tsb",
    "classify_acwr",
    "classify_monotony",
    "classify_strain",
    "classify_tsb",
    "compute_baselines",
    "evaluate_day_of",
    "get_tsb_range",
    "z_score",
]
