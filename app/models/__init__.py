"""SQLModel database models."""

from app.models.user import User
from app.models.daily_load import DailyLoad
from app.models.readiness import ReadinessAssessment, ReadinessBaselines
from app.models.training_plan import SuggestedWorkout, TrainingPlan
from app.models.adaptation import AdaptationSettings, PlanRecommendation

__all__ = [
    "User",
    "DailyLoad",
    "ReadinessAssessment",
    "ReadinessBaselines",
    "TrainingPlan",
    "SuggestedWorkout",
    "AdaptationSettings",
    "PlanRecommendation",
]
