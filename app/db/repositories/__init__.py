"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.daily_load import DailyLoadRepository
from app.db.repositories.readiness import ReadinessAssessmentRepository, ReadinessBaselinesRepository
from app.db.repositories.training_plan import SuggestedWorkoutRepository, TrainingPlanRepository
from app.db.repositories.adaptation import AdaptationSettingsRepository, PlanRecommendationRepository

__all__ = [
    "UserRepository",
    "DailyLoadRepository",
    "ReadinessAssessmentRepository",
    "ReadinessBaselinesRepository",
    "TrainingPlanRepository",
    "SuggestedWorkoutRepository",
    "AdaptationSettingsRepository",
    "PlanRecommendationRepository",
]
