"""Business logic services."""

from app.services.user_service import UserService
from app.services.training_load_service import TrainingLoadService
from app.services.baseline_service import BaselineService
from app.services.readiness_service import ReadinessService
from app.services.adaptation_settings_service import AdaptationSettingsService
from app.services.training_plan_service import TrainingPlanService
from app.services.day_of_service import DayOfAdjustmentService
from app.services.recommendation_service import RecommendationService

__all__ = [
    "UserService",
    "TrainingLoadService",
    "BaselineService",
    "ReadinessService",
    "AdaptationSettingsService",
    "TrainingPlanService",
    "DayOfAdjustmentService",
    "RecommendationService",
]
