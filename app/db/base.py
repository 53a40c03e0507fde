"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.user import User  # noqa: F401
from app.models.daily_load import DailyLoad  # noqa: F401
from app.models.readiness import ReadinessAssessment, ReadinessBaselines  # noqa: F401
from app.models.training_plan import SuggestedWorkout, TrainingPlan  # noqa: F401
from app.models.adaptation import AdaptationSettings, PlanRecommendation  # noqa: F401
