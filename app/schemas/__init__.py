"""Pydantic schemas for request/response validation."""

from app.schemas.user import Token, UserCreate, UserLogin, UserResponse, UserUpdate
from app.schemas.training_load import (
    DailyLoadCreate,
    DailyLoadResponse,
    DailyLoadWriteResponse,
    TrainingLoadResponse,
)
from app.schemas.readiness import (
    ReadinessAssessmentCreate,
    ReadinessAssessmentResponse,
    ReadinessBaselinesResponse,
    ReadinessLogResponse,
    ReadinessResult,
)
from app.schemas.training_plan import (
    SuggestedWorkoutCreate,
    SuggestedWorkoutResponse,
    TrainingPlanCreate,
    TrainingPlanResponse,
)
from app.schemas.adaptation import (
    AdaptationSettingsResponse,
    AdaptationSettingsUpdate,
    DayOfResponse,
    RecommendationRespondRequest,
    RecommendationResponse,
)

__all__ = [
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserUpdate",
    "DailyLoadCreate",
    "DailyLoadResponse",
    "DailyLoadWriteResponse",
    "TrainingLoadResponse",
    "ReadinessAssessmentCreate",
    "ReadinessAssessmentResponse",
    "ReadinessBaselinesResponse",
    "ReadinessLogResponse",
    "ReadinessResult",
    "TrainingPlanCreate",
    "TrainingPlanResponse",
    "SuggestedWorkoutCreate",
    "SuggestedWorkoutResponse",
    "AdaptationSettingsResponse",
    "AdaptationSettingsUpdate",
    "DayOfResponse",
    "RecommendationRespondRequest",
    "RecommendationResponse",
]
