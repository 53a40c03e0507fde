"""
Training plan endpoints.

Plans, their suggested workouts and the day-of evaluation.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.adaptation import DayOfResponse
from app.schemas.training_plan import (
    SuggestedWorkoutCreate,
    SuggestedWorkoutResponse,
    TrainingPlanCreate,
    TrainingPlanResponse,
)
from app.services.day_of_service import DayOfAdjustmentService
from app.services.training_plan_service import TrainingPlanService

router = APIRouter()


@router.post("", summary="Create a training plan.", response_model=TrainingPlanResponse,
             status_code=status.HTTP_201_CREATED)
def create_plan(data: TrainingPlanCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return TrainingPlanService(db).create_plan(user.id, data)


@router.get("", summary="List training plans.", response_model=list[TrainingPlanResponse])
def list_plans(status_filter: Optional[str] = Query(None, alias="status", description="Plan status filter"),
               db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return TrainingPlanService(db).list_plans(user.id, status_filter)


@router.post("/{plan_id}/workouts", summary="Add a suggested workout.", response_model=SuggestedWorkoutResponse,
             status_code=status.HTTP_201_CREATED)
def add_workout(plan_id: int, data: SuggestedWorkoutCreate, db: Session = Depends(get_db),
                user: User = Depends(get_current_user)):
    return TrainingPlanService(db).add_workout(user.id, plan_id, data)


@router.get("/{plan_id}/workouts", summary="List suggested workouts.",
            response_model=list[SuggestedWorkoutResponse])
def list_workouts(plan_id: int, date: Optional[datetime.date] = Query(None, description="Exact date filter"),
                  db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return TrainingPlanService(db).list_workouts(user.id, plan_id, date)


@router.get("/{plan_id}/day-of", summary="Evaluate today's workouts against readiness.",
            response_model=DayOfResponse)
def day_of(plan_id: int,
           as_of: Optional[datetime.datetime] = Query(None, description="Evaluation instant (UTC), default now"),
           db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """
    Stores an intensity recommendation when readiness is below the
    user's threshold.  Calling again on the same day returns the same
    pending recommendation.
    """
    return DayOfAdjustmentService(db).create_recommendation(user.id, plan_id, as_of)
