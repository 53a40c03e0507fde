"""
Readiness endpoints.

Assessment logging, history and baselines.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.adaptation import ReadinessWithRecommendationsResponse
from app.schemas.readiness import (
    ReadinessAssessmentCreate,
    ReadinessBaselineEnvelope,
    ReadinessListResponse,
    ReadinessLogResponse,
)
from app.services.readiness_service import ReadinessService

router = APIRouter()


@router.get("", summary="Recent readiness assessments.", response_model=ReadinessListResponse)
def list_readiness(date: Optional[datetime.date] = Query(None, description="Exact date filter"),
                   limit: int = Query(7, ge=1, le=90, description="Max assessments to return"),
                   db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return ReadinessService(db).list_assessments(user.id, date, limit)


@router.post("", summary="Log a readiness assessment.", response_model=ReadinessLogResponse,
             status_code=status.HTTP_201_CREATED)
def log_readiness(data: ReadinessAssessmentCreate, db: Session = Depends(get_db),
                  user: User = Depends(get_current_user)):
    """Scores the assessment against the current baselines, stores it and refreshes the baselines."""
    return ReadinessService(db).log_assessment(user, data)


@router.get("/baseline", summary="Current readiness baselines.", response_model=ReadinessBaselineEnvelope)
def get_baseline(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return ReadinessBaselineEnvelope(baselines=ReadinessService(db).get_baselines(user.id))


@router.post("/with-recommendations", summary="Log readiness and evaluate today's workouts.",
             response_model=ReadinessWithRecommendationsResponse, status_code=status.HTTP_201_CREATED)
def log_readiness_with_recommendations(data: ReadinessAssessmentCreate, db: Session = Depends(get_db),
                                       user: User = Depends(get_current_user)):
    """Like ``POST /readiness``, then runs the day-of evaluation on the active plan."""
    return ReadinessService(db).log_with_recommendations(user, data)
