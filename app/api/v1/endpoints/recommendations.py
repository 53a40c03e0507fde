"""
Plan recommendation endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.adaptation import (
    RecommendationListResponse,
    RecommendationRespondRequest,
    RecommendationRespondResponse,
    RecommendationResponse,
)
from app.services.recommendation_service import RecommendationService

router = APIRouter()


@router.get("", summary="List recommendations, most urgent first.", response_model=RecommendationListResponse)
def list_recommendations(status_filter: str = Query("pending", alias="status",
                                                   description="Status filter, or 'all'"),
                         plan_id: Optional[int] = Query(None, description="Plan filter"),
                         limit: int = Query(20, ge=1, le=100),
                         offset: int = Query(0, ge=0),
                         db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return RecommendationService(db).list_recommendations(user.id, status_filter, plan_id, limit, offset)


@router.get("/{recommendation_id}", summary="Get a recommendation.", response_model=RecommendationResponse)
def get_recommendation(recommendation_id: int, db: Session = Depends(get_db),
                       user: User = Depends(get_current_user)):
    return RecommendationService(db).get(user.id, recommendation_id)


@router.post("/{recommendation_id}/respond", summary="Accept, modify or dismiss a recommendation.",
             response_model=RecommendationRespondResponse)
def respond(recommendation_id: int, data: RecommendationRespondRequest, db: Session = Depends(get_db),
            user: User = Depends(get_current_user)):
    return RecommendationService(db).respond(user.id, recommendation_id, data)
