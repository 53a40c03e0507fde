"""
Training load endpoints.

Daily load logging and the CTL/ATL/TSB summary.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.training_load import DailyLoadCreate, DailyLoadWriteResponse, TrainingLoadResponse
from app.services.training_load_service import DEFAULT_SUMMARY_DAYS, TrainingLoadService

router = APIRouter()


@router.get("", summary="Training load history and current state.", response_model=TrainingLoadResponse)
def get_training_load(days: int = Query(DEFAULT_SUMMARY_DAYS, ge=1, le=365, description="Window length"),
                      start: Optional[datetime.date] = Query(None, description="Window start (inclusive)"),
                      end: Optional[datetime.date] = Query(None, description="Window end (inclusive), default today"),
                      db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """
    History of daily loads in the window with the CTL/ATL/TSB series,
    TSB range, monotony, strain, ACWR and polarized distribution.
    """
    return TrainingLoadService(db).get_summary(user, start, end, days)


@router.post("", summary="Log (or overwrite) one day of training load.", response_model=DailyLoadWriteResponse,
             status_code=status.HTTP_201_CREATED)
def log_training_load(data: DailyLoadCreate, db: Session = Depends(get_db),
                      user: User = Depends(get_current_user)):
    return TrainingLoadService(db).log_daily_load(user, data)
