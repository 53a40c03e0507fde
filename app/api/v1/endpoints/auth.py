"""
Authentication endpoints.

Registration, login (OAuth2 form or JSON) and the current profile.
"""

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import Token, UserCreate, UserLogin, UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter()


@router.post("/register", summary="Register a new athlete.", response_model=UserResponse,
             status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new athlete.

    Raises:
        HTTPException 400: If email already registered
    """
    return UserService(db).register(user_data)


@router.post("/login", summary="Log in via OAuth2 form (for Swagger UI).", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Use the email as username."""
    login_data = UserLogin(email=form_data.username, password=form_data.password)
    return UserService(db).authenticate(login_data)


@router.post("/token", summary="Log in via JSON body.", response_model=Token)
def login_json(login_data: UserLogin, db: Session = Depends(get_db)):
    return UserService(db).authenticate(login_data)


@router.get("/me", summary="Current athlete profile.", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", summary="Update the athlete profile.", response_model=UserResponse)
def update_me(data: UserUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return UserService(db).update_profile(user, data)
