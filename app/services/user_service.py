"""
User service.

Business logic for user management and authentication.
"""

from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from loguru import logger
from sqlmodel import Session

from app.core.config import settings
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.schemas.user import Token, UserCreate, UserLogin, UserUpdate


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session):
        self.repository = UserRepository(session)

    def register(self, user_data: UserCreate) -> User:
        """
        Register a new athlete.

        Raises:
            HTTPException 400: If the email already exists
        """
        if self.repository.exists_by_email(user_data.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already registered")

        user = User(
            email=user_data.email,
            hashed_password=get_password_hash(user_data.password),
            full_name=user_data.full_name,
            resting_hr=user_data.resting_hr,
            max_hr=user_data.max_hr,
            lthr=user_data.lthr,
            ftp=user_data.ftp,
        )
        user = self.repository.create(user)
        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, login_data: UserLogin) -> Token:
        """
        Check credentials and issue a bearer token.

        Raises:
            HTTPException 401: If credentials are invalid
            HTTPException 403: If the account is inactive
        """
        user = self.repository.get_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.hashed_password):
            logger.warning("Rejected login attempt")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password",
                                headers={"WWW-Authenticate": "Bearer"})

        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")

        access_token = create_access_token(
            data={"sub": user.email},
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        return Token(access_token=access_token, token_type="bearer")

    def update_profile(self, user: User, data: UserUpdate) -> User:
        """Apply the fields present in ``data``."""
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(user, key, value)
        user.updated_at = datetime.utcnow()
        return self.repository.update(user)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.repository.get_by_email(email)

    def get_active_user(self, email: str) -> Optional[User]:
        return self.repository.get_active_by_email(email)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.repository.get_by_id(user_id)
