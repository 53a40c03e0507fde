"""
Request dependencies shared by the v1 routers.

Every data route is scoped to the athlete named by the bearer token.
"""

from fastapi import Depends, HTTPException, status
from loguru import logger
from sqlmodel import Session

from app.core.security import decode_access_token, oauth2_scheme
from app.db.session import get_db
from app.models.user import User
from app.services.user_service import UserService


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """Athlete owning the bearer token.

    Raises:
        HTTPException 401: If the token is invalid or expired, or the
            account is missing or deactivated
    """
    email = decode_access_token(token)
    if not email:
        raise _unauthorized("Invalid or expired token")

    user = UserService(db).get_active_user(email)
    if user is None:
        logger.warning("Token presented for an unknown or inactive account")
        raise _unauthorized("User not found or inactive")
    return user
