"""
Authentication dependencies for FastAPI endpoints.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from skillhub.core.exceptions import AccessDeniedError, AuthenticationError
from skillhub.database import get_db
from skillhub.models.user import User
from skillhub.schemas.auth import TokenData
from skillhub.services import auth as auth_service

logger = logging.getLogger(__name__)

# auto_error disabled so a missing header gets the API's own error body
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Extracts and validates the current user from the bearer token.
    Missing token -> 401; invalid, expired or wrong-type token -> 403.
    """
    if not token:
        raise AuthenticationError("No Token Provided")

    payload = auth_service.decode_access_token(token)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise AccessDeniedError("Invalid or Expired Token")

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise AccessDeniedError("Invalid or Expired Token")

    if payload.get("type") != "access":
        logger.warning("Authentication failed: Invalid token type")
        raise AccessDeniedError("Invalid or Expired Token")

    username = payload.get("sub")
    if username is None:
        logger.warning("Authentication failed: Missing subject in token")
        raise AccessDeniedError("Invalid or Expired Token")

    token_data = TokenData(username=username, role=payload.get("role"))
    user = db.query(User).filter(User.username == token_data.username).first()
    if user is None:
        logger.warning(f"Authentication failed: User {username} not found in database")
        raise AuthenticationError("User not found")
    return user
