import logging
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from skillhub.core.config import settings
from skillhub.core.limiter import limiter
from skillhub.core.schemas import MessageResponse
from skillhub.database import get_db
from skillhub.models.user import User
from skillhub.routers.auth_deps import get_current_user
from skillhub.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserBrief, UserResponse
from skillhub.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    auth_service.register_user(
        db,
        username=data.username,
        password=data.password,
        email=data.email_id,
        role=data.role,
    )
    return {"message": "User registered successfully"}

@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, login_data.username, login_data.password)
    token = auth_service.issue_token(user)
    logger.info(f"User {user.username} logged in")
    return {
        "message": "Login successful",
        "token": token,
        "user": UserBrief.model_validate(user),
    }

@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
