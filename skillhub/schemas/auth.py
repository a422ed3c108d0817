from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from skillhub.models.user import UserRole
from datetime import datetime

class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6)
    email_id: EmailStr = Field(..., alias="emailId")
    role: UserRole = UserRole.USER

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: UserRole

class UserResponse(UserBrief):
    email: str
    created_at: Optional[datetime] = None

class LoginResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserBrief

class TokenData(BaseModel):
    username: Optional[str] = None
    role: Optional[str] = None
