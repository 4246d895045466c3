"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime
from app.core.config import settings


def normalize_email(value):
    """Lower-case and trim an email so lookups are case-insensitive."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


class UserSummary(BaseModel):
    """Profile summary embedded in trips, expenses and polls."""
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """Schema for full user profile response."""
    bio: Optional[str] = None
    is_active: bool = True
    created_at: datetime


class UserCreate(BaseModel):
    """Schema for user registration."""
    email: EmailStr
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class ProfileUpdate(BaseModel):
    """Schema for profile update."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class AuthData(BaseModel):
    """Payload returned by register and login."""
    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AccessTokenData(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ProfileData(BaseModel):
    user: UserResponse
