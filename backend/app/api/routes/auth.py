"""
Authentication routes for registration, login, token refresh and profile.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.common import ApiResponse
from app.schemas.user import (
    UserCreate, UserLogin, UserResponse, ProfileUpdate, RefreshTokenRequest,
    AuthData, AccessTokenData, ProfileData
)
from app.models.user import User
from app.core.security import verify_password, get_password_hash, TokenService, TokenError
from app.api.dependencies import get_current_user, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(user: User, tokens: TokenService) -> AuthData:
    return AuthData(
        user=UserResponse.model_validate(user),
        access_token=tokens.create_access_token(user.id, user.email),
        refresh_token=tokens.create_refresh_token(user.id, user.email),
    )


@router.post("/register", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db)
):
    """Register a new user and issue a token pair."""
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists with this email"
        )

    new_user = User(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id}")
    return ApiResponse(message="User registered successfully", data=_auth_payload(new_user, tokens))


@router.post("/login", response_model=ApiResponse[AuthData])
async def login(
    credentials: UserLogin,
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db)
):
    """Login and get an access/refresh token pair."""
    user = db.query(User).filter(User.email == credentials.email).first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    return ApiResponse(message="Login successful", data=_auth_payload(user, tokens))


@router.post("/refresh-token", response_model=ApiResponse[AccessTokenData])
async def refresh_token(
    body: RefreshTokenRequest,
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db)
):
    """Exchange a refresh token for a new access token."""
    try:
        payload = tokens.verify_refresh_token(body.refresh_token)
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    user = db.query(User).filter(User.id == int(payload["sub"])).first()
    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    access_token = tokens.create_access_token(user.id, user.email)
    return ApiResponse(message="Token refreshed", data=AccessTokenData(access_token=access_token))


@router.get("/profile", response_model=ApiResponse[ProfileData])
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get current user profile."""
    return ApiResponse(data=ProfileData(user=UserResponse.model_validate(current_user)))


@router.put("/profile", response_model=ApiResponse[ProfileData])
async def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update profile fields of the current user."""
    for field, value in profile.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)

    return ApiResponse(
        message="Profile updated successfully",
        data=ProfileData(user=UserResponse.model_validate(current_user))
    )
