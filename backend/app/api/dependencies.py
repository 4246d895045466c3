"""
Shared FastAPI dependencies: token service and authenticated user.
"""
from functools import lru_cache
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.security import TokenService, TokenError, TokenExpiredError
from app.db.session import get_db
from app.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_token_service() -> TokenService:
    """Token service configured from application settings."""
    return TokenService.from_settings(settings)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer access token to an active user."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("No token provided")

    try:
        payload = tokens.verify_access_token(credentials.credentials)
    except TokenExpiredError:
        raise _unauthorized("Token expired")
    except TokenError:
        raise _unauthorized("Invalid token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise _unauthorized("User not found")

    return user
