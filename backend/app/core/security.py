"""
Security utilities for JWT authentication and password hashing.
"""
from datetime import datetime, timedelta
from typing import Optional
import hashlib
import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenError(Exception):
    """Raised when a token cannot be verified."""


class TokenExpiredError(TokenError):
    """Raised when a token signature is valid but the token has expired."""


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """
    Hash a password.
    Pre-hashes with SHA256 first to support passwords longer than 72 bytes.
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


class TokenService:
    """
    Issues and verifies access/refresh token pairs.

    Access and refresh tokens are signed with different secrets and carry a
    ``type`` claim, so neither can be presented in place of the other.
    """

    def __init__(
        self,
        secret_key: str,
        refresh_secret_key: str,
        algorithm: str = "HS256",
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=7),
    ):
        self.secret_key = secret_key
        self.refresh_secret_key = refresh_secret_key
        self.algorithm = algorithm
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        """Build a token service from application settings."""
        return cls(
            secret_key=settings.SECRET_KEY,
            refresh_secret_key=settings.REFRESH_SECRET_KEY,
            algorithm=settings.ALGORITHM,
            access_expires=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_expires=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def _encode(self, user_id: int, email: str, token_type: str, key: str,
                expires_delta: timedelta) -> str:
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "type": token_type,
            "exp": datetime.utcnow() + expires_delta,
        }
        return jwt.encode(to_encode, key, algorithm=self.algorithm)

    def _decode(self, token: str, token_type: str, key: str) -> dict:
        try:
            payload = jwt.decode(token, key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except JWTError as e:
            raise TokenError("Invalid token") from e
        if payload.get("type") != token_type or "sub" not in payload:
            raise TokenError("Invalid token")
        return payload

    def create_access_token(self, user_id: int, email: str,
                            expires_delta: Optional[timedelta] = None) -> str:
        """Create a short-lived JWT access token."""
        return self._encode(user_id, email, ACCESS_TOKEN_TYPE, self.secret_key,
                            expires_delta or self.access_expires)

    def create_refresh_token(self, user_id: int, email: str,
                             expires_delta: Optional[timedelta] = None) -> str:
        """Create a long-lived JWT refresh token."""
        return self._encode(user_id, email, REFRESH_TOKEN_TYPE, self.refresh_secret_key,
                            expires_delta or self.refresh_expires)

    def verify_access_token(self, token: str) -> dict:
        """Decode and verify an access token."""
        return self._decode(token, ACCESS_TOKEN_TYPE, self.secret_key)

    def verify_refresh_token(self, token: str) -> dict:
        """Decode and verify a refresh token."""
        return self._decode(token, REFRESH_TOKEN_TYPE, self.refresh_secret_key)
