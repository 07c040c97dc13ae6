"""
Bearer-token authentication shared by every AssetVerse module
"""
from datetime import datetime, timedelta
from typing import Dict, Optional
from uuid import UUID

import bcrypt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from .config import settings
from .exceptions import Unauthorized

ALGORITHM = settings.algorithm

# Reads "Authorization: Bearer <token>"; auto_error off so we raise our own 401
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_prefix}/auth/login",
    auto_error=False,
)


def _to_bytes(s: str, max_len: int = 72) -> bytes:
    b = s.encode("utf-8")
    return b[:max_len] if len(b) > max_len else b


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Checks a password against its bcrypt hash (first 72 bytes)."""
    try:
        plain = _to_bytes(plain_password)
        h = hashed_password.encode("utf-8") if isinstance(hashed_password, str) else hashed_password
        return bcrypt.checkpw(plain, h)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hashes a password with bcrypt (first 72 bytes)."""
    plain = _to_bytes(password)
    return bcrypt.hashpw(plain, bcrypt.gensalt()).decode("utf-8")


def create_access_token(
    user_id: UUID | str,
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Creates a signed JWT for a user.

    Payload:
        {
            "sub": "user_id",
            "email": "user@company.com",
            "role": "hr" | "employee",
            "exp": 1234567890,
            "iat": 1234567890
        }
    """
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": expire,
        "iat": datetime.utcnow(),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[Dict]:
    """Returns the token payload, or None if the token is invalid or expired."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


def get_token_payload(token: Optional[str] = Depends(oauth2_scheme)) -> Dict:
    """
    FastAPI dependency returning the decoded token payload.

    Raises:
        Unauthorized: header missing, token malformed or expired
    """
    if not token:
        raise Unauthorized("Authorization header missing")

    payload = decode_token(token)
    if payload is None:
        raise Unauthorized("Invalid or expired token")

    if not payload.get("sub") and not payload.get("email"):
        raise Unauthorized("Token payload invalid")

    return payload
