"""
Password hashing and JWT helpers
"""
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash"""
    return pwd_context.verify(plain_password, hashed_password)


def _encode_token(data: Dict[str, Any], token_type: str, lifetime: timedelta) -> str:
    to_encode = dict(data)
    to_encode.update({"exp": datetime.utcnow() + lifetime, "type": token_type})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a short-lived access token

    Args:
        data: Claims to encode
        expires_delta: Lifetime override, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode_token(data, "access", lifetime)


def create_refresh_token(data: Dict[str, Any]) -> str:
    """Create a refresh token valid for REFRESH_TOKEN_EXPIRE_MINUTES"""
    return _encode_token(data, "refresh", timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES))


def decode_token(token: str, expected_type: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT

    Returns:
        Payload, or None if the signature, expiry or token type is wrong
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if expected_type is not None and payload.get("type") != expected_type:
        return None
    return payload
