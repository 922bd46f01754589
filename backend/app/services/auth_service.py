"""
Authentication Service
"""
import logging
import uuid
from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from app.models.user import User, UserRole
from app.utils.security import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)

logger = logging.getLogger(__name__)


def parse_uuid(value) -> Optional[uuid.UUID]:
    """Coerce a str/UUID into a UUID, None if malformed"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def get_user_by_id(db: Session, user_id) -> Optional[User]:
    parsed = parse_uuid(user_id)
    if parsed is None:
        return None
    return db.query(User).filter(User.id == parsed).first()


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """
    Authenticate a user with email and password

    Returns:
        User object if authentication successful, None otherwise
    """
    user = db.query(User).filter(User.email == email).first()

    if not user or not user.is_active:
        return None

    if not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        return None

    user.last_login = datetime.utcnow()
    db.commit()

    return user


def _access_claims(user: User) -> dict:
    return {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role_value,
        "org_id": str(user.organization_id),
        "client_id": str(user.client_id) if user.client_id else None,
    }


def create_user_tokens(user: User) -> Tuple[str, str]:
    """
    Create access and refresh tokens for a user

    Returns:
        Tuple of (access_token, refresh_token)
    """
    access_token = create_access_token(_access_claims(user))
    refresh_token = create_refresh_token({"sub": str(user.id)})
    return access_token, refresh_token


def decode_access_token(token: str) -> Optional[dict]:
    return decode_token(token, expected_type="access")


def refresh_access_token(db: Session, refresh_token: str) -> Optional[str]:
    """
    Issue a new access token from a refresh token

    Returns:
        New access token or None if the refresh token or its user is invalid
    """
    payload = decode_token(refresh_token, expected_type="refresh")
    if payload is None:
        return None

    user = get_user_by_id(db, payload.get("sub"))
    if not user or not user.is_active:
        return None

    return create_access_token(_access_claims(user))


def create_user(
    db: Session,
    email: str,
    password: str,
    full_name: str,
    organization_id,
    role: str = UserRole.CLIENT.value,
    client_id=None,
) -> User:
    """
    Create a new user

    Args:
        db: Database session
        email: User email
        password: Plain text password
        full_name: User's full name
        organization_id: Organization ID
        role: One of admin, employee, client (default: client)
        client_id: Client the user belongs to, for client logins

    Returns:
        Created user object
    """
    user = User(
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        organization_id=parse_uuid(organization_id),
        role=UserRole(role),
        client_id=parse_uuid(client_id) if client_id else None,
    )

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created %s user %s", user.role_value, email)

    return user
