"""
Common Dependencies and organization scoping helpers for FastAPI Routes
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Callable

from app.database import get_db
from app.services.auth_service import decode_access_token, get_user_by_id
from app.services.permission_service import get_granted_permissions
from app.models.user import User, UserRole
from app.models.client import Client
from app.models.event import Event

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user
    """
    payload = decode_access_token(credentials.credentials)

    if payload is None or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = get_user_by_id(db, payload["sub"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
        )

    return user


def require_permission(*keys: str) -> Callable:
    """
    Dependency factory to require specific permission(s).
    Admins always pass; other roles are checked against the organization's
    persisted matrix, or the static defaults before it has been seeded.

    Usage:
        current_user: User = Depends(require_permission("events.create"))
    """
    async def permission_checker(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> User:
        granted = set(get_granted_permissions(db, current_user))
        for key in keys:
            if key not in granted:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Permission required: {key}",
                )
        return current_user

    return permission_checker


def scoped_events(db: Session, current_user: User):
    """Events of the user's organization; client logins only see their own"""
    query = db.query(Event).filter(Event.organization_id == current_user.organization_id)
    if current_user.role == UserRole.CLIENT:
        query = query.filter(Event.client_id == current_user.client_id, Event.client_id.isnot(None))
    return query


def get_event_or_404(db: Session, event_id, current_user: User) -> Event:
    event = scoped_events(db, current_user).filter(Event.id == event_id).first()
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )
    return event


def ensure_client_in_org(db: Session, client_id, current_user: User) -> None:
    """400 unless `client_id` is empty or a client of the user's organization"""
    if client_id is None:
        return
    client = db.query(Client).filter(
        Client.id == client_id,
        Client.organization_id == current_user.organization_id,
    ).first()
    if not client:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Client not found in organization")


def ensure_event_in_org(db: Session, event_id, current_user: User) -> None:
    """400 unless `event_id` is empty or an event of the user's organization"""
    if event_id is None:
        return
    event = db.query(Event.id).filter(
        Event.id == event_id,
        Event.organization_id == current_user.organization_id,
    ).first()
    if not event:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Event not found in organization")
