"""
Event Types API Endpoints
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission
from app.models.user import User
from app.models.event_type import EventType
from app.schemas.event_type import EventTypeCreate, EventTypeUpdate, EventTypeResponse, EventTypeList

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_event_type_or_404(db: Session, event_type_id: UUID, current_user: User) -> EventType:
    event_type = db.query(EventType).filter(
        EventType.id == event_type_id,
        EventType.organization_id == current_user.organization_id,
    ).first()
    if not event_type:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event type not found"
        )
    return event_type


@router.get("", response_model=EventTypeList)
async def list_event_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
    active_only: bool = Query(True),
):
    """
    Event types of the organization, by name
    """
    query = db.query(EventType).filter(EventType.organization_id == current_user.organization_id)
    if active_only:
        query = query.filter(EventType.is_active == True)  # noqa: E712
    event_types = query.order_by(EventType.name).all()
    return EventTypeList(
        event_types=[EventTypeResponse.model_validate(t) for t in event_types],
        total=len(event_types),
    )


@router.post("", response_model=EventTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_event_type(
    data: EventTypeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.create")),
):
    event_type = EventType(organization_id=current_user.organization_id, **data.model_dump())
    db.add(event_type)
    db.commit()
    db.refresh(event_type)
    logger.info("Event type %s created", event_type.name)
    return EventTypeResponse.model_validate(event_type)


@router.get("/{event_type_id}", response_model=EventTypeResponse)
async def get_event_type(
    event_type_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
):
    return EventTypeResponse.model_validate(_get_event_type_or_404(db, event_type_id, current_user))


@router.patch("/{event_type_id}", response_model=EventTypeResponse)
async def update_event_type(
    event_type_id: UUID,
    data: EventTypeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    event_type = _get_event_type_or_404(db, event_type_id, current_user)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        setattr(event_type, field, value)
    db.commit()
    db.refresh(event_type)
    return EventTypeResponse.model_validate(event_type)


@router.delete("/{event_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_event_type(
    event_type_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.delete")),
):
    """
    Deactivate an event type; events that use it keep the reference
    """
    event_type = _get_event_type_or_404(db, event_type_id, current_user)
    event_type.is_active = False
    db.commit()
    logger.info("Event type %s deactivated by %s", event_type.name, current_user.email)
