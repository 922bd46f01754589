"""
Events API Endpoints
"""
import logging
from datetime import date
from typing import Iterable, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import require_permission, scoped_events, get_event_or_404, ensure_client_in_org
from app.models.user import User
from app.models.event import Event, EventGuest, EventStatus, GuestType
from app.models.event_type import EventType
from app.schemas.event import EventCreate, EventUpdate, EventResponse, EventList, EventGuestIn
from app.schemas.quote import QuoteResponse
from app.services.pricing_service import calculate_quote, resolve_upcharges, QuoteValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_event_type(db: Session, event_type_id, current_user: User) -> None:
    if event_type_id is None:
        return
    event_type = db.query(EventType).filter(
        EventType.id == event_type_id,
        EventType.organization_id == current_user.organization_id,
    ).first()
    if not event_type:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Event type not found in organization")


def _check_selections(upcharges: Optional[Iterable[str]], guests: Optional[List[EventGuestIn]]) -> None:
    """Every event-level upcharge and guest protein must be a catalog option"""
    try:
        if upcharges is not None:
            resolve_upcharges(upcharges)
        for guest in guests or []:
            resolve_upcharges(guest.proteins)
    except QuoteValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _replace_guests(event: Event, guests: List[EventGuestIn]) -> None:
    """Swap the event's guest list for `guests` and re-derive head counts."""
    event.guests.clear()
    for guest in guests:
        event.guests.append(EventGuest(
            name=guest.name,
            guest_type=GuestType(guest.guest_type),
            proteins=list(guest.proteins),
            special_requests=guest.special_requests,
        ))
    if guests:
        event.adult_count = sum(1 for g in guests if g.guest_type == "adult")
        event.child_count = sum(1 for g in guests if g.guest_type == "child")


@router.get("", response_model=EventList)
async def list_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    client_id: Optional[UUID] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """
    List events, newest event date first
    """
    query = scoped_events(db, current_user)
    if status_filter:
        try:
            query = query.filter(Event.status == EventStatus(status_filter))
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown status: {status_filter}")
    if start_date:
        query = query.filter(Event.event_date >= start_date)
    if end_date:
        query = query.filter(Event.event_date <= end_date)
    if client_id:
        query = query.filter(Event.client_id == client_id)

    total = query.count()
    events = query.order_by(Event.event_date.desc(), Event.created_at.desc()).offset(skip).limit(limit).all()
    return EventList(events=[EventResponse.model_validate(e) for e in events], total=total)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.create")),
):
    """
    Book an event together with its guest list
    """
    ensure_client_in_org(db, data.client_id, current_user)
    _check_event_type(db, data.event_type_id, current_user)
    _check_selections(data.selected_upcharges, data.guests)

    fields = data.model_dump(exclude={"guests", "status"})
    event = Event(
        organization_id=current_user.organization_id,
        created_by=current_user.id,
        status=EventStatus(data.status),
        **fields,
    )
    _replace_guests(event, data.guests)
    event.number_of_guests = event.adult_count + event.child_count

    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Event %s booked for %s (%d guests)", event.id, event.client_name, event.number_of_guests)

    return EventResponse.model_validate(event)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
):
    """
    Get an event with its guests
    """
    return EventResponse.model_validate(get_event_or_404(db, event_id, current_user))


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    data: EventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    """
    Update an event. A supplied guest list replaces the stored guests.
    """
    event = get_event_or_404(db, event_id, current_user)
    updates = data.model_dump(exclude_unset=True)

    if "client_id" in updates:
        ensure_client_in_org(db, updates["client_id"], current_user)
    if "event_type_id" in updates:
        _check_event_type(db, updates["event_type_id"], current_user)
    _check_selections(updates.get("selected_upcharges"), data.guests)

    guests = updates.pop("guests", None)
    if updates.get("status") is not None:
        updates["status"] = EventStatus(updates["status"])
    for field, value in updates.items():
        if value is None and field in ("title", "client_name", "adult_count", "child_count",
                                       "gratuity_percent", "selected_upcharges", "status"):
            continue
        setattr(event, field, value)

    if guests is not None:
        _replace_guests(event, data.guests)
    event.number_of_guests = event.adult_count + event.child_count

    db.commit()
    db.refresh(event)
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.delete")),
):
    """
    Delete an event and its guests
    """
    event = get_event_or_404(db, event_id, current_user)
    db.delete(event)
    db.commit()
    logger.info("Event %s deleted by %s", event_id, current_user.email)


@router.get("/{event_id}/quote", response_model=QuoteResponse)
async def quote_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
):
    """
    Price a stored event at the house plate prices
    """
    event = get_event_or_404(db, event_id, current_user)
    try:
        breakdown = calculate_quote(
            adult_count=event.adult_count,
            child_count=event.child_count,
            upcharges=resolve_upcharges(event.selected_upcharges or []),
            adult_base_price=settings.ADULT_PLATE_PRICE,
            child_base_price=settings.CHILD_PLATE_PRICE,
            gratuity_percent=event.gratuity_percent,
        )
    except QuoteValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return QuoteResponse(gratuity_percent=event.gratuity_percent, **breakdown.__dict__)
