"""
Event Menu API Endpoints
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission, get_event_or_404
from app.models.user import User
from app.models.event import Event
from app.models.event_menu_item import EventMenuItem
from app.models.menu_item import MenuItem
from app.models.package import Package
from app.schemas.event_menu import EventMenuItemCreate, EventMenuItemUpdate, EventMenuItemResponse, EventMenu
from app.services.pricing_service import price_menu_line

logger = logging.getLogger(__name__)

router = APIRouter()


def _line_response(line: EventMenuItem, event: Event) -> EventMenuItemResponse:
    response = EventMenuItemResponse.model_validate(line)
    response.total_price = price_menu_line(line.effective_price, line.quantity, event.number_of_guests or 0)
    return response


def _get_line_or_404(db: Session, event: Event, line_id: UUID) -> EventMenuItem:
    line = db.query(EventMenuItem).filter(EventMenuItem.id == line_id, EventMenuItem.event_id == event.id).first()
    if not line:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu line not found")
    return line


def _resolve_source(db: Session, data: EventMenuItemCreate, current_user: User):
    """The dish or package a new line points at, from the user's organization"""
    if data.menu_item_id is not None:
        source = db.query(MenuItem).filter(
            MenuItem.id == data.menu_item_id,
            MenuItem.organization_id == current_user.organization_id,
        ).first()
    else:
        source = db.query(Package).filter(
            Package.id == data.package_id,
            Package.organization_id == current_user.organization_id,
        ).first()
    if source is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Dish or package not found in organization")
    if not source.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{source.name} is not active")
    return source


@router.get("/{event_id}/menu-items", response_model=EventMenu)
async def get_event_menu(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
):
    """
    The dishes and packages chosen for an event, priced for its guest count
    """
    event = get_event_or_404(db, event_id, current_user)
    lines = db.query(EventMenuItem).filter(EventMenuItem.event_id == event.id).order_by(EventMenuItem.created_at).all()
    items = [_line_response(line, event) for line in lines]
    return EventMenu(
        items=items,
        guest_count=event.number_of_guests or 0,
        menu_total=sum(i.total_price for i in items),
    )


@router.post("/{event_id}/menu-items", response_model=EventMenuItemResponse, status_code=status.HTTP_201_CREATED)
async def add_event_menu_item(
    event_id: UUID,
    data: EventMenuItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    """
    Put a dish or package on the event menu. The event must meet the item's
    minimum guest count.
    """
    event = get_event_or_404(db, event_id, current_user)
    source = _resolve_source(db, data, current_user)
    guests = event.number_of_guests or 0
    if guests < (source.min_guests or 0):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{source.name} requires at least {source.min_guests} guests, event has {guests}",
        )

    line = EventMenuItem(event_id=event.id, **data.model_dump())
    db.add(line)
    db.commit()
    db.refresh(line)
    logger.info("%s added to the menu of event %s", source.name, event.id)
    return _line_response(line, event)


@router.patch("/{event_id}/menu-items/{line_id}", response_model=EventMenuItemResponse)
async def update_event_menu_item(
    event_id: UUID,
    line_id: UUID,
    data: EventMenuItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    """
    Change quantity, price override or notes. A null price override goes
    back to the catalog price.
    """
    event = get_event_or_404(db, event_id, current_user)
    line = _get_line_or_404(db, event, line_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field == "quantity":
            continue
        setattr(line, field, value)
    db.commit()
    db.refresh(line)
    return _line_response(line, event)


@router.delete("/{event_id}/menu-items/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_event_menu_item(
    event_id: UUID,
    line_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    event = get_event_or_404(db, event_id, current_user)
    line = _get_line_or_404(db, event, line_id)
    db.delete(line)
    db.commit()
