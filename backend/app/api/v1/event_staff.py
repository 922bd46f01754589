"""
Event Staffing API Endpoints
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission, get_event_or_404
from app.models.user import User
from app.models.staff import Staff, StaffAssignment
from app.schemas.staff import StaffAssignmentCreate, StaffAssignmentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{event_id}/staff", response_model=List[StaffAssignmentResponse])
async def list_event_staff(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.view")),
):
    """
    Staff assigned to an event with their shift hours and labor cost
    """
    event = get_event_or_404(db, event_id, current_user)
    assignments = db.query(StaffAssignment).filter(StaffAssignment.event_id == event.id).order_by(
        StaffAssignment.start_time.is_(None), StaffAssignment.start_time, StaffAssignment.created_at,
    ).all()
    return [StaffAssignmentResponse.model_validate(a) for a in assignments]


@router.post("/{event_id}/staff", response_model=StaffAssignmentResponse, status_code=status.HTTP_201_CREATED)
async def assign_staff(
    event_id: UUID,
    data: StaffAssignmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.manage")),
):
    """
    Assign a staff member to an event. Without an hourly rate the member's
    own rate applies.
    """
    event = get_event_or_404(db, event_id, current_user)
    member = db.query(Staff).filter(
        Staff.id == data.staff_id,
        Staff.organization_id == current_user.organization_id,
    ).first()
    if not member:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Staff member not found in organization")
    if data.start_time and data.end_time and data.end_time <= data.start_time:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end_time must be after start_time")
    already = db.query(StaffAssignment.id).filter(
        StaffAssignment.event_id == event.id,
        StaffAssignment.staff_id == member.id,
    ).first()
    if already:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{member.name} is already assigned to this event")

    assignment = StaffAssignment(event_id=event.id, **data.model_dump())
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    logger.info("%s assigned to event %s as %s", member.name, event.id, assignment.role_for_event)
    return StaffAssignmentResponse.model_validate(assignment)


@router.delete("/{event_id}/staff/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unassign_staff(
    event_id: UUID,
    assignment_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.manage")),
):
    event = get_event_or_404(db, event_id, current_user)
    assignment = db.query(StaffAssignment).filter(
        StaffAssignment.id == assignment_id,
        StaffAssignment.event_id == event.id,
    ).first()
    if not assignment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Staff assignment not found")
    db.delete(assignment)
    db.commit()
