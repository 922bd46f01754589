"""
Clients API Endpoints
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission
from app.models.user import User, UserRole
from app.models.client import Client
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientList,
)

router = APIRouter(prefix="/clients")


def _get_client_or_404(db: Session, client_id: UUID, current_user: User) -> Client:
    client = db.query(Client).filter(
        Client.id == client_id,
        Client.organization_id == current_user.organization_id
    ).first()

    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found"
        )
    return client


@router.get("", response_model=ClientList)
async def list_clients(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.view")),
    search: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """
    List clients for the organization.
    Client logins only see their own client record.
    """
    query = db.query(Client).filter(
        Client.organization_id == current_user.organization_id
    )

    if current_user.role == UserRole.CLIENT:
        query = query.filter(Client.id == current_user.client_id)
    if search:
        query = query.filter(Client.name.ilike(f"%{search}%"))

    total = query.count()
    clients = query.order_by(Client.name).offset(skip).limit(limit).all()

    return ClientList(clients=[ClientResponse.model_validate(c) for c in clients], total=total)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.create"))
):
    """
    Create a new client
    """
    client = Client(
        organization_id=current_user.organization_id,
        **client_data.model_dump()
    )

    db.add(client)
    db.commit()
    db.refresh(client)

    return ClientResponse.model_validate(client)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.view")),
):
    """
    Get a specific client
    """
    if current_user.role == UserRole.CLIENT and current_user.client_id != client_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return ClientResponse.model_validate(_get_client_or_404(db, client_id, current_user))


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    client_data: ClientUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.edit"))
):
    """
    Update a client
    """
    client = _get_client_or_404(db, client_id, current_user)

    for field, value in client_data.model_dump(exclude_unset=True).items():
        setattr(client, field, value)

    db.commit()
    db.refresh(client)
    return ClientResponse.model_validate(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.delete"))
):
    """
    Delete a client
    """
    client = _get_client_or_404(db, client_id, current_user)
    db.delete(client)
    db.commit()
