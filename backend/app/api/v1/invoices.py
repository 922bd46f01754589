"""
Invoices API Endpoints
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission, ensure_client_in_org, ensure_event_in_org
from app.models.user import User, UserRole
from app.models.invoice import Invoice, InvoicePayment, InvoiceStatus
from app.schemas.invoice import (
    InvoiceCreate, InvoiceUpdate, InvoiceResponse, InvoiceList, PaymentCreate, PaymentResponse,
)
from app.services.invoice_service import apply_payment, change_invoice_amount

logger = logging.getLogger(__name__)

router = APIRouter()


def _scoped_invoices(db: Session, current_user: User):
    query = db.query(Invoice).filter(Invoice.organization_id == current_user.organization_id)
    if current_user.role == UserRole.CLIENT:
        query = query.filter(Invoice.client_id == current_user.client_id, Invoice.client_id.isnot(None))
    return query


def _get_invoice_or_404(db: Session, invoice_id: UUID, current_user: User) -> Invoice:
    invoice = _scoped_invoices(db, current_user).filter(Invoice.id == invoice_id).first()
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invoice not found"
        )
    return invoice


@router.get("", response_model=InvoiceList)
async def list_invoices(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.view")),
    status_filter: Optional[str] = Query(None, alias="status"),
    client_id: Optional[UUID] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    query = _scoped_invoices(db, current_user)
    if status_filter:
        try:
            query = query.filter(Invoice.status == InvoiceStatus(status_filter))
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown status: {status_filter}")
    if client_id:
        query = query.filter(Invoice.client_id == client_id)

    total = query.count()
    invoices = query.order_by(Invoice.created_at.desc()).offset(skip).limit(limit).all()
    return InvoiceList(invoices=[InvoiceResponse.model_validate(i) for i in invoices], total=total)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    data: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.create")),
):
    """
    Issue an invoice; the balance due starts at the invoice amount
    """
    ensure_client_in_org(db, data.client_id, current_user)
    ensure_event_in_org(db, data.event_id, current_user)

    existing = db.query(Invoice).filter(
        Invoice.organization_id == current_user.organization_id,
        Invoice.invoice_number == data.invoice_number,
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Invoice number {data.invoice_number} already exists"
        )

    fields = data.model_dump(exclude={"status"})
    invoice = Invoice(
        organization_id=current_user.organization_id,
        status=InvoiceStatus(data.status),
        balance_due=data.invoice_amount,
        **fields,
    )
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    logger.info("Invoice %s created for %.2f", invoice.invoice_number, invoice.invoice_amount)
    return InvoiceResponse.model_validate(invoice)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.view")),
):
    return InvoiceResponse.model_validate(_get_invoice_or_404(db, invoice_id, current_user))


@router.patch("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: UUID,
    data: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.edit")),
):
    invoice = _get_invoice_or_404(db, invoice_id, current_user)
    updates = data.model_dump(exclude_unset=True)
    new_amount = updates.pop("invoice_amount", None)
    if new_amount is not None and "balance_due" not in updates:
        change_invoice_amount(invoice, new_amount)
    elif new_amount is not None:
        invoice.invoice_amount = new_amount
    if updates.get("status") is not None:
        updates["status"] = InvoiceStatus(updates["status"])
    for field, value in updates.items():
        if value is None and field in ("subtotal", "tax", "status"):
            continue
        setattr(invoice, field, value)
    db.commit()
    db.refresh(invoice)
    return InvoiceResponse.model_validate(invoice)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.edit")),
):
    invoice = _get_invoice_or_404(db, invoice_id, current_user)
    db.delete(invoice)
    db.commit()
    logger.info("Invoice %s deleted by %s", invoice.invoice_number, current_user.email)


@router.post("/{invoice_id}/payments", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def record_payment(
    invoice_id: UUID,
    data: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.edit")),
):
    """
    Record a payment and lower the invoice's balance due
    """
    invoice = _get_invoice_or_404(db, invoice_id, current_user)
    payment = apply_payment(db, invoice, **data.model_dump())
    return PaymentResponse.model_validate(payment)


@router.get("/{invoice_id}/payments", response_model=List[PaymentResponse])
async def list_payments(
    invoice_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("billing.view")),
):
    invoice = _get_invoice_or_404(db, invoice_id, current_user)
    payments = db.query(InvoicePayment).filter(
        InvoicePayment.invoice_id == invoice.id,
    ).order_by(InvoicePayment.payment_date.desc(), InvoicePayment.created_at.desc()).all()
    return [PaymentResponse.model_validate(p) for p in payments]
