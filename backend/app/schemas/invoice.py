"""
Invoice Schemas
"""
from typing import Optional, List, Literal
from datetime import date, datetime
from pydantic import BaseModel, Field
from uuid import UUID

from app.models.invoice import InvoiceStatus

InvoiceStatusName = Literal["draft", "sent", "paid", "overdue", "cancelled"]


class InvoiceBase(BaseModel):
    invoice_number: str = Field(..., min_length=1)
    event_id: Optional[UUID] = None
    client_id: Optional[UUID] = None
    subtotal: float = Field(0.0, ge=0)
    tax: float = Field(0.0, ge=0)
    invoice_amount: float = Field(..., ge=0)
    deposit_amount: Optional[float] = Field(None, ge=0)
    status: InvoiceStatusName = "draft"
    issued_at: Optional[date] = None
    due_date: Optional[date] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None


class InvoiceCreate(InvoiceBase):
    pass


class InvoiceUpdate(BaseModel):
    subtotal: Optional[float] = Field(None, ge=0)
    tax: Optional[float] = Field(None, ge=0)
    invoice_amount: Optional[float] = Field(None, ge=0)
    deposit_amount: Optional[float] = Field(None, ge=0)
    balance_due: Optional[float] = Field(None, ge=0)
    status: Optional[InvoiceStatusName] = None
    issued_at: Optional[date] = None
    due_date: Optional[date] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None


class InvoiceResponse(InvoiceBase):
    id: UUID
    status: InvoiceStatus
    organization_id: UUID
    balance_due: Optional[float] = None
    paid_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InvoiceList(BaseModel):
    invoices: List[InvoiceResponse]
    total: int


class PaymentCreate(BaseModel):
    amount: float = Field(..., gt=0)
    payment_method: str = Field(..., min_length=1)
    payment_date: date
    reference_number: Optional[str] = None
    notes: Optional[str] = None


class PaymentResponse(PaymentCreate):
    id: UUID
    invoice_id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
