"""
Invoice and Invoice Payment Models
"""
from sqlalchemy import Column, String, Float, Date, DateTime, ForeignKey, Text, UniqueConstraint, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from app.database import Base


class InvoiceStatus(str, enum.Enum):
    """Invoice status enumeration"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    invoice_number = Column(String, nullable=False)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    subtotal = Column(Float, nullable=False, default=0.0)
    tax = Column(Float, nullable=False, default=0.0)
    invoice_amount = Column(Float, nullable=False, default=0.0)
    deposit_amount = Column(Float, nullable=True)
    balance_due = Column(Float, nullable=True)
    status = Column(SQLEnum(InvoiceStatus, values_callable=lambda obj: [e.value for e in obj]), nullable=False, default=InvoiceStatus.DRAFT)
    issued_at = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    paid_date = Column(Date, nullable=True)
    payment_terms = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    event = relationship("Event")
    payments = relationship("InvoicePayment", back_populates="invoice", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("organization_id", "invoice_number", name="uq_org_invoice_number"),
    )

    def __repr__(self):
        return f"<Invoice {self.invoice_number} ({self.status})>"


class InvoicePayment(Base):
    __tablename__ = "invoice_payments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    invoice_id = Column(Uuid(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    payment_method = Column(String, nullable=False)
    payment_date = Column(Date, nullable=False)
    reference_number = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    invoice = relationship("Invoice", back_populates="payments")
