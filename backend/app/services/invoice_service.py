"""
Invoice payment bookkeeping
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.models.invoice import Invoice, InvoicePayment, InvoiceStatus
from app.services.errors import PaymentError

logger = logging.getLogger(__name__)


def apply_payment(
    db: Session,
    invoice: Invoice,
    amount: float,
    payment_method: str,
    payment_date: date,
    reference_number: Optional[str] = None,
    notes: Optional[str] = None,
) -> InvoicePayment:
    """
    Record a payment against an invoice.

    The balance due is lowered by `amount` and floored at zero; an invoice
    whose balance reaches zero is marked paid on the payment date.
    """
    if amount <= 0:
        raise PaymentError("Payment amount must be positive")
    if invoice.status == InvoiceStatus.CANCELLED:
        raise PaymentError("Cannot record a payment on a cancelled invoice")

    payment = InvoicePayment(
        invoice_id=invoice.id,
        amount=amount,
        payment_method=payment_method,
        payment_date=payment_date,
        reference_number=reference_number,
        notes=notes,
    )
    db.add(payment)

    balance = invoice.balance_due if invoice.balance_due is not None else invoice.invoice_amount
    invoice.balance_due = max(0.0, balance - amount)
    if invoice.balance_due <= 0:
        invoice.status = InvoiceStatus.PAID
        invoice.paid_date = payment_date
        logger.info("Invoice %s paid in full", invoice.invoice_number)

    db.commit()
    db.refresh(payment)
    return payment


def change_invoice_amount(invoice: Invoice, new_amount: float) -> None:
    """
    Set a new invoice amount and shift the balance due by the difference,
    floored at zero. A paid invoice that owes money again goes back to sent.
    """
    old_amount = invoice.invoice_amount or 0.0
    balance = invoice.balance_due if invoice.balance_due is not None else old_amount
    invoice.invoice_amount = new_amount
    invoice.balance_due = max(0.0, balance + new_amount - old_amount)
    if invoice.status == InvoiceStatus.PAID and invoice.balance_due > 0:
        invoice.status = InvoiceStatus.SENT
        invoice.paid_date = None
        logger.info("Invoice %s reopened after amount change", invoice.invoice_number)
