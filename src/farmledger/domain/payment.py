"""Payment domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from farmledger.config.logging import get_logger
from farmledger.database.base import Database
from farmledger.domain.amounts import positive_amount
from farmledger.domain.entities import Payment, PaymentMethod
from farmledger.domain.errors import NotFoundError, invoice_not_found

logger = get_logger(__name__)


def validate_payment_amount(amount) -> Decimal:
    """Return the amount as Decimal if it is positive with at most two decimals.

    Raises:
        ValidationError: Otherwise
    """
    return positive_amount(amount, "payment amount")


class PaymentService:
    """Service for applying payments to invoices."""

    def __init__(self, db: Database):
        """Initialize payment service.

        Args:
            db: Database instance
        """
        self.db = db

    def apply_payment(
        self,
        invoice_id: int,
        amount: Decimal,
        date: date,
        method: PaymentMethod,
        reference: Optional[str] = None,
        bank_name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Payment:
        """Apply a payment to an invoice.

        The remaining due amount is re-read under a row lock in the same
        transaction that inserts the payment, so concurrent payments can
        never push the invoice past its total.

        Args:
            invoice_id: Invoice ID
            amount: Amount paid, positive, at most two decimals
            date: Payment date
            method: Payment method
            reference: Optional cheque or transfer reference
            bank_name: Optional bank name
            notes: Optional notes

        Returns:
            The recorded payment

        Raises:
            ValidationError: If the amount is not positive or has sub-cent precision
            NotFoundError: If the invoice doesn't exist
            BusinessRuleError: If the invoice is cancelled or disputed, or
                the amount exceeds the remaining due
        """
        value = validate_payment_amount(amount)
        payment = self.db.apply_payment(
            invoice_id=invoice_id,
            amount=value,
            date=date,
            method=PaymentMethod(method),
            reference=reference,
            bank_name=bank_name,
            notes=notes,
        )
        logger.info(
            "payment_applied",
            invoice_id=invoice_id,
            payment_id=payment.id,
            amount=str(value),
            method=payment.method.value,
        )
        return payment

    def list_payments(self, invoice_id: int) -> list[Payment]:
        """List the payments of an invoice, newest first.

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        if self.db.get_invoice(invoice_id) is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return self.db.list_payments(invoice_id)
