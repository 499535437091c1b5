"""Payment settlement rule.

Pure function shared by the payment service and the database layer, which
evaluates it on the invoice row it has just locked.
"""

from dataclasses import dataclass
from decimal import Decimal

from farmledger.domain.entities import InvoiceStatus
from farmledger.domain.errors import (
    BusinessRuleError,
    amount_exceeds_due,
    invoice_not_payable,
)
from farmledger.domain.invoice_status import accepts_payments


@dataclass(frozen=True)
class Settlement:
    """Invoice state after a payment is applied."""

    amount_paid: Decimal
    amount_due: Decimal
    status: InvoiceStatus


def settle(
    invoice_number: str,
    status: InvoiceStatus,
    total: Decimal,
    amount_paid: Decimal,
    amount_due: Decimal,
    amount: Decimal,
) -> Settlement:
    """Compute the invoice state after applying ``amount``.

    Raises:
        BusinessRuleError: If the invoice is cancelled or disputed, or if the
            amount exceeds what is still due
    """
    if not accepts_payments(status):
        raise BusinessRuleError(invoice_not_payable(invoice_number, status.value))
    if amount > amount_due:
        raise BusinessRuleError(amount_exceeds_due(amount, amount_due))

    new_paid = amount_paid + amount
    new_due = total - new_paid
    new_status = InvoiceStatus.PAYEE if new_due <= 0 else InvoiceStatus.PARTIELLEMENT_PAYEE
    return Settlement(amount_paid=new_paid, amount_due=new_due, status=new_status)
