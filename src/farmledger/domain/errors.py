"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Malformed input: non-positive amounts, empty line list, bad ranges."""


class NotFoundError(DomainError):
    """Requested farm, invoice, account or employee does not exist."""


class BusinessRuleError(DomainError):
    """Input is well formed but violates a ledger rule."""


class ConcurrencyConflictError(DomainError):
    """Uniqueness or locking conflict; the operation may be retried."""


def farm_not_found(farm_id: int) -> str:
    """Return message for missing farm."""
    return f"Farm {farm_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing bank account."""
    return f"Bank account {account_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def employee_not_found(employee_id: int) -> str:
    """Return message for missing employee."""
    return f"Employee {employee_id} not found"


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def supplier_not_found(supplier_id: int) -> str:
    """Return message for missing supplier."""
    return f"Supplier {supplier_id} not found"


def amount_exceeds_due(amount: Decimal, amount_due: Decimal) -> str:
    """Return message when a payment would overshoot the invoice."""
    return f"Payment amount exceeds remaining due: {amount} > {amount_due} MAD"


def invoice_not_payable(invoice_number: str, status: str) -> str:
    """Return message when the invoice status does not accept payments."""
    return f"Invoice {invoice_number} cannot receive payments while {status}"


def illegal_transition(invoice_number: str, current: str, new: str) -> str:
    """Return message for a status change refused by the transition table."""
    return f"Invoice {invoice_number} cannot move from {current} to {new}"


def duplicate_invoice_number(invoice_number: str, farm_id: int) -> str:
    """Return message when a generated number already exists for the farm."""
    return f"Invoice number '{invoice_number}' already allocated for farm {farm_id}"


def duplicate_payslip(employee_id: int, month: int, year: int) -> str:
    """Return message for a concurrent payslip insert on the same period."""
    return f"Payslip for employee {employee_id} ({month:02d}/{year}) was written concurrently"
