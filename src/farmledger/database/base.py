"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Iterable
from datetime import date
from decimal import Decimal

from farmledger.domain.entities import (
    Farm,
    Client,
    Supplier,
    BankAccount,
    Transaction,
    TransactionType,
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    InvoiceType,
    Payment,
    PaymentMethod,
    Employee,
    Attendance,
    AttendanceStatus,
    Payslip,
    PayslipFigures,
)


class Database(ABC):
    """Abstract database interface for farmledger.

    Every mutating operation is a single unit of work: it either commits as
    a whole or leaves no trace.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Farm / party operations (external collaborators)
    @abstractmethod
    def create_farm(self, name: str, tenant_id: str) -> int:
        """Create a farm. Returns farm ID."""
        pass

    @abstractmethod
    def get_farm(self, farm_id: int) -> Optional[Farm]:
        """Get farm by ID."""
        pass

    @abstractmethod
    def list_farms(self, tenant_id: Optional[str] = None) -> list[Farm]:
        """List farms, optionally for one tenant."""
        pass

    @abstractmethod
    def create_client(self, farm_id: int, name: str, ice: Optional[str] = None) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def create_supplier(self, farm_id: int, name: str, ice: Optional[str] = None) -> int:
        """Create a supplier. Returns supplier ID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        """Get supplier by ID."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self, farm_id: int, name: str, bank_name: Optional[str] = None, rib: Optional[str] = None
    ) -> int:
        """Create a bank account with a zero balance. Returns account ID."""
        pass

    @abstractmethod
    def get_bank_account(self, account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def list_bank_accounts(self, farm_id: Optional[int] = None) -> list[BankAccount]:
        """List bank accounts, optionally filtered by farm."""
        pass

    # Ledger operations
    @abstractmethod
    def record_transaction(
        self,
        account_id: int,
        type: TransactionType,
        category: str,
        amount: Decimal,
        date: date,
        description: str,
        invoice_id: Optional[int] = None,
        reference: Optional[str] = None,
    ) -> Transaction:
        """Insert a transaction and apply its signed amount to the account balance.

        Raises:
            NotFoundError: If the account does not exist
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_ids: Optional[Iterable[int]] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters."""
        pass

    @abstractmethod
    def count_transactions(self, account_id: int) -> int:
        """Count the transactions of an account."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(self, draft: InvoiceDraft) -> Invoice:
        """Allocate the next number for (farm, year) and persist invoice and lines.

        Raises:
            ConcurrencyConflictError: If the number collides with an existing invoice
        """
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice (with lines) by ID."""
        pass

    @abstractmethod
    def list_invoices(
        self,
        farm_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        type: Optional[InvoiceType] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[list[Invoice], int]:
        """List invoices newest first. Returns (page items, total matching)."""
        pass

    @abstractmethod
    def update_invoice_status(self, invoice_id: int, status: InvoiceStatus) -> Invoice:
        """Overwrite the invoice status."""
        pass

    # Payment operations
    @abstractmethod
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
        """Lock the invoice, settle the amount against it and insert the payment.

        Raises:
            NotFoundError: If the invoice does not exist
            BusinessRuleError: If the amount exceeds the current amount due
        """
        pass

    @abstractmethod
    def list_payments(self, invoice_id: int) -> list[Payment]:
        """List payments of an invoice, newest first."""
        pass

    # Workforce operations (external collaborators)
    @abstractmethod
    def create_employee(
        self,
        farm_id: int,
        first_name: str,
        last_name: str,
        daily_rate: Decimal,
        monthly_rate: Optional[Decimal] = None,
        cin: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create an employee. Returns employee ID."""
        pass

    @abstractmethod
    def get_employee(self, employee_id: int) -> Optional[Employee]:
        """Get employee by ID."""
        pass

    @abstractmethod
    def list_active_employees(self, farm_id: int) -> list[Employee]:
        """List active employees of a farm."""
        pass

    @abstractmethod
    def record_attendance(
        self,
        employee_id: int,
        date: date,
        status: AttendanceStatus,
        hours_worked: Decimal,
        overtime: Decimal,
    ) -> int:
        """Insert or replace the attendance of an employee for a day. Returns its ID."""
        pass

    @abstractmethod
    def list_attendance(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        statuses: Optional[Iterable[AttendanceStatus]] = None,
    ) -> list[Attendance]:
        """List attendance rows in [start_date, end_date], oldest first."""
        pass

    # Payslip operations
    @abstractmethod
    def upsert_payslips(self, figures: Iterable[PayslipFigures]) -> list[Payslip]:
        """Insert or overwrite payslips keyed on (employee_id, month, year).

        All payslips are written in one unit of work: either every one is
        stored or none is.

        Raises:
            ConcurrencyConflictError: If a concurrent insert won a key
        """
        pass

    @abstractmethod
    def list_payslips(
        self,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        farm_id: Optional[int] = None,
    ) -> list[Payslip]:
        """List payslips, newest period first."""
        pass
