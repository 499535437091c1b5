"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the ledger rules keep working
on plain frozen entities whatever the table layout.
"""

from decimal import Decimal
from typing import Optional

from farmledger.domain import entities as domain
from farmledger.database.models import (
    Farm as ORMFarm,
    Client as ORMClient,
    Supplier as ORMSupplier,
    BankAccount as ORMBankAccount,
    Transaction as ORMTransaction,
    Invoice as ORMInvoice,
    InvoiceLine as ORMInvoiceLine,
    Payment as ORMPayment,
    Employee as ORMEmployee,
    Attendance as ORMAttendance,
    Payslip as ORMPayslip,
)


def as_decimal(value) -> Decimal:
    """Normalize a numeric column value to Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _opt_decimal(value) -> Optional[Decimal]:
    return None if value is None else as_decimal(value)


def farm_to_domain(orm_farm: ORMFarm) -> domain.Farm:
    """Convert SQLAlchemy Farm model to domain Farm entity."""
    return domain.Farm(
        id=orm_farm.id,
        tenant_id=orm_farm.tenant_id,
        name=orm_farm.name,
        created_at=orm_farm.created_at,
    )


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        farm_id=orm_client.farm_id,
        name=orm_client.name,
        ice=orm_client.ice,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Supplier:
    """Convert SQLAlchemy Supplier model to domain Supplier entity."""
    return domain.Supplier(
        id=orm_supplier.id,
        farm_id=orm_supplier.farm_id,
        name=orm_supplier.name,
        ice=orm_supplier.ice,
    )


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount entity."""
    return domain.BankAccount(
        id=orm_account.id,
        farm_id=orm_account.farm_id,
        name=orm_account.name,
        bank_name=orm_account.bank_name,
        rib=orm_account.rib,
        balance=as_decimal(orm_account.balance),
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        type=domain.TransactionType(orm_transaction.type),
        category=orm_transaction.category,
        amount=as_decimal(orm_transaction.amount),
        date=orm_transaction.date,
        description=orm_transaction.description,
        invoice_id=orm_transaction.invoice_id,
        reference=orm_transaction.reference,
        created_at=orm_transaction.created_at,
    )


def invoice_line_to_domain(orm_line: ORMInvoiceLine) -> domain.InvoiceLine:
    """Convert SQLAlchemy InvoiceLine model to domain InvoiceLine entity."""
    return domain.InvoiceLine(
        id=orm_line.id,
        description=orm_line.description,
        quantity=as_decimal(orm_line.quantity),
        unit=orm_line.unit,
        unit_price=as_decimal(orm_line.unit_price),
        tva_rate=domain.TvaRate(orm_line.tva_rate),
        tva_amount=as_decimal(orm_line.tva_amount),
        total=as_decimal(orm_line.total),
        sort_order=orm_line.sort_order,
    )


def invoice_line_to_orm(line: domain.InvoiceLine) -> ORMInvoiceLine:
    """Build a SQLAlchemy InvoiceLine from a computed domain line."""
    return ORMInvoiceLine(
        description=line.description,
        quantity=line.quantity,
        unit=line.unit,
        unit_price=line.unit_price,
        tva_rate=line.tva_rate.value,
        tva_amount=line.tva_amount,
        total=line.total,
        sort_order=line.sort_order,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model (with lines) to domain Invoice entity."""
    lines = sorted(orm_invoice.lines, key=lambda line: line.sort_order)
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        type=domain.InvoiceType(orm_invoice.type),
        farm_id=orm_invoice.farm_id,
        client_id=orm_invoice.client_id,
        supplier_id=orm_invoice.supplier_id,
        date=orm_invoice.date,
        due_date=orm_invoice.due_date,
        lines=tuple(invoice_line_to_domain(line) for line in lines),
        subtotal=as_decimal(orm_invoice.subtotal),
        discount_percent=as_decimal(orm_invoice.discount_percent),
        discount_amount=as_decimal(orm_invoice.discount_amount),
        tva_rate=domain.TvaRate(orm_invoice.tva_rate),
        tva_amount=as_decimal(orm_invoice.tva_amount),
        total=as_decimal(orm_invoice.total),
        amount_paid=as_decimal(orm_invoice.amount_paid),
        amount_due=as_decimal(orm_invoice.amount_due),
        status=domain.InvoiceStatus(orm_invoice.status),
        payment_terms=orm_invoice.payment_terms,
        notes=orm_invoice.notes,
        created_at=orm_invoice.created_at,
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        invoice_id=orm_payment.invoice_id,
        amount=as_decimal(orm_payment.amount),
        date=orm_payment.date,
        method=domain.PaymentMethod(orm_payment.method),
        reference=orm_payment.reference,
        bank_name=orm_payment.bank_name,
        notes=orm_payment.notes,
        created_at=orm_payment.created_at,
    )


def employee_to_domain(orm_employee: ORMEmployee) -> domain.Employee:
    """Convert SQLAlchemy Employee model to domain Employee entity."""
    return domain.Employee(
        id=orm_employee.id,
        farm_id=orm_employee.farm_id,
        first_name=orm_employee.first_name,
        last_name=orm_employee.last_name,
        cin=orm_employee.cin,
        daily_rate=as_decimal(orm_employee.daily_rate),
        monthly_rate=_opt_decimal(orm_employee.monthly_rate),
        is_active=orm_employee.is_active,
    )


def attendance_to_domain(orm_attendance: ORMAttendance) -> domain.Attendance:
    """Convert SQLAlchemy Attendance model to domain Attendance entity."""
    return domain.Attendance(
        id=orm_attendance.id,
        employee_id=orm_attendance.employee_id,
        date=orm_attendance.date,
        status=domain.AttendanceStatus(orm_attendance.status),
        hours_worked=as_decimal(orm_attendance.hours_worked),
        overtime=as_decimal(orm_attendance.overtime),
    )


def payslip_to_domain(orm_payslip: ORMPayslip) -> domain.Payslip:
    """Convert SQLAlchemy Payslip model to domain Payslip entity."""
    return domain.Payslip(
        id=orm_payslip.id,
        employee_id=orm_payslip.employee_id,
        month=orm_payslip.month,
        year=orm_payslip.year,
        days_worked=orm_payslip.days_worked,
        overtime_hours=as_decimal(orm_payslip.overtime_hours),
        base_salary=as_decimal(orm_payslip.base_salary),
        overtime_pay=as_decimal(orm_payslip.overtime_pay),
        gross_salary=as_decimal(orm_payslip.gross_salary),
        cnss_employee=as_decimal(orm_payslip.cnss_employee),
        cnss_employer=as_decimal(orm_payslip.cnss_employer),
        amo_employee=as_decimal(orm_payslip.amo_employee),
        amo_employer=as_decimal(orm_payslip.amo_employer),
        ir_amount=as_decimal(orm_payslip.ir_amount),
        net_salary=as_decimal(orm_payslip.net_salary),
        updated_at=orm_payslip.updated_at,
    )
