"""Domain model entities for farmledger.

These are pure data classes representing business concepts, independent of
database schema. Services and the database layer exchange these objects, so
the ledger rules never depend on ORM state.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class InvoiceType(str, Enum):
    """Kind of invoice issued or received by a farm."""

    FACTURE_VENTE = "FACTURE_VENTE"
    FACTURE_ACHAT = "FACTURE_ACHAT"
    AVOIR_VENTE = "AVOIR_VENTE"
    AVOIR_ACHAT = "AVOIR_ACHAT"


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states."""

    BROUILLON = "BROUILLON"
    VALIDEE = "VALIDEE"
    ENVOYEE = "ENVOYEE"
    PARTIELLEMENT_PAYEE = "PARTIELLEMENT_PAYEE"
    PAYEE = "PAYEE"
    EN_LITIGE = "EN_LITIGE"
    ANNULEE = "ANNULEE"


class TvaRate(str, Enum):
    """Moroccan TVA rate codes."""

    TVA_0 = "TVA_0"
    TVA_7 = "TVA_7"
    TVA_10 = "TVA_10"
    TVA_14 = "TVA_14"
    TVA_20 = "TVA_20"


class PaymentMethod(str, Enum):
    """How an invoice payment was settled."""

    ESPECES = "ESPECES"
    CHEQUE = "CHEQUE"
    VIREMENT = "VIREMENT"
    EFFET = "EFFET"
    CARTE = "CARTE"


class TransactionType(str, Enum):
    """Direction of a bank-account transaction."""

    RECETTE = "RECETTE"
    DEPENSE = "DEPENSE"


class AttendanceStatus(str, Enum):
    """Daily attendance status of an employee."""

    PRESENT = "PRESENT"
    DEMI_JOURNEE = "DEMI_JOURNEE"
    ABSENT = "ABSENT"
    CONGE = "CONGE"
    MALADIE = "MALADIE"


@dataclass(frozen=True)
class Farm:
    """Farm owned by a tenant."""

    id: int
    tenant_id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Client:
    """Customer of a farm (display only)."""

    id: int
    farm_id: int
    name: str
    ice: Optional[str]


@dataclass(frozen=True)
class Supplier:
    """Supplier of a farm (display only)."""

    id: int
    farm_id: int
    name: str
    ice: Optional[str]


@dataclass(frozen=True)
class BankAccount:
    """Bank account with its running balance."""

    id: int
    farm_id: int
    name: str
    bank_name: Optional[str]
    rib: Optional[str]
    balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger transaction against a bank account."""

    id: int
    account_id: int
    type: TransactionType
    category: str
    amount: Decimal
    date: date
    description: str
    invoice_id: Optional[int]
    reference: Optional[str]
    created_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign applied to the account balance."""
        if self.type == TransactionType.RECETTE:
            return self.amount
        return -self.amount


@dataclass(frozen=True)
class InvoiceLineInput:
    """Line item as submitted by the caller, before any computation."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    unit: str = "UNITE"
    tva_rate: Optional[TvaRate] = None


@dataclass(frozen=True)
class InvoiceLine:
    """Persisted invoice line with its resolved TVA rate and totals."""

    id: Optional[int]
    description: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    tva_rate: TvaRate
    tva_amount: Decimal
    total: Decimal
    sort_order: int

    @property
    def subtotal(self) -> Decimal:
        """Line amount before TVA."""
        return self.total - self.tva_amount


@dataclass(frozen=True)
class InvoiceDraft:
    """Fully computed invoice ready to be numbered and persisted."""

    farm_id: int
    type: InvoiceType
    date: date
    due_date: date
    lines: tuple[InvoiceLine, ...]
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    tva_rate: TvaRate
    tva_amount: Decimal
    total: Decimal
    client_id: Optional[int] = None
    supplier_id: Optional[int] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    invoice_number: str
    type: InvoiceType
    farm_id: int
    client_id: Optional[int]
    supplier_id: Optional[int]
    date: date
    due_date: date
    lines: tuple[InvoiceLine, ...]
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    tva_rate: TvaRate
    tva_amount: Decimal
    total: Decimal
    amount_paid: Decimal
    amount_due: Decimal
    status: InvoiceStatus
    payment_terms: Optional[str]
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class InvoicePage:
    """One page of an invoice listing."""

    items: tuple[Invoice, ...]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)


@dataclass(frozen=True)
class Payment:
    """Immutable payment applied to an invoice."""

    id: int
    invoice_id: int
    amount: Decimal
    date: date
    method: PaymentMethod
    reference: Optional[str]
    bank_name: Optional[str]
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Employee:
    """Farm employee as seen by payroll."""

    id: int
    farm_id: int
    first_name: str
    last_name: str
    cin: Optional[str]
    daily_rate: Decimal
    monthly_rate: Optional[Decimal]
    is_active: bool

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Attendance:
    """One attendance record for an employee on a given day."""

    id: int
    employee_id: int
    date: date
    status: AttendanceStatus
    hours_worked: Decimal
    overtime: Decimal


@dataclass(frozen=True)
class Payslip:
    """Payslip for one employee and one calendar month."""

    id: int
    employee_id: int
    month: int
    year: int
    days_worked: int
    overtime_hours: Decimal
    base_salary: Decimal
    overtime_pay: Decimal
    gross_salary: Decimal
    cnss_employee: Decimal
    cnss_employer: Decimal
    amo_employee: Decimal
    amo_employer: Decimal
    ir_amount: Decimal
    net_salary: Decimal
    updated_at: datetime


@dataclass(frozen=True)
class PayslipFigures:
    """Figures to store for one employee and period, rounded to the cent."""

    employee_id: int
    month: int
    year: int
    days_worked: int
    overtime_hours: Decimal
    base_salary: Decimal
    overtime_pay: Decimal
    gross_salary: Decimal
    cnss_employee: Decimal
    cnss_employer: Decimal
    amo_employee: Decimal
    amo_employer: Decimal
    ir_amount: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class PayrollSummary:
    """Employer-side totals for a monthly payroll run."""

    total_net: Decimal
    total_cnss_employer: Decimal
    total_amo_employer: Decimal
    total_cost: Decimal
    employees_count: int


@dataclass(frozen=True)
class PayrollRun:
    """Result of generating the payroll of a farm for one month."""

    farm_id: int
    month: int
    year: int
    payslips: tuple[Payslip, ...]
    summary: PayrollSummary


@dataclass(frozen=True)
class MonthlyBucket:
    """Revenue and expenses of one calendar month."""

    month: int
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")


@dataclass(frozen=True)
class MonthlyPnL:
    """Profit and loss of a farm for one month."""

    year: int
    month: int
    recettes: Decimal
    depenses: Decimal

    @property
    def benefice(self) -> Decimal:
        return self.recettes - self.depenses


@dataclass(frozen=True)
class AnnualSummary:
    """Twelve monthly P&L entries with their totals."""

    year: int
    months: tuple[MonthlyPnL, ...]
    total_recettes: Decimal
    total_depenses: Decimal

    @property
    def total_benefice(self) -> Decimal:
        return self.total_recettes - self.total_depenses


@dataclass(frozen=True)
class CropCycleFigures:
    """Cost and yield figures of one crop cycle, supplied by the host."""

    cycle_id: str
    crop_type: str
    input_costs: tuple[Decimal, ...] = field(default_factory=tuple)
    activity_costs: tuple[Decimal, ...] = field(default_factory=tuple)
    total_revenue: Decimal = Decimal("0")
    parcel_area_ha: Decimal = Decimal("0")
    actual_yield: Optional[Decimal] = None


@dataclass(frozen=True)
class CropProfitability:
    """Profitability of a crop cycle."""

    cycle_id: str
    crop_type: str
    input_cost: Decimal
    activity_cost: Decimal
    total_cost: Decimal
    total_revenue: Decimal
    profit: Decimal
    roi: Decimal
    yield_per_ha: Decimal
