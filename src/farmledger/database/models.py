"""SQLAlchemy models for the farmledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(14, 2)
QUANTITY = Numeric(12, 3)


def _now() -> datetime:
    return datetime.now(UTC)


class Farm(Base):
    """Farm model (owned by the tenant resolver, mirrored here for ownership checks)."""

    __tablename__ = "farms"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    bank_accounts = relationship("BankAccount", back_populates="farm")
    employees = relationship("Employee", back_populates="farm")


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    farm_id = Column(Integer, ForeignKey("farms.id"), nullable=False)
    name = Column(String, nullable=False)
    ice = Column(String, nullable=True)


class Supplier(Base):
    """Supplier model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    farm_id = Column(Integer, ForeignKey("farms.id"), nullable=False)
    name = Column(String, nullable=False)
    ice = Column(String, nullable=True)


class BankAccount(Base):
    """Bank account model with running balance."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    farm_id = Column(Integer, ForeignKey("farms.id"), nullable=False)
    name = Column(String, nullable=False)
    bank_name = Column(String, nullable=True)
    rib = Column(String, nullable=True)
    balance = Column(MONEY, default=0, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    farm = relationship("Farm", back_populates="bank_accounts")
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Ledger transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False, index=True)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=True)
    reference = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    account = relationship("BankAccount", back_populates="transactions")


class InvoiceSequence(Base):
    """Last invoice sequence allocated per farm and year."""

    __tablename__ = "invoice_sequences"

    id = Column(Integer, primary_key=True)
    farm_id = Column(Integer, ForeignKey("farms.id"), nullable=False)
    year = Column(Integer, nullable=False)
    last_value = Column(Integer, default=0, nullable=False)

    __table_args__ = (UniqueConstraint("farm_id", "year", name="uq_invoice_sequence_farm_year"),)


class Invoice(Base):
    """Invoice model."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_number = Column(String, nullable=False)
    type = Column(String, nullable=False)
    farm_id = Column(Integer, ForeignKey("farms.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    subtotal = Column(MONEY, nullable=False)
    discount_percent = Column(Numeric(5, 2), default=0, nullable=False)
    discount_amount = Column(MONEY, default=0, nullable=False)
    tva_rate = Column(String, nullable=False)
    tva_amount = Column(MONEY, nullable=False)
    total = Column(MONEY, nullable=False)
    amount_paid = Column(MONEY, default=0, nullable=False)
    amount_due = Column(MONEY, nullable=False)
    status = Column(String, nullable=False)
    payment_terms = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("farm_id", "invoice_number", name="uq_invoice_farm_number"),)

    lines = relationship(
        "InvoiceLine",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLine.sort_order",
    )
    payments = relationship("Payment", back_populates="invoice")


class InvoiceLine(Base):
    """Invoice line model."""

    __tablename__ = "invoice_lines"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    description = Column(String, nullable=False)
    quantity = Column(QUANTITY, nullable=False)
    unit = Column(String, nullable=False)
    unit_price = Column(MONEY, nullable=False)
    tva_rate = Column(String, nullable=False)
    tva_amount = Column(MONEY, nullable=False)
    total = Column(MONEY, nullable=False)
    sort_order = Column(Integer, nullable=False)

    invoice = relationship("Invoice", back_populates="lines")


class Payment(Base):
    """Invoice payment model."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    method = Column(String, nullable=False)
    reference = Column(String, nullable=True)
    bank_name = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    invoice = relationship("Invoice", back_populates="payments")


class Employee(Base):
    """Employee model (payroll view)."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    farm_id = Column(Integer, ForeignKey("farms.id"), nullable=False, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    cin = Column(String, nullable=True)
    daily_rate = Column(MONEY, nullable=False)
    monthly_rate = Column(MONEY, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    farm = relationship("Farm", back_populates="employees")


class Attendance(Base):
    """Attendance model, one row per employee and day."""

    __tablename__ = "attendances"

    id = Column(Integer, primary_key=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String, nullable=False)
    hours_worked = Column(Numeric(5, 2), default=0, nullable=False)
    overtime = Column(Numeric(5, 2), default=0, nullable=False)

    __table_args__ = (UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),)


class Payslip(Base):
    """Payslip model, unique per employee and period."""

    __tablename__ = "payslips"

    id = Column(Integer, primary_key=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    days_worked = Column(Integer, nullable=False)
    overtime_hours = Column(Numeric(7, 2), nullable=False)
    base_salary = Column(MONEY, nullable=False)
    overtime_pay = Column(MONEY, nullable=False)
    gross_salary = Column(MONEY, nullable=False)
    cnss_employee = Column(MONEY, nullable=False)
    cnss_employer = Column(MONEY, nullable=False)
    amo_employee = Column(MONEY, nullable=False)
    amo_employer = Column(MONEY, nullable=False)
    ir_amount = Column(MONEY, nullable=False)
    net_salary = Column(MONEY, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "month", "year", name="uq_payslip_employee_period"),
    )


def _serialize_sqlite_writers(engine: Engine) -> None:
    """Open every SQLite transaction with BEGIN IMMEDIATE.

    SQLite has no row locks, so FOR UPDATE compiles to nothing; taking the
    write lock at BEGIN makes each unit of work serializable instead.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url, echo=False, connect_args={"timeout": 30, "check_same_thread": False}
        )
        _serialize_sqlite_writers(engine)
    else:
        engine = create_engine(database_url, echo=False, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
