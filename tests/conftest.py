"""Shared pytest fixtures for farmledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from farmledger.database.factories import create_sqlite_database
from farmledger.domain.entities import InvoiceLineInput, InvoiceType, TvaRate
from farmledger.domain.farm import FarmService
from farmledger.domain.invoice import InvoiceService
from farmledger.domain.ledger import LedgerService
from farmledger.domain.payment import PaymentService
from farmledger.domain.payroll import PayrollService
from farmledger.domain.reporting import ReportService
from farmledger.domain.workforce import WorkforceService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def farm_service(temp_db):
    return FarmService(temp_db)


@pytest.fixture
def workforce_service(temp_db):
    return WorkforceService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    return InvoiceService(temp_db)


@pytest.fixture
def payment_service(temp_db):
    return PaymentService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    return LedgerService(temp_db)


@pytest.fixture
def payroll_service(temp_db):
    return PayrollService(temp_db)


@pytest.fixture
def report_service(temp_db):
    return ReportService(temp_db)


@pytest.fixture
def sample_farm(farm_service):
    """Create a sample farm for testing."""
    farm_id = farm_service.create_farm(name="Domaine Test", tenant_id="tenant-1")
    return farm_service.get_farm(farm_id)


@pytest.fixture
def sample_account(farm_service, sample_farm):
    """Create a bank account on the sample farm."""
    account_id = farm_service.create_bank_account(
        farm_id=sample_farm.id, name="Compte courant", bank_name="Crédit Agricole"
    )
    return farm_service.get_bank_account(account_id)


@pytest.fixture
def sample_employee(workforce_service, sample_farm):
    """Create an employee paid 200 MAD per day."""
    employee_id = workforce_service.create_employee(
        farm_id=sample_farm.id,
        first_name="Ahmed",
        last_name="Benali",
        daily_rate=Decimal("200"),
    )
    return workforce_service.get_employee(employee_id)


@pytest.fixture
def sample_invoice(invoice_service, sample_farm):
    """Create the 240 MAD draft invoice: 2 x 100 at TVA 20%."""
    return invoice_service.create_invoice(
        farm_id=sample_farm.id,
        type=InvoiceType.FACTURE_VENTE,
        date=date(2025, 3, 1),
        due_date=date(2025, 3, 31),
        lines=[
            InvoiceLineInput(
                description="Tomates (caisse)",
                quantity=Decimal("2"),
                unit_price=Decimal("100"),
                tva_rate=TvaRate.TVA_20,
            )
        ],
        discount_percent=Decimal("0"),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
