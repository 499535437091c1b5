"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from farmledger.database.models import (
    BankAccount as ORMBankAccount,
    Invoice as ORMInvoice,
    InvoiceLine as ORMInvoiceLine,
    Transaction as ORMTransaction,
    Employee as ORMEmployee,
)
from farmledger.database.mappers import (
    as_decimal,
    bank_account_to_domain,
    invoice_line_to_orm,
    invoice_to_domain,
    transaction_to_domain,
    employee_to_domain,
)
from farmledger.domain.entities import (
    BankAccount,
    Invoice,
    InvoiceLine,
    InvoiceStatus,
    InvoiceType,
    TransactionType,
    TvaRate,
)


def test_as_decimal():
    assert as_decimal(None) == Decimal("0")
    assert as_decimal(Decimal("1.50")) == Decimal("1.50")
    assert as_decimal(2.5) == Decimal("2.5")
    assert as_decimal(3) == Decimal("3")


class TestBankAccountMapper:
    """Tests for BankAccount mapper."""

    def test_bank_account_to_domain(self):
        """Test converting ORM BankAccount to domain BankAccount."""
        orm_account = ORMBankAccount(
            id=1,
            farm_id=2,
            name="Compte courant",
            bank_name="BMCE",
            rib="011780000012345678901234",
            balance=Decimal("1500.25"),
            created_at=datetime.now(UTC),
        )
        account = bank_account_to_domain(orm_account)

        assert isinstance(account, BankAccount)
        assert account.id == 1
        assert account.farm_id == 2
        assert account.rib == "011780000012345678901234"
        assert account.balance == Decimal("1500.25")


class TestTransactionMapper:
    def test_transaction_to_domain(self):
        orm_txn = ORMTransaction(
            id=5,
            account_id=1,
            type="DEPENSE",
            category="INTRANTS",
            amount=Decimal("99.90"),
            date=date(2025, 3, 1),
            description="Semences",
            invoice_id=None,
            reference="FAC-12",
            created_at=datetime.now(UTC),
        )
        txn = transaction_to_domain(orm_txn)

        assert txn.type == TransactionType.DEPENSE
        assert txn.signed_amount == Decimal("-99.90")
        assert txn.reference == "FAC-12"


class TestInvoiceMapper:
    def _orm_invoice(self):
        return ORMInvoice(
            id=7,
            invoice_number="FLA-2025-00007",
            type="FACTURE_VENTE",
            farm_id=1,
            client_id=None,
            supplier_id=None,
            date=date(2025, 3, 1),
            due_date=date(2025, 3, 31),
            subtotal=Decimal("300"),
            discount_percent=Decimal("0"),
            discount_amount=Decimal("0"),
            tva_rate="TVA_20",
            tva_amount=Decimal("60"),
            total=Decimal("360"),
            amount_paid=Decimal("60"),
            amount_due=Decimal("300"),
            status="PARTIELLEMENT_PAYEE",
            created_at=datetime.now(UTC),
            lines=[
                ORMInvoiceLine(
                    id=2, description="B", quantity=Decimal("1"), unit="UNITE",
                    unit_price=Decimal("100"), tva_rate="TVA_20", tva_amount=Decimal("20"),
                    total=Decimal("120"), sort_order=1,
                ),
                ORMInvoiceLine(
                    id=1, description="A", quantity=Decimal("2"), unit="KG",
                    unit_price=Decimal("100"), tva_rate="TVA_20", tva_amount=Decimal("40"),
                    total=Decimal("240"), sort_order=0,
                ),
            ],
        )

    def test_invoice_to_domain(self):
        invoice = invoice_to_domain(self._orm_invoice())

        assert isinstance(invoice, Invoice)
        assert invoice.type == InvoiceType.FACTURE_VENTE
        assert invoice.status == InvoiceStatus.PARTIELLEMENT_PAYEE
        assert invoice.tva_rate == TvaRate.TVA_20
        assert invoice.amount_due == invoice.total - invoice.amount_paid

    def test_lines_sorted(self):
        invoice = invoice_to_domain(self._orm_invoice())
        assert [line.description for line in invoice.lines] == ["A", "B"]
        assert invoice.lines[0].subtotal == Decimal("200")

    def test_invoice_line_to_orm(self):
        line = InvoiceLine(
            id=None,
            description="Engrais",
            quantity=Decimal("10"),
            unit="SAC",
            unit_price=Decimal("450"),
            tva_rate=TvaRate.TVA_10,
            tva_amount=Decimal("450"),
            total=Decimal("4950"),
            sort_order=3,
        )
        orm_line = invoice_line_to_orm(line)
        assert orm_line.tva_rate == "TVA_10"
        assert orm_line.sort_order == 3
        assert orm_line.total == Decimal("4950")


class TestEmployeeMapper:
    def test_optional_monthly_rate(self):
        orm_employee = ORMEmployee(
            id=1, farm_id=1, first_name="Ahmed", last_name="Benali", cin="AB123456",
            daily_rate=Decimal("120"), monthly_rate=None, is_active=True,
        )
        employee = employee_to_domain(orm_employee)
        assert employee.monthly_rate is None
        assert employee.daily_rate == Decimal("120")
        assert employee.full_name == "Ahmed Benali"
