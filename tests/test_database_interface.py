"""Tests for the Database interface returning domain models."""

import os
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import patch

import pytest

from farmledger.database import Database, create_database, create_sqlite_database
from farmledger.database.sqlalchemy_db import SQLAlchemyDatabase
from farmledger.domain import entities
from farmledger.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify the Database interface returns domain models."""

    def test_sqlalchemy_implements_interface(self, temp_db):
        assert isinstance(temp_db, Database)

    def test_get_farm_returns_domain_model(self, temp_db):
        farm_id = temp_db.create_farm(name="Domaine", tenant_id="t1")
        farm = temp_db.get_farm(farm_id)

        assert isinstance(farm, entities.Farm)
        assert farm.tenant_id == "t1"
        assert isinstance(farm.created_at, datetime)

    def test_missing_rows_return_none(self, temp_db):
        assert temp_db.get_farm(1) is None
        assert temp_db.get_invoice(1) is None
        assert temp_db.get_employee(1) is None
        assert temp_db.get_bank_account(1) is None

    def test_bank_accounts_filtered_by_farm(self, temp_db):
        first = temp_db.create_farm("A", "t1")
        second = temp_db.create_farm("B", "t1")
        temp_db.create_bank_account(first, "Compte A")
        temp_db.create_bank_account(second, "Compte B")

        accounts = temp_db.list_bank_accounts(farm_id=first)
        assert [a.name for a in accounts] == ["Compte A"]
        assert all(isinstance(a, entities.BankAccount) for a in accounts)

    def test_transaction_filters(self, temp_db, sample_account):
        for day, type in [(1, "RECETTE"), (15, "DEPENSE"), (28, "RECETTE")]:
            temp_db.record_transaction(
                account_id=sample_account.id,
                type=entities.TransactionType(type),
                category="DIVERS",
                amount=Decimal("10"),
                date=date(2025, 2, day),
                description="x",
            )

        rows = temp_db.list_transactions(
            account_ids=[sample_account.id],
            start_date=date(2025, 2, 10),
            end_date=date(2025, 2, 28),
            type=entities.TransactionType.RECETTE,
        )
        assert [t.date.day for t in rows] == [28]
        assert temp_db.list_transactions(account_ids=[]) == []
        assert temp_db.count_transactions(sample_account.id) == 3

    def test_apply_payment_unknown_invoice(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.apply_payment(1, Decimal("10"), date(2025, 1, 1), entities.PaymentMethod.ESPECES)

    def test_failed_unit_of_work_leaves_no_partial_state(self, temp_db, sample_farm):
        """Test that an error after the sequence bump rolls the bump back."""
        from farmledger.domain.invoice import compute_invoice_draft

        draft = compute_invoice_draft(
            sample_farm.id,
            entities.InvoiceType.FACTURE_VENTE,
            date(2025, 1, 1),
            date(2025, 1, 31),
            [entities.InvoiceLineInput("Blé", Decimal("1"), Decimal("10"))],
        )
        with patch(
            "farmledger.database.sqlalchemy_db.invoice_to_domain",
            side_effect=RuntimeError("boom"),
        ):
            with pytest.raises(RuntimeError):
                temp_db.create_invoice(draft)

        invoice = temp_db.create_invoice(draft)
        assert invoice.invoice_number == "FLA-2025-00001"
        assert temp_db.list_invoices()[1] == 1


class TestFactories:
    def test_sqlite_path_from_environment(self, tmp_path):
        db_path = tmp_path / "env.db"
        with patch.dict(os.environ, {"FARMLEDGER_DB_PATH": str(db_path)}):
            db = create_sqlite_database()
        try:
            assert db.database_url == f"sqlite:///{db_path}"
            assert db_path.exists()
        finally:
            db.disconnect()

    def test_database_url_overrides_path(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'url.db'}"
        with patch.dict(os.environ, {"FARMLEDGER_DATABASE_URL": url}):
            db = create_database(database_path=str(tmp_path / "ignored.db"))
        try:
            assert isinstance(db, SQLAlchemyDatabase)
            assert db.database_url == url
            assert not (tmp_path / "ignored.db").exists()
        finally:
            db.disconnect()

    def test_falls_back_to_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FARMLEDGER_DATABASE_URL", raising=False)
        db = create_database(database_path=str(tmp_path / "file.db"))
        try:
            assert db.database_url.endswith("file.db")
        finally:
            db.disconnect()
