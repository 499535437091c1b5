"""Bank-account transaction ledger service."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from farmledger.config.logging import get_logger
from farmledger.database.base import Database
from farmledger.domain.amounts import positive_amount
from farmledger.domain.entities import MonthlyBucket, Transaction, TransactionType
from farmledger.domain.errors import NotFoundError, ValidationError, account_not_found
from farmledger.utils.date_parser import month_bounds

logger = get_logger(__name__)

ALL_MONTHS = tuple(range(1, 13))


class LedgerService:
    """Service for recording transactions and aggregating them by period."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Record a transaction and move the account balance by its signed amount.

        RECETTE adds the amount, DEPENSE subtracts it. Overdraft is allowed.

        Args:
            account_id: Bank account ID
            type: RECETTE or DEPENSE
            category: Free-text category (e.g. "VENTE_RECOLTE", "INTRANTS")
            amount: Positive amount
            date: Transaction date
            description: Description
            invoice_id: Optional linked invoice
            reference: Optional external reference

        Returns:
            The recorded transaction

        Raises:
            ValidationError: If the amount is not positive or has more than two
                decimals, or the category is empty
            NotFoundError: If the account or linked invoice doesn't exist
        """
        amount = positive_amount(amount, "transaction amount")
        if not category or not category.strip():
            raise ValidationError("Transaction category is required")

        transaction = self.db.record_transaction(
            account_id=account_id,
            type=TransactionType(type),
            category=category.strip(),
            amount=amount,
            date=date,
            description=description,
            invoice_id=invoice_id,
            reference=reference,
        )
        logger.info(
            "transaction_recorded",
            transaction_id=transaction.id,
            account_id=account_id,
            type=transaction.type.value,
            amount=str(amount),
        )
        return transaction

    def sum_by_period(
        self,
        account_ids: Iterable[int],
        type: TransactionType,
        start: date,
        end: date,
    ) -> Decimal:
        """Sum transaction amounts of one type over [start, end] inclusive."""
        transactions = self.db.list_transactions(
            account_ids=list(account_ids),
            start_date=start,
            end_date=end,
            type=TransactionType(type),
        )
        return sum((txn.amount for txn in transactions), Decimal("0"))

    def monthly_buckets(
        self,
        account_ids: Iterable[int],
        year: int,
        months: Iterable[int] = ALL_MONTHS,
    ) -> list[MonthlyBucket]:
        """Revenue and expenses per calendar month of ``year``.

        Args:
            account_ids: Accounts to aggregate
            year: Calendar year
            months: Months to include, 1-12

        Returns:
            One MonthlyBucket per requested month, in the order given
        """
        ids = list(account_ids)
        buckets = []
        for month in months:
            start, end = month_bounds(year, month)
            buckets.append(
                MonthlyBucket(
                    month=month,
                    revenue=self.sum_by_period(ids, TransactionType.RECETTE, start, end),
                    expenses=self.sum_by_period(ids, TransactionType.DEPENSE, start, end),
                )
            )
        return buckets

    def list_transactions(
        self, account_id: int, page: int = 1, limit: int = 20
    ) -> list[Transaction]:
        """List the transactions of an account, newest first."""
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be at least 1")
        if self.db.get_bank_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return self.db.list_transactions(
            account_ids=[account_id], offset=(page - 1) * limit, limit=limit
        )

    def verify_balance(self, account_id: int) -> bool:
        """Return True if the stored balance equals the sum of signed transaction amounts."""
        account = self.db.get_bank_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        transactions = self.db.list_transactions(account_ids=[account_id])
        expected = sum((txn.signed_amount for txn in transactions), Decimal("0"))
        return expected == account.balance
