"""Read-only financial reports built on the ledger."""

from decimal import Decimal

from farmledger.database.base import Database
from farmledger.domain.entities import (
    AnnualSummary,
    CropCycleFigures,
    CropProfitability,
    MonthlyPnL,
    TransactionType,
)
from farmledger.domain.errors import NotFoundError, ValidationError, farm_not_found
from farmledger.domain.ledger import LedgerService
from farmledger.domain.tax_tables import round2
from farmledger.utils.date_parser import month_bounds


class ReportService:
    """Service for P&L summaries and crop-cycle profitability."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def _farm_account_ids(self, farm_id: int) -> list[int]:
        if self.db.get_farm(farm_id) is None:
            raise NotFoundError(farm_not_found(farm_id))
        return [account.id for account in self.db.list_bank_accounts(farm_id)]

    def monthly_pnl(self, farm_id: int, year: int, month: int) -> MonthlyPnL:
        """Revenue and expenses of a farm over one calendar month.

        Args:
            farm_id: Farm ID
            year: Year
            month: Month, 1-12

        Returns:
            MonthlyPnL across all bank accounts of the farm

        Raises:
            ValidationError: If the month is out of range
            NotFoundError: If the farm doesn't exist
        """
        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
        account_ids = self._farm_account_ids(farm_id)
        start, end = month_bounds(year, month)
        return MonthlyPnL(
            year=year,
            month=month,
            recettes=self.ledger.sum_by_period(account_ids, TransactionType.RECETTE, start, end),
            depenses=self.ledger.sum_by_period(account_ids, TransactionType.DEPENSE, start, end),
        )

    def annual_summary(self, farm_id: int, year: int) -> AnnualSummary:
        """Twelve monthly P&L entries of a farm with their yearly totals."""
        account_ids = self._farm_account_ids(farm_id)
        months = tuple(
            MonthlyPnL(year=year, month=b.month, recettes=b.revenue, depenses=b.expenses)
            for b in self.ledger.monthly_buckets(account_ids, year)
        )
        return AnnualSummary(
            year=year,
            months=months,
            total_recettes=sum((m.recettes for m in months), Decimal("0")),
            total_depenses=sum((m.depenses for m in months), Decimal("0")),
        )

    def crop_profitability(self, figures: CropCycleFigures) -> CropProfitability:
        """Cost, revenue, ROI and yield per hectare of a crop cycle.

        ROI is 0 when the cycle has no cost, yield per hectare is 0 when the
        parcel area is 0 or the yield is unknown.
        """
        input_cost = sum((Decimal(c) for c in figures.input_costs), Decimal("0"))
        activity_cost = sum((Decimal(c) for c in figures.activity_costs), Decimal("0"))
        total_cost = input_cost + activity_cost
        revenue = Decimal(figures.total_revenue)
        profit = revenue - total_cost

        roi = round2(profit / total_cost * 100) if total_cost > 0 else Decimal("0")

        area = Decimal(figures.parcel_area_ha)
        if area > 0 and figures.actual_yield is not None:
            yield_per_ha = round2(Decimal(figures.actual_yield) / area)
        else:
            yield_per_ha = Decimal("0")

        return CropProfitability(
            cycle_id=figures.cycle_id,
            crop_type=figures.crop_type,
            input_cost=input_cost,
            activity_cost=activity_cost,
            total_cost=total_cost,
            total_revenue=revenue,
            profit=profit,
            roi=roi,
            yield_per_ha=yield_per_ha,
        )
