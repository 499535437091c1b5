"""Payroll domain service.

Computes monthly payslips from attendance using Moroccan statutory rates:
CNSS (capped), AMO (uncapped), and progressive IR computed on an annualized
taxable income net of CNSS, AMO and the professional-expense deduction.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from farmledger.config.logging import get_logger
from farmledger.database.base import Database
from farmledger.domain.entities import (
    Attendance,
    AttendanceStatus,
    Employee,
    Payslip,
    PayslipFigures,
    PayrollRun,
    PayrollSummary,
)
from farmledger.domain.errors import (
    ConcurrencyConflictError,
    NotFoundError,
    ValidationError,
    employee_not_found,
    farm_not_found,
)
from farmledger.domain.tax_tables import (
    AMO_EMPLOYEE_RATE,
    AMO_EMPLOYER_RATE,
    CNSS_CEILING,
    CNSS_EMPLOYEE_RATE,
    CNSS_EMPLOYER_RATE,
    FRAIS_PRO_ANNUAL_CAP,
    FRAIS_PRO_RATE,
    HOURS_PER_DAY,
    MONTHS_PER_YEAR,
    OVERTIME_MULTIPLIER,
    annual_income_tax,
    round2,
)
from farmledger.utils.date_parser import month_bounds

logger = get_logger(__name__)

# A half day counts as a worked day
WORKED_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.DEMI_JOURNEE)


@dataclass(frozen=True)
class PayslipComputation:
    """Every intermediate value of a payslip computation."""

    days_worked: int
    overtime_hours: Decimal
    hourly_rate: Decimal
    base_salary: Decimal
    overtime_pay: Decimal
    gross_salary: Decimal
    cnss_base: Decimal
    cnss_employee: Decimal
    cnss_employer: Decimal
    amo_employee: Decimal
    amo_employer: Decimal
    annual_gross: Decimal
    annual_cnss: Decimal
    annual_amo: Decimal
    annual_frais_pro: Decimal
    annual_taxable: Decimal
    annual_ir: Decimal
    ir_amount: Decimal
    net_salary: Decimal


def compute_payslip_figures(
    daily_rate: Decimal, attendance: Iterable[Attendance]
) -> PayslipComputation:
    """Compute the payslip of one month from the employee's attendance rows.

    Rows with a status other than PRESENT or DEMI_JOURNEE are ignored.
    Rounding to the cent happens only for CNSS, AMO, IR and net salary.
    """
    worked = [row for row in attendance if row.status in WORKED_STATUSES]
    days_worked = len(worked)
    overtime_hours = sum((Decimal(row.overtime) for row in worked), Decimal("0"))

    hourly_rate = daily_rate / HOURS_PER_DAY
    base_salary = days_worked * daily_rate
    overtime_pay = overtime_hours * hourly_rate * OVERTIME_MULTIPLIER
    gross_salary = base_salary + overtime_pay

    cnss_base = min(gross_salary, CNSS_CEILING)
    cnss_employee = round2(cnss_base * CNSS_EMPLOYEE_RATE)
    cnss_employer = round2(cnss_base * CNSS_EMPLOYER_RATE)

    amo_employee = round2(gross_salary * AMO_EMPLOYEE_RATE)
    amo_employer = round2(gross_salary * AMO_EMPLOYER_RATE)

    annual_gross = gross_salary * MONTHS_PER_YEAR
    annual_cnss = cnss_employee * MONTHS_PER_YEAR
    annual_amo = amo_employee * MONTHS_PER_YEAR
    annual_frais_pro = min(annual_gross * FRAIS_PRO_RATE, FRAIS_PRO_ANNUAL_CAP)
    annual_taxable = annual_gross - annual_cnss - annual_amo - annual_frais_pro
    annual_ir = annual_income_tax(annual_taxable)
    ir_amount = round2(annual_ir / MONTHS_PER_YEAR)

    net_salary = round2(gross_salary - cnss_employee - amo_employee - ir_amount)

    return PayslipComputation(
        days_worked=days_worked,
        overtime_hours=overtime_hours,
        hourly_rate=hourly_rate,
        base_salary=base_salary,
        overtime_pay=overtime_pay,
        gross_salary=gross_salary,
        cnss_base=cnss_base,
        cnss_employee=cnss_employee,
        cnss_employer=cnss_employer,
        amo_employee=amo_employee,
        amo_employer=amo_employer,
        annual_gross=annual_gross,
        annual_cnss=annual_cnss,
        annual_amo=annual_amo,
        annual_frais_pro=annual_frais_pro,
        annual_taxable=annual_taxable,
        annual_ir=annual_ir,
        ir_amount=ir_amount,
        net_salary=net_salary,
    )


def _validate_period(month: int, year: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    if year < 1:
        raise ValidationError(f"Invalid year: {year}")


class PayrollService:
    """Service for computing payslips and monthly payroll runs."""

    def __init__(self, db: Database):
        """Initialize payroll service.

        Args:
            db: Database instance
        """
        self.db = db

    def compute_payslip(self, employee_id: int, month: int, year: int) -> Payslip:
        """Compute and store the payslip of an employee for a month.

        Recomputes every figure from attendance and overwrites any existing
        payslip for the same period, so calling it twice gives the same result.

        Args:
            employee_id: Employee ID
            month: Month, 1-12
            year: Year

        Returns:
            The stored payslip

        Raises:
            ValidationError: If the month is out of range
            NotFoundError: If the employee doesn't exist
            ConcurrencyConflictError: If the upsert collides twice in a row
        """
        _validate_period(month, year)
        employee = self.db.get_employee(employee_id)
        if employee is None:
            raise NotFoundError(employee_not_found(employee_id))

        figures = self._figures(employee, month, year)
        (payslip,) = self._store([figures], operation="compute_payslip")

        logger.info(
            "payslip_computed",
            employee_id=employee_id,
            month=month,
            year=year,
            days_worked=figures.days_worked,
            net_salary=str(figures.net_salary),
        )
        return payslip

    def _figures(self, employee: Employee, month: int, year: int) -> PayslipFigures:
        start, end = month_bounds(year, month)
        attendance = self.db.list_attendance(
            employee.id, start_date=start, end_date=end, statuses=WORKED_STATUSES
        )
        figures = compute_payslip_figures(employee.daily_rate, attendance)
        return PayslipFigures(
            employee_id=employee.id,
            month=month,
            year=year,
            days_worked=figures.days_worked,
            overtime_hours=figures.overtime_hours,
            # Stored to the cent like every other money column
            base_salary=round2(figures.base_salary),
            overtime_pay=round2(figures.overtime_pay),
            gross_salary=round2(figures.gross_salary),
            cnss_employee=figures.cnss_employee,
            cnss_employer=figures.cnss_employer,
            amo_employee=figures.amo_employee,
            amo_employer=figures.amo_employer,
            ir_amount=figures.ir_amount,
            net_salary=figures.net_salary,
        )

    def _store(self, entries: list[PayslipFigures], operation: str) -> list[Payslip]:
        try:
            return self.db.upsert_payslips(entries)
        except ConcurrencyConflictError as e:
            logger.warning("concurrency_conflict_retry", operation=operation, error=str(e))
            return self.db.upsert_payslips(entries)

    def generate_monthly_payroll(self, farm_id: int, month: int, year: int) -> PayrollRun:
        """Compute the payslips of every active employee of a farm.

        Every payslip is computed before any is stored, then all of them are
        written in one unit of work. The batch stops at the first employee
        that fails; the error is logged with the employee ID and re-raised,
        and no payslip of the run is stored.

        Args:
            farm_id: Farm ID
            month: Month, 1-12
            year: Year

        Returns:
            PayrollRun with the payslips and the employer-side summary

        Raises:
            ValidationError: If the month is out of range
            NotFoundError: If the farm doesn't exist
            ConcurrencyConflictError: If storing the run collides twice in a row
        """
        _validate_period(month, year)
        if self.db.get_farm(farm_id) is None:
            raise NotFoundError(farm_not_found(farm_id))

        entries = []
        for employee in self.db.list_active_employees(farm_id):
            try:
                entries.append(self._figures(employee, month, year))
            except Exception:
                logger.exception(
                    "payroll_employee_failed",
                    farm_id=farm_id,
                    employee_id=employee.id,
                    month=month,
                    year=year,
                )
                raise

        payslips = self._store(entries, operation="generate_monthly_payroll")

        summary = summarize_payroll(payslips)
        logger.info(
            "payroll_generated",
            farm_id=farm_id,
            month=month,
            year=year,
            employees_count=summary.employees_count,
            total_cost=str(summary.total_cost),
        )
        return PayrollRun(
            farm_id=farm_id,
            month=month,
            year=year,
            payslips=tuple(payslips),
            summary=summary,
        )

    def get_payslips(
        self,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        farm_id: Optional[int] = None,
    ) -> list[Payslip]:
        """List payslips, newest period first, with optional filters."""
        if month is not None and not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
        return self.db.list_payslips(
            employee_id=employee_id, month=month, year=year, farm_id=farm_id
        )


def summarize_payroll(payslips: Iterable[Payslip]) -> PayrollSummary:
    """Employer-side totals of a set of payslips."""
    payslips = list(payslips)
    total_net = sum((p.net_salary for p in payslips), Decimal("0"))
    total_cnss_employer = sum((p.cnss_employer for p in payslips), Decimal("0"))
    total_amo_employer = sum((p.amo_employer for p in payslips), Decimal("0"))
    return PayrollSummary(
        total_net=total_net,
        total_cnss_employer=total_cnss_employer,
        total_amo_employer=total_amo_employer,
        total_cost=total_net + total_cnss_employer + total_amo_employer,
        employees_count=len(payslips),
    )
