"""Employee and attendance seeding service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from farmledger.database.base import Database
from farmledger.domain.amounts import HOURS_PLACES, MONEY_PLACES, check_places, to_decimal
from farmledger.domain.entities import Attendance, AttendanceStatus, Employee
from farmledger.domain.errors import NotFoundError, ValidationError, farm_not_found
from farmledger.domain.tax_tables import SMAG_DAILY


class WorkforceService:
    """Service for the employees and attendance consumed by payroll."""

    def __init__(self, db: Database):
        """Initialize workforce service.

        Args:
            db: Database instance
        """
        self.db = db

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
        """Create an employee.

        Args:
            farm_id: Employing farm
            first_name: First name
            last_name: Last name
            daily_rate: Daily wage in MAD, at least the SMAG
            monthly_rate: Optional monthly wage, informational
            cin: Optional national ID card number
            is_active: Whether payroll runs include the employee

        Returns:
            Employee ID

        Raises:
            ValidationError: If a name is empty, a rate is malformed or the daily
                rate is below the SMAG
            NotFoundError: If the farm doesn't exist
        """
        if not first_name.strip() or not last_name.strip():
            raise ValidationError("Employee first and last name are required")
        daily_rate = to_decimal(daily_rate, "daily rate")
        check_places(daily_rate, MONEY_PLACES, "daily rate")
        if daily_rate < SMAG_DAILY:
            raise ValidationError(
                f"Daily rate {daily_rate} MAD is below the SMAG ({SMAG_DAILY} MAD/day)"
            )
        if monthly_rate is not None:
            monthly_rate = to_decimal(monthly_rate, "monthly rate")
            check_places(monthly_rate, MONEY_PLACES, "monthly rate")
        if self.db.get_farm(farm_id) is None:
            raise NotFoundError(farm_not_found(farm_id))

        return self.db.create_employee(
            farm_id=farm_id,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            daily_rate=daily_rate,
            monthly_rate=monthly_rate,
            cin=cin,
            is_active=is_active,
        )

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self.db.get_employee(employee_id)

    def list_active_employees(self, farm_id: int) -> list[Employee]:
        return self.db.list_active_employees(farm_id)

    def record_attendance(
        self,
        employee_id: int,
        date: date,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
        hours_worked: Decimal = Decimal("8"),
        overtime: Decimal = Decimal("0"),
    ) -> int:
        """Record the attendance of an employee for a day, replacing any earlier record.

        Raises:
            ValidationError: If hours or overtime are negative, not finite or
                have more than two decimals
            NotFoundError: If the employee doesn't exist
        """
        hours_worked = to_decimal(hours_worked, "hours worked")
        overtime = to_decimal(overtime, "overtime")
        if hours_worked < 0:
            raise ValidationError("Hours worked cannot be negative")
        if overtime < 0:
            raise ValidationError("Overtime cannot be negative")
        check_places(hours_worked, HOURS_PLACES, "hours worked")
        check_places(overtime, HOURS_PLACES, "overtime")

        return self.db.record_attendance(
            employee_id=employee_id,
            date=date,
            status=AttendanceStatus(status),
            hours_worked=hours_worked,
            overtime=overtime,
        )

    def list_attendance(
        self, employee_id: int, start_date: date, end_date: date
    ) -> list[Attendance]:
        return self.db.list_attendance(employee_id, start_date=start_date, end_date=end_date)
