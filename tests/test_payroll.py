"""Tests for payroll computation and PayrollService."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from farmledger.domain.entities import Attendance, AttendanceStatus
from farmledger.domain.errors import NotFoundError, ValidationError
from farmledger.domain.payroll import PayrollService, compute_payslip_figures


def _rows(days, overtime_per_day=Decimal("0"), status=AttendanceStatus.PRESENT):
    return [
        Attendance(
            id=i,
            employee_id=1,
            date=date(2025, 3, 1) + timedelta(days=i),
            status=status,
            hours_worked=Decimal("8"),
            overtime=overtime_per_day,
        )
        for i in range(days)
    ]


def _mark_month(workforce_service, employee_id, days, overtime_days=0, overtime=Decimal("0")):
    """Mark ``days`` worked days in March 2025, overtime on the first ``overtime_days``."""
    for i in range(days):
        workforce_service.record_attendance(
            employee_id=employee_id,
            date=date(2025, 3, 1) + timedelta(days=i),
            overtime=overtime if i < overtime_days else Decimal("0"),
        )


class TestComputePayslipFigures:
    def test_reference_scenario(self):
        """Test 200 MAD/day, 22 days, 10 overtime hours."""
        rows = _rows(22)
        rows[0] = Attendance(0, 1, date(2025, 3, 1), AttendanceStatus.PRESENT, Decimal("8"), Decimal("10"))
        figures = compute_payslip_figures(Decimal("200"), rows)

        assert figures.days_worked == 22
        assert figures.overtime_hours == Decimal("10")
        assert figures.hourly_rate == Decimal("25")
        assert figures.base_salary == Decimal("4400")
        assert figures.overtime_pay == Decimal("312.5")
        assert figures.gross_salary == Decimal("4712.5")
        assert figures.cnss_base == Decimal("4712.5")
        assert figures.cnss_employee == Decimal("211.12")
        assert figures.cnss_employer == Decimal("423.18")
        assert figures.amo_employee == Decimal("106.50")
        assert figures.amo_employer == Decimal("193.68")
        assert figures.annual_frais_pro == Decimal("11310")
        assert figures.annual_taxable == Decimal("41428.56")
        assert figures.ir_amount == Decimal("95.24")
        assert figures.net_salary == Decimal("4299.64")

    def test_no_attendance_gives_zero_payslip(self):
        figures = compute_payslip_figures(Decimal("200"), [])
        assert figures.days_worked == 0
        assert figures.gross_salary == 0
        assert figures.cnss_employee == 0
        assert figures.ir_amount == 0
        assert figures.net_salary == Decimal("0.00")

    def test_cnss_capped_amo_not(self):
        figures = compute_payslip_figures(Decimal("400"), _rows(26))
        assert figures.gross_salary == Decimal("10400")
        assert figures.cnss_base == Decimal("6000")
        assert figures.cnss_employee == Decimal("268.80")
        assert figures.cnss_employer == Decimal("538.80")
        assert figures.amo_employee == Decimal("235.04")

    def test_frais_pro_capped(self):
        # 15000/month -> 180000/year, 20% would be 36000
        figures = compute_payslip_figures(Decimal("600"), _rows(25))
        assert figures.annual_frais_pro == Decimal("30000")

    def test_half_days_count_and_absences_ignored(self):
        rows = (
            _rows(3)
            + _rows(2, status=AttendanceStatus.DEMI_JOURNEE)
            + _rows(4, status=AttendanceStatus.ABSENT)
            + _rows(1, overtime_per_day=Decimal("5"), status=AttendanceStatus.CONGE)
        )
        figures = compute_payslip_figures(Decimal("100"), rows)
        assert figures.days_worked == 5
        assert figures.overtime_hours == 0
        assert figures.base_salary == Decimal("500")

    def test_low_salary_pays_no_ir(self):
        figures = compute_payslip_figures(Decimal("100"), _rows(20))
        assert figures.annual_taxable < 30000
        assert figures.ir_amount == 0


class TestComputePayslip:
    def test_scenario_persisted(self, payroll_service, workforce_service, sample_employee):
        _mark_month(workforce_service, sample_employee.id, 22, overtime_days=1, overtime=Decimal("10"))
        payslip = payroll_service.compute_payslip(sample_employee.id, 3, 2025)

        assert payslip.days_worked == 22
        assert payslip.gross_salary == Decimal("4712.50")
        assert payslip.cnss_employer == Decimal("423.18")
        assert payslip.ir_amount == Decimal("95.24")
        assert payslip.net_salary == Decimal("4299.64")

    def test_idempotent(self, payroll_service, workforce_service, sample_employee):
        _mark_month(workforce_service, sample_employee.id, 10, overtime_days=2, overtime=Decimal("1.5"))
        first = payroll_service.compute_payslip(sample_employee.id, 3, 2025)
        second = payroll_service.compute_payslip(sample_employee.id, 3, 2025)

        assert first.id == second.id
        fields = [
            "days_worked", "overtime_hours", "base_salary", "overtime_pay", "gross_salary",
            "cnss_employee", "cnss_employer", "amo_employee", "amo_employer", "ir_amount",
            "net_salary",
        ]
        for name in fields:
            assert getattr(first, name) == getattr(second, name), name
        assert len(payroll_service.get_payslips(employee_id=sample_employee.id)) == 1

    def test_recomputed_after_attendance_change(self, payroll_service, workforce_service, sample_employee):
        _mark_month(workforce_service, sample_employee.id, 5)
        assert payroll_service.compute_payslip(sample_employee.id, 3, 2025).days_worked == 5

        workforce_service.record_attendance(sample_employee.id, date(2025, 3, 1), status=AttendanceStatus.ABSENT)
        assert payroll_service.compute_payslip(sample_employee.id, 3, 2025).days_worked == 4

    def test_other_months_ignored(self, payroll_service, workforce_service, sample_employee):
        workforce_service.record_attendance(sample_employee.id, date(2025, 2, 28))
        workforce_service.record_attendance(sample_employee.id, date(2025, 3, 31))
        workforce_service.record_attendance(sample_employee.id, date(2025, 4, 1))
        assert payroll_service.compute_payslip(sample_employee.id, 3, 2025).days_worked == 1

    def test_zero_attendance(self, payroll_service, sample_employee):
        payslip = payroll_service.compute_payslip(sample_employee.id, 3, 2025)
        assert payslip.days_worked == 0
        assert payslip.net_salary == Decimal("0")

    def test_unknown_employee(self, payroll_service):
        with pytest.raises(NotFoundError, match="Employee 999"):
            payroll_service.compute_payslip(999, 3, 2025)

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, payroll_service, sample_employee, month):
        with pytest.raises(ValidationError):
            payroll_service.compute_payslip(sample_employee.id, month, 2025)


class TestGenerateMonthlyPayroll:
    def test_summary(self, payroll_service, workforce_service, sample_farm, sample_employee):
        second = workforce_service.create_employee(sample_farm.id, "Fatima", "Zahra", Decimal("150"))
        inactive = workforce_service.create_employee(
            sample_farm.id, "Omar", "Idrissi", Decimal("150"), is_active=False
        )
        _mark_month(workforce_service, sample_employee.id, 22, overtime_days=1, overtime=Decimal("10"))
        _mark_month(workforce_service, second, 20)
        _mark_month(workforce_service, inactive, 20)

        run = payroll_service.generate_monthly_payroll(sample_farm.id, 3, 2025)

        assert [p.employee_id for p in run.payslips] == [sample_employee.id, second]
        s = run.summary
        assert s.employees_count == 2
        assert s.total_net == sum(p.net_salary for p in run.payslips)
        assert s.total_cnss_employer == sum(p.cnss_employer for p in run.payslips)
        assert s.total_amo_employer == sum(p.amo_employer for p in run.payslips)
        assert s.total_cost == s.total_net + s.total_cnss_employer + s.total_amo_employer

    def test_farm_without_employees(self, payroll_service, sample_farm):
        run = payroll_service.generate_monthly_payroll(sample_farm.id, 3, 2025)
        assert run.payslips == ()
        assert run.summary.employees_count == 0
        assert run.summary.total_cost == 0

    def test_unknown_farm(self, payroll_service):
        with pytest.raises(NotFoundError, match="Farm 999"):
            payroll_service.generate_monthly_payroll(999, 3, 2025)

    def test_fails_fast(self, temp_db, workforce_service, sample_farm, sample_employee):
        second = workforce_service.create_employee(sample_farm.id, "Fatima", "Zahra", Decimal("150"))
        service = PayrollService(temp_db)
        calls = []

        def failing(daily_rate, attendance):
            calls.append(daily_rate)
            if daily_rate == Decimal("200"):
                raise ValidationError("malformed attendance")
            return compute_payslip_figures(daily_rate, attendance)

        with patch("farmledger.domain.payroll.compute_payslip_figures", side_effect=failing):
            with pytest.raises(ValidationError, match="malformed attendance"):
                service.generate_monthly_payroll(sample_farm.id, 3, 2025)

        assert calls == [Decimal("200")]
        assert service.get_payslips(employee_id=second) == []

    def test_later_failure_stores_nothing(
        self, payroll_service, workforce_service, sample_farm, sample_employee
    ):
        """Test that a failing employee leaves the whole run unstored."""
        earlier = payroll_service.compute_payslip(sample_employee.id, 3, 2025)
        second = workforce_service.create_employee(sample_farm.id, "Fatima", "Zahra", Decimal("150"))
        _mark_month(workforce_service, sample_employee.id, 5)
        _mark_month(workforce_service, second, 5)

        def failing(daily_rate, attendance):
            if daily_rate == Decimal("150"):
                raise ValidationError("malformed attendance")
            return compute_payslip_figures(daily_rate, attendance)

        with patch("farmledger.domain.payroll.compute_payslip_figures", side_effect=failing):
            with pytest.raises(ValidationError, match="malformed attendance"):
                payroll_service.generate_monthly_payroll(sample_farm.id, 3, 2025)

        payslips = payroll_service.get_payslips(month=3, year=2025)
        assert [(p.employee_id, p.days_worked) for p in payslips] == [(sample_employee.id, 0)]
        assert payslips[0].id == earlier.id

    def test_run_is_one_unit_of_work(self, temp_db, workforce_service, sample_farm, sample_employee):
        workforce_service.create_employee(sample_farm.id, "Fatima", "Zahra", Decimal("150"))
        service = PayrollService(temp_db)

        with patch.object(temp_db, "upsert_payslips", wraps=temp_db.upsert_payslips) as upsert:
            run = service.generate_monthly_payroll(sample_farm.id, 3, 2025)

        assert upsert.call_count == 1
        assert len(upsert.call_args.args[0]) == 2
        assert len(run.payslips) == 2

    def test_failed_upsert_rolls_back_every_payslip(self, temp_db, workforce_service, sample_farm, sample_employee):
        workforce_service.create_employee(sample_farm.id, "Fatima", "Zahra", Decimal("150"))
        service = PayrollService(temp_db)

        with patch(
            "farmledger.database.sqlalchemy_db.payslip_to_domain",
            side_effect=RuntimeError("boom"),
        ):
            with pytest.raises(RuntimeError):
                service.generate_monthly_payroll(sample_farm.id, 3, 2025)

        assert service.get_payslips(farm_id=sample_farm.id) == []

    def test_get_payslips_filters(self, payroll_service, sample_farm, sample_employee):
        payroll_service.compute_payslip(sample_employee.id, 1, 2025)
        payroll_service.compute_payslip(sample_employee.id, 2, 2025)
        payroll_service.compute_payslip(sample_employee.id, 12, 2024)

        all_payslips = payroll_service.get_payslips(farm_id=sample_farm.id)
        assert [(p.year, p.month) for p in all_payslips] == [(2025, 2), (2025, 1), (2024, 12)]
        assert len(payroll_service.get_payslips(year=2025)) == 2
        assert len(payroll_service.get_payslips(month=12, year=2024)) == 1
        assert payroll_service.get_payslips(farm_id=sample_farm.id + 1) == []
