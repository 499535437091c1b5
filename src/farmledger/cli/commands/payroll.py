"""Payroll commands."""

import click
from farmledger.cli.error_handling import format_mad, handle_domain_error
from farmledger.domain.payroll import PayrollService
from farmledger.utils.date_parser import parse_period


def _echo_payslip(payslip) -> None:
    click.echo(f"\nPayslip employee {payslip.employee_id} - {payslip.month:02d}/{payslip.year}")
    click.echo(f"  Days worked: {payslip.days_worked}  Overtime: {payslip.overtime_hours} h")
    click.echo(f"  Base salary:   {format_mad(payslip.base_salary):>18}")
    click.echo(f"  Overtime pay:  {format_mad(payslip.overtime_pay):>18}")
    click.echo(f"  Gross salary:  {format_mad(payslip.gross_salary):>18}")
    click.echo(f"  CNSS:          {format_mad(payslip.cnss_employee):>18}")
    click.echo(f"  AMO:           {format_mad(payslip.amo_employee):>18}")
    click.echo(f"  IR:            {format_mad(payslip.ir_amount):>18}")
    click.echo(f"  Net salary:    {format_mad(payslip.net_salary):>18}")


@click.group()
def payroll_group():
    """Compute payslips and monthly payroll."""
    pass


@payroll_group.command("compute")
@click.argument("employee_id", type=int)
@click.argument("period", metavar="YYYY-MM")
@click.pass_context
def compute_payslip(ctx, employee_id: int, period: str):
    """Compute the payslip of one employee for a month.

    Examples:
        farmledger payroll compute 3 2025-03
    """
    service = PayrollService(ctx.obj["db"])

    try:
        year, month = parse_period(period)
        payslip = service.compute_payslip(employee_id, month, year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_payslip(payslip)


@payroll_group.command("run")
@click.option("--farm", "farm_id", type=int, required=True, help="Farm ID")
@click.argument("period", metavar="YYYY-MM")
@click.pass_context
def run_payroll(ctx, farm_id: int, period: str):
    """Compute the payslips of every active employee of a farm.

    Examples:
        farmledger payroll run --farm 1 2025-03
    """
    service = PayrollService(ctx.obj["db"])

    try:
        year, month = parse_period(period)
        run = service.generate_monthly_payroll(farm_id, month, year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not run.payslips:
        click.echo("No active employees.")
        return

    click.echo(f"\nPayroll {month:02d}/{year} for farm {farm_id}:")
    click.echo("-" * 70)
    for p in run.payslips:
        click.echo(
            f"Employee {p.employee_id:<5} | Days: {p.days_worked:3d} | "
            f"Gross: {format_mad(p.gross_salary):>16} | Net: {format_mad(p.net_salary):>16}"
        )
    click.echo("-" * 70)
    s = run.summary
    click.echo(f"Employees:           {s.employees_count}")
    click.echo(f"Total net:           {format_mad(s.total_net)}")
    click.echo(f"Employer CNSS:       {format_mad(s.total_cnss_employer)}")
    click.echo(f"Employer AMO:        {format_mad(s.total_amo_employer)}")
    click.echo(f"Total employer cost: {format_mad(s.total_cost)}")


@payroll_group.command("list")
@click.option("--employee", "employee_id", type=int, help="Employee ID")
@click.option("--farm", "farm_id", type=int, help="Farm ID")
@click.option("--period", help="Month as YYYY-MM")
@click.pass_context
def list_payslips(ctx, employee_id: int | None, farm_id: int | None, period: str | None):
    """List stored payslips, newest period first."""
    service = PayrollService(ctx.obj["db"])

    try:
        year, month = parse_period(period) if period else (None, None)
        payslips = service.get_payslips(
            employee_id=employee_id, month=month, year=year, farm_id=farm_id
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not payslips:
        click.echo("No payslips found.")
        return

    click.echo(f"{'Period':<9} {'Employee':<9} {'Days':>5} {'Gross':>18} {'Net':>18}")
    for p in payslips:
        click.echo(
            f"{p.month:02d}/{p.year:<6} {p.employee_id:<9} {p.days_worked:>5} "
            f"{format_mad(p.gross_salary):>18} {format_mad(p.net_salary):>18}"
        )


def register_commands(cli):
    """Register payroll commands with main CLI."""
    cli.add_command(payroll_group, name="payroll")
