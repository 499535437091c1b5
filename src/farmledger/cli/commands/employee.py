"""Employee management commands."""

import click
from farmledger.cli.error_handling import format_mad, handle_domain_error
from farmledger.domain.workforce import WorkforceService
from farmledger.utils.amount_parser import parse_amount


@click.group()
def employee_group():
    """Manage employees."""
    pass


@employee_group.command("create")
@click.argument("first_name")
@click.argument("last_name")
@click.option("--farm", "farm_id", type=int, required=True, help="Farm ID")
@click.option("--daily-rate", required=True, help="Daily wage in MAD (at least the SMAG)")
@click.option("--monthly-rate", help="Monthly wage in MAD (informational)")
@click.option("--cin", help="National ID card number")
@click.pass_context
def create_employee(
    ctx,
    first_name: str,
    last_name: str,
    farm_id: int,
    daily_rate: str,
    monthly_rate: str | None,
    cin: str | None,
):
    """Create an employee.

    Examples:
        farmledger employee create Ahmed Benali --farm 1 --daily-rate 120
    """
    service = WorkforceService(ctx.obj["db"])

    try:
        employee_id = service.create_employee(
            farm_id=farm_id,
            first_name=first_name,
            last_name=last_name,
            daily_rate=parse_amount(daily_rate),
            monthly_rate=parse_amount(monthly_rate) if monthly_rate else None,
            cin=cin,
        )
        click.echo(f"Created employee '{first_name} {last_name}' (ID: {employee_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@employee_group.command("list")
@click.option("--farm", "farm_id", type=int, required=True, help="Farm ID")
@click.pass_context
def list_employees(ctx, farm_id: int):
    """List active employees of a farm."""
    service = WorkforceService(ctx.obj["db"])

    employees = service.list_active_employees(farm_id)
    if not employees:
        click.echo("No employees found.")
        return

    click.echo("\nEmployees:")
    click.echo("-" * 70)
    for emp in employees:
        click.echo(f"ID: {emp.id:3d} | {emp.full_name:30s} | Daily rate: {format_mad(emp.daily_rate)}")


def register_commands(cli):
    """Register employee commands with main CLI."""
    cli.add_command(employee_group, name="employee")
