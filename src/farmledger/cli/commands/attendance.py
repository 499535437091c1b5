"""Attendance commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.entities import AttendanceStatus
from farmledger.domain.workforce import WorkforceService
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date


@click.group()
def attendance_group():
    """Record employee attendance."""
    pass


@attendance_group.command("mark")
@click.argument("employee_id", type=int)
@click.option("--date", "date_str", default="today", show_default=True, help="Day (YYYY-MM-DD or relative)")
@click.option(
    "--status",
    type=click.Choice([s.value for s in AttendanceStatus]),
    default=AttendanceStatus.PRESENT.value,
    show_default=True,
)
@click.option("--hours", default="8", show_default=True, help="Hours worked")
@click.option("--overtime", default="0", show_default=True, help="Overtime hours")
@click.pass_context
def mark_attendance(ctx, employee_id: int, date_str: str, status: str, hours: str, overtime: str):
    """Mark the attendance of an employee for a day.

    Marking the same day again replaces the earlier record.

    Examples:
        farmledger attendance mark 3 --date 2025-03-10
        farmledger attendance mark 3 --date yesterday --overtime 2
        farmledger attendance mark 3 --date 2025-03-11 --status ABSENT
    """
    service = WorkforceService(ctx.obj["db"])

    try:
        day = parse_date(date_str)
        service.record_attendance(
            employee_id=employee_id,
            date=day,
            status=AttendanceStatus(status),
            hours_worked=parse_amount(hours),
            overtime=parse_amount(overtime),
        )
        click.echo(f"Marked employee {employee_id} {status} on {day.isoformat()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register attendance commands with main CLI."""
    cli.add_command(attendance_group, name="attendance")
