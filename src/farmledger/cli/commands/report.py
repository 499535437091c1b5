"""Financial report commands."""

import calendar

import click
from farmledger.cli.error_handling import format_mad, handle_domain_error
from farmledger.domain.ledger import LedgerService
from farmledger.domain.reporting import ReportService
from farmledger.utils.date_parser import parse_period


@click.group()
def report_group():
    """Profit and loss reports."""
    pass


@report_group.command("pnl")
@click.option("--farm", "farm_id", type=int, required=True, help="Farm ID")
@click.argument("period", metavar="YYYY-MM")
@click.pass_context
def monthly_pnl(ctx, farm_id: int, period: str):
    """Show revenue, expenses and profit of a farm for one month."""
    service = ReportService(ctx.obj["db"])

    try:
        year, month = parse_period(period)
        pnl = service.monthly_pnl(farm_id, year, month)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nP&L {calendar.month_name[month]} {year}:")
    click.echo(f"  Recettes: {format_mad(pnl.recettes):>20}")
    click.echo(f"  Dépenses: {format_mad(pnl.depenses):>20}")
    click.echo(f"  Bénéfice: {format_mad(pnl.benefice):>20}")


@report_group.command("annual")
@click.option("--farm", "farm_id", type=int, required=True, help="Farm ID")
@click.argument("year", type=int)
@click.pass_context
def annual_summary(ctx, farm_id: int, year: int):
    """Show the twelve months of a year for a farm with totals."""
    service = ReportService(ctx.obj["db"])

    try:
        summary = service.annual_summary(farm_id, year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nAnnual summary {year}:")
    click.echo("-" * 70)
    click.echo(f"{'Month':<12} {'Recettes':>18} {'Dépenses':>18} {'Bénéfice':>18}")
    click.echo("-" * 70)
    for m in summary.months:
        click.echo(
            f"{calendar.month_abbr[m.month]:<12} {format_mad(m.recettes):>18} "
            f"{format_mad(m.depenses):>18} {format_mad(m.benefice):>18}"
        )
    click.echo("-" * 70)
    click.echo(
        f"{'Total':<12} {format_mad(summary.total_recettes):>18} "
        f"{format_mad(summary.total_depenses):>18} {format_mad(summary.total_benefice):>18}"
    )


@report_group.command("monthly")
@click.option("--account", "account_ids", type=int, multiple=True, required=True, help="Bank account ID; repeatable")
@click.argument("year", type=int)
@click.pass_context
def monthly_buckets(ctx, account_ids: tuple[int, ...], year: int):
    """Show monthly revenue and expenses of specific bank accounts."""
    service = LedgerService(ctx.obj["db"])

    try:
        buckets = service.monthly_buckets(list(account_ids), year)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"{'Month':<12} {'Revenue':>18} {'Expenses':>18}")
    for b in buckets:
        click.echo(
            f"{calendar.month_abbr[b.month]:<12} {format_mad(b.revenue):>18} {format_mad(b.expenses):>18}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
