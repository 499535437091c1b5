"""Main CLI entry point."""

import click
from farmledger.config.logging import configure_logging
from farmledger.database.factories import create_database

# Import and register all commands at module level
from farmledger.cli.commands import (
    farm,
    account,
    employee,
    attendance,
    invoice,
    payment,
    transaction,
    payroll,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides FARMLEDGER_DB_PATH environment variable)",
    envvar="FARMLEDGER_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides --db-path)",
    envvar="FARMLEDGER_DATABASE_URL",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="FARMLEDGER_LOG_LEVEL",
    help="Log level (default WARNING)",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    envvar="FARMLEDGER_LOG_FORMAT",
    help="Log output format (default console)",
)
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    database_url: str | None,
    log_level: str | None,
    log_format: str | None,
):
    """Farmledger - Farm invoicing, ledger and payroll.

    Issue and settle invoices with Moroccan TVA, keep bank-account
    ledgers, and compute monthly payslips with CNSS, AMO and IR.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level.upper() if log_level else None, format=log_format)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
farm.register_commands(cli)
account.register_commands(cli)
employee.register_commands(cli)
attendance.register_commands(cli)
invoice.register_commands(cli)
payment.register_commands(cli)
transaction.register_commands(cli)
payroll.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
