"""Bank account management commands."""

import click
from farmledger.cli.error_handling import format_mad, handle_domain_error
from farmledger.domain.farm import FarmService


@click.group()
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--farm", "farm_id", type=int, required=True, help="Farm ID")
@click.option("--bank", help="Bank name")
@click.option("--rib", help="RIB (24-digit bank identifier)")
@click.pass_context
def create_account(ctx, name: str, farm_id: int, bank: str | None, rib: str | None):
    """Create a bank account with a zero balance.

    Examples:
        farmledger account create "Compte courant" --farm 1 --bank "Crédit Agricole"
    """
    service = FarmService(ctx.obj["db"])

    try:
        account_id = service.create_bank_account(
            farm_id=farm_id, name=name, bank_name=bank, rib=rib
        )
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--farm", "farm_id", type=int, help="Only list accounts of this farm")
@click.pass_context
def list_accounts(ctx, farm_id: int | None):
    """List bank accounts with their balances."""
    service = FarmService(ctx.obj["db"])

    accounts = service.list_bank_accounts(farm_id=farm_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        bank = acc.bank_name or "-"
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | Bank: {bank:20s} | Balance: {format_mad(acc.balance)}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
