"""Bank transaction commands."""

import click
from farmledger.cli.error_handling import format_mad, handle_domain_error
from farmledger.domain.entities import TransactionType
from farmledger.domain.ledger import LedgerService
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date


@click.group()
def txn_group():
    """Record and list bank transactions."""
    pass


@txn_group.command("record")
@click.option("--account", "account_id", type=int, required=True, help="Bank account ID")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    required=True,
    help="RECETTE (money in) or DEPENSE (money out)",
)
@click.option("--category", required=True, help="Category, e.g. VENTE_RECOLTE or INTRANTS")
@click.option("--amount", required=True, help="Positive amount in MAD")
@click.option("--date", "date_str", default="today", show_default=True, help="Transaction date")
@click.option("--description", required=True, help="Description")
@click.option("--invoice", "invoice_id", type=int, help="Linked invoice ID")
@click.option("--reference", help="External reference")
@click.pass_context
def record_transaction(
    ctx,
    account_id: int,
    txn_type: str,
    category: str,
    amount: str,
    date_str: str,
    description: str,
    invoice_id: int | None,
    reference: str | None,
):
    """Record a transaction and update the account balance.

    Examples:
        farmledger txn record --account 1 --type RECETTE --category VENTE_RECOLTE \\
            --amount 5000 --description "Vente oranges"
    """
    service = LedgerService(ctx.obj["db"])

    try:
        txn = service.record_transaction(
            account_id=account_id,
            type=TransactionType(txn_type),
            category=category,
            amount=parse_amount(amount),
            date=parse_date(date_str),
            description=description,
            invoice_id=invoice_id,
            reference=reference,
        )
        click.echo(f"Recorded transaction {txn.id}: {txn.type.value} {format_mad(txn.amount)}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@txn_group.command("list")
@click.option("--account", "account_id", type=int, required=True, help="Bank account ID")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=20, show_default=True)
@click.pass_context
def list_transactions(ctx, account_id: int, page: int, limit: int):
    """List the transactions of an account, newest first."""
    service = LedgerService(ctx.obj["db"])

    try:
        transactions = service.list_transactions(account_id, page=page, limit=limit)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<8} {'Category':<20} {'Amount':>18} {'Description':<30}")
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.type.value:<8} {txn.category[:20]:<20} "
            f"{format_mad(txn.signed_amount):>18} {txn.description[:30]:<30}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(txn_group, name="txn")
