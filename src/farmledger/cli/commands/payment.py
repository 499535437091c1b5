"""Invoice payment command."""

import click
from farmledger.cli.error_handling import format_mad, handle_domain_error
from farmledger.domain.entities import PaymentMethod
from farmledger.domain.invoice import InvoiceService
from farmledger.domain.payment import PaymentService
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date


@click.command("pay")
@click.argument("invoice_id", type=int)
@click.argument("amount")
@click.option("--date", "date_str", default="today", show_default=True, help="Payment date")
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.VIREMENT.value,
    show_default=True,
)
@click.option("--reference", help="Cheque number or transfer reference")
@click.option("--bank", help="Bank name")
@click.option("--notes", help="Notes")
@click.pass_context
def pay_invoice(
    ctx,
    invoice_id: int,
    amount: str,
    date_str: str,
    method: str,
    reference: str | None,
    bank: str | None,
    notes: str | None,
):
    """Apply a payment to an invoice.

    Examples:
        farmledger pay 4 1200
        farmledger pay 4 "1 234,56 MAD" --method CHEQUE --reference 0012345
    """
    db = ctx.obj["db"]
    service = PaymentService(db)

    try:
        payment = service.apply_payment(
            invoice_id=invoice_id,
            amount=parse_amount(amount),
            date=parse_date(date_str),
            method=PaymentMethod(method),
            reference=reference,
            bank_name=bank,
            notes=notes,
        )
        invoice = InvoiceService(db).get_invoice(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Applied payment of {format_mad(payment.amount)} to {invoice.invoice_number}")
    click.echo(f"Status: {invoice.status.value} | Remaining due: {format_mad(invoice.amount_due)}")


def register_commands(cli):
    """Register pay command with main CLI."""
    cli.add_command(pay_invoice)
