"""Invoice commands."""

import click
from dateutil.relativedelta import relativedelta
from farmledger.cli.error_handling import format_mad, handle_domain_error
from farmledger.domain.entities import InvoiceLineInput, InvoiceStatus, InvoiceType, TvaRate
from farmledger.domain.invoice import InvoiceService
from farmledger.domain.payment import PaymentService
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date

TVA_CHOICES = [r.value for r in TvaRate]


def parse_line_spec(spec: str) -> InvoiceLineInput:
    """Parse a "DESCRIPTION:QUANTITY:UNIT_PRICE[:TVA_RATE]" line spec.

    The description may itself contain colons.

    Raises:
        ValueError: If the line spec is malformed
    """
    tva_rate = None
    head, sep, last = spec.rpartition(":")
    if sep and last.strip().upper() in TVA_CHOICES:
        tva_rate = TvaRate(last.strip().upper())
        spec = head

    parts = spec.rsplit(":", 2)
    if len(parts) != 3 or not parts[0].strip():
        raise ValueError(
            f"Invalid line '{spec}': expected DESCRIPTION:QUANTITY:UNIT_PRICE[:TVA_RATE]"
        )
    description, quantity, unit_price = parts
    return InvoiceLineInput(
        description=description.strip(),
        quantity=parse_amount(quantity),
        unit_price=parse_amount(unit_price),
        tva_rate=tva_rate,
    )


@click.group()
def invoice_group():
    """Issue and manage invoices."""
    pass


@invoice_group.command("create")
@click.option("--farm", "farm_id", type=int, required=True, help="Farm ID")
@click.option(
    "--type",
    "invoice_type",
    type=click.Choice([t.value for t in InvoiceType]),
    default=InvoiceType.FACTURE_VENTE.value,
    show_default=True,
)
@click.option("--date", "date_str", default="today", show_default=True, help="Invoice date")
@click.option("--due-date", help="Due date (defaults to 30 days after the invoice date)")
@click.option(
    "--line",
    "lines",
    multiple=True,
    required=True,
    help="Line as DESCRIPTION:QUANTITY:UNIT_PRICE[:TVA_RATE]; repeat for several lines",
)
@click.option("--discount", help="Discount percent on the subtotal (0-100)")
@click.option("--tva", type=click.Choice(TVA_CHOICES), help="Default TVA rate for lines")
@click.option("--client", "client_id", type=int, help="Client ID")
@click.option("--supplier", "supplier_id", type=int, help="Supplier ID")
@click.option("--terms", help="Payment terms")
@click.option("--notes", help="Notes")
@click.pass_context
def create_invoice(
    ctx,
    farm_id: int,
    invoice_type: str,
    date_str: str,
    due_date: str | None,
    lines: tuple[str, ...],
    discount: str | None,
    tva: str | None,
    client_id: int | None,
    supplier_id: int | None,
    terms: str | None,
    notes: str | None,
):
    """Create a draft invoice.

    Examples:
        farmledger invoice create --farm 1 --line "Tomates:100:2"
        farmledger invoice create --farm 1 --tva TVA_20 --line "Engrais NPK:10:450" --discount 5
    """
    service = InvoiceService(ctx.obj["db"])

    try:
        invoice_date = parse_date(date_str)
        due = parse_date(due_date) if due_date else invoice_date + relativedelta(days=30)
        invoice = service.create_invoice(
            farm_id=farm_id,
            type=InvoiceType(invoice_type),
            date=invoice_date,
            due_date=due,
            lines=[parse_line_spec(spec) for spec in lines],
            discount_percent=parse_amount(discount) if discount else None,
            tva_rate=TvaRate(tva) if tva else None,
            client_id=client_id,
            supplier_id=supplier_id,
            payment_terms=terms,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created invoice {invoice.invoice_number} (ID: {invoice.id})")
    click.echo(f"Total: {format_mad(invoice.total)}")


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show an invoice with its lines and payments."""
    db = ctx.obj["db"]
    service = InvoiceService(db)
    payment_service = PaymentService(db)

    try:
        inv = service.get_invoice(invoice_id)
        payments = payment_service.list_payments(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nInvoice {inv.invoice_number} ({inv.type.value})")
    click.echo(f"  Status: {inv.status.value}")
    click.echo(f"  Date: {inv.date}  Due: {inv.due_date}")
    click.echo("-" * 90)
    click.echo(f"{'Description':<30} {'Qty':>10} {'Unit price':>14} {'TVA':>8} {'Total':>20}")
    click.echo("-" * 90)
    for line in inv.lines:
        click.echo(
            f"{line.description[:30]:<30} {line.quantity:>10} {line.unit_price:>14,.2f} "
            f"{line.tva_rate.value:>8} {format_mad(line.total):>20}"
        )
    click.echo("-" * 90)
    click.echo(f"  Subtotal: {format_mad(inv.subtotal)}")
    if inv.discount_amount:
        click.echo(f"  Discount ({inv.discount_percent}%): -{format_mad(inv.discount_amount)}")
    click.echo(f"  TVA: {format_mad(inv.tva_amount)}")
    click.echo(f"  Total: {format_mad(inv.total)}")
    click.echo(f"  Paid: {format_mad(inv.amount_paid)}")
    click.echo(f"  Due: {format_mad(inv.amount_due)}")

    if payments:
        click.echo("\nPayments:")
        for p in payments:
            ref = f" ref {p.reference}" if p.reference else ""
            click.echo(f"  {p.date}  {format_mad(p.amount):>18}  {p.method.value}{ref}")


@invoice_group.command("list")
@click.option("--farm", "farm_id", type=int, help="Farm ID")
@click.option("--status", type=click.Choice([s.value for s in InvoiceStatus]))
@click.option("--type", "invoice_type", type=click.Choice([t.value for t in InvoiceType]))
@click.option("--search", help="Match on invoice number")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=20, show_default=True)
@click.pass_context
def list_invoices(
    ctx,
    farm_id: int | None,
    status: str | None,
    invoice_type: str | None,
    search: str | None,
    page: int,
    limit: int,
):
    """List invoices, newest first."""
    service = InvoiceService(ctx.obj["db"])

    try:
        result = service.list_invoices(
            farm_id=farm_id,
            status=InvoiceStatus(status) if status else None,
            type=InvoiceType(invoice_type) if invoice_type else None,
            search=search,
            page=page,
            limit=limit,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not result.items:
        click.echo("No invoices found.")
        return

    click.echo(f"\nFound {result.total} invoice(s), page {result.page}/{result.total_pages}:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Number':<16} {'Date':<12} {'Status':<22} {'Total':>20} {'Due':>20}"
    )
    click.echo("-" * 100)
    for inv in result.items:
        click.echo(
            f"{inv.id:<6} {inv.invoice_number:<16} {str(inv.date):<12} {inv.status.value:<22} "
            f"{format_mad(inv.total):>20} {format_mad(inv.amount_due):>20}"
        )


@invoice_group.command("status")
@click.argument("invoice_id", type=int)
@click.argument("new_status", type=click.Choice([s.value for s in InvoiceStatus]))
@click.option("--strict", is_flag=True, help="Refuse moves outside the invoice workflow")
@click.pass_context
def set_status(ctx, invoice_id: int, new_status: str, strict: bool):
    """Change the status of an invoice.

    Examples:
        farmledger invoice status 4 VALIDEE
        farmledger invoice status 4 ENVOYEE --strict
    """
    service = InvoiceService(ctx.obj["db"], strict_transitions=strict)

    try:
        inv = service.update_status(invoice_id, InvoiceStatus(new_status))
        click.echo(f"Invoice {inv.invoice_number} is now {inv.status.value}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
