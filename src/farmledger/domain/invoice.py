"""Invoice domain service."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from farmledger.config.logging import get_logger
from farmledger.database.base import Database
from farmledger.domain.amounts import MONEY_PLACES, QUANTITY_PLACES, check_places, to_decimal
from farmledger.domain.entities import (
    Invoice,
    InvoiceDraft,
    InvoiceLine,
    InvoiceLineInput,
    InvoicePage,
    InvoiceStatus,
    InvoiceType,
    TvaRate,
)
from farmledger.domain.errors import (
    BusinessRuleError,
    ConcurrencyConflictError,
    NotFoundError,
    ValidationError,
    client_not_found,
    farm_not_found,
    illegal_transition,
    invoice_not_found,
    supplier_not_found,
)
from farmledger.domain.invoice_status import is_allowed
from farmledger.domain.tax_tables import round2, tva_fraction

logger = get_logger(__name__)

MIN_QUANTITY = Decimal("0.01")
MAX_PAGE_SIZE = 100


def compute_line(
    line: InvoiceLineInput, default_rate: Optional[TvaRate], sort_order: int
) -> InvoiceLine:
    """Resolve the TVA rate of a line and compute its amounts.

    The line rate wins over the invoice default; with neither, TVA_0 applies.
    Line subtotal and line TVA are rounded to the cent.
    """
    quantity = to_decimal(line.quantity, f"line {sort_order + 1} quantity")
    unit_price = to_decimal(line.unit_price, f"line {sort_order + 1} unit price")
    if quantity < MIN_QUANTITY:
        raise ValidationError(f"Line {sort_order + 1}: quantity must be at least {MIN_QUANTITY}")
    if unit_price < 0:
        raise ValidationError(f"Line {sort_order + 1}: unit price cannot be negative")
    check_places(quantity, QUANTITY_PLACES, f"line {sort_order + 1} quantity")
    check_places(unit_price, MONEY_PLACES, f"line {sort_order + 1} unit price")

    rate = line.tva_rate or default_rate or TvaRate.TVA_0
    subtotal = round2(quantity * unit_price)
    tva_amount = round2(subtotal * tva_fraction(rate))
    return InvoiceLine(
        id=None,
        description=line.description,
        quantity=quantity,
        unit=line.unit or "UNITE",
        unit_price=unit_price,
        tva_rate=TvaRate(rate),
        tva_amount=tva_amount,
        total=subtotal + tva_amount,
        sort_order=sort_order,
    )


def compute_invoice_draft(
    farm_id: int,
    type: InvoiceType,
    date: date,
    due_date: date,
    lines: Iterable[InvoiceLineInput],
    discount_percent: Optional[Decimal] = None,
    tva_rate: Optional[TvaRate] = None,
    client_id: Optional[int] = None,
    supplier_id: Optional[int] = None,
    payment_terms: Optional[str] = None,
    notes: Optional[str] = None,
) -> InvoiceDraft:
    """Compute line and aggregate totals of an invoice.

    The discount applies to the subtotal only; TVA is the sum of the
    undiscounted line TVA amounts.

    Raises:
        ValidationError: If there are no lines, a line is malformed or the
            discount is outside [0, 100]
    """
    line_inputs = list(lines)
    if not line_inputs:
        raise ValidationError("Invoice must have at least one line")

    pct = Decimal("0")
    if discount_percent is not None:
        pct = to_decimal(discount_percent, "discount percent")
        check_places(pct, MONEY_PLACES, "discount percent")
    if pct < 0 or pct > 100:
        raise ValidationError(f"Discount percent must be between 0 and 100, got {pct}")

    computed = tuple(
        compute_line(line, tva_rate, index) for index, line in enumerate(line_inputs)
    )
    subtotal = sum((line.subtotal for line in computed), Decimal("0"))
    tva_amount = sum((line.tva_amount for line in computed), Decimal("0"))
    discount_amount = round2(subtotal * pct / 100)

    return InvoiceDraft(
        farm_id=farm_id,
        type=InvoiceType(type),
        date=date,
        due_date=due_date,
        lines=computed,
        subtotal=subtotal,
        discount_percent=pct,
        discount_amount=discount_amount,
        tva_rate=TvaRate(tva_rate or TvaRate.TVA_0),
        tva_amount=tva_amount,
        total=subtotal - discount_amount + tva_amount,
        client_id=client_id,
        supplier_id=supplier_id,
        payment_terms=payment_terms,
        notes=notes,
    )


class InvoiceService:
    """Service for creating, listing and moving invoices through their lifecycle."""

    def __init__(self, db: Database, strict_transitions: bool = False):
        """Initialize invoice service.

        Args:
            db: Database instance
            strict_transitions: If True, status updates must follow the
                transition table; otherwise any status is accepted
        """
        self.db = db
        self.strict_transitions = strict_transitions

    def create_invoice(
        self,
        farm_id: int,
        type: InvoiceType,
        date: date,
        due_date: date,
        lines: Iterable[InvoiceLineInput],
        discount_percent: Optional[Decimal] = None,
        tva_rate: Optional[TvaRate] = None,
        client_id: Optional[int] = None,
        supplier_id: Optional[int] = None,
        payment_terms: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Invoice:
        """Create a numbered draft invoice with its lines.

        Args:
            farm_id: Owning farm
            type: Invoice type
            date: Invoice date; its year selects the numbering sequence
            due_date: Payment due date
            lines: Line items
            discount_percent: Optional discount on the subtotal, 0-100
            tva_rate: Default TVA rate for lines without one
            client_id: Optional client (sales)
            supplier_id: Optional supplier (purchases)
            payment_terms: Optional free-text terms
            notes: Optional notes

        Returns:
            The persisted invoice, status BROUILLON

        Raises:
            ValidationError: If lines or discount are invalid
            NotFoundError: If farm, client or supplier doesn't exist
            ConcurrencyConflictError: If numbering collides twice in a row
        """
        draft = compute_invoice_draft(
            farm_id=farm_id,
            type=type,
            date=date,
            due_date=due_date,
            lines=lines,
            discount_percent=discount_percent,
            tva_rate=tva_rate,
            client_id=client_id,
            supplier_id=supplier_id,
            payment_terms=payment_terms,
            notes=notes,
        )

        if self.db.get_farm(farm_id) is None:
            raise NotFoundError(farm_not_found(farm_id))
        if client_id is not None and self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        if supplier_id is not None and self.db.get_supplier(supplier_id) is None:
            raise NotFoundError(supplier_not_found(supplier_id))

        try:
            invoice = self.db.create_invoice(draft)
        except ConcurrencyConflictError as e:
            logger.warning("concurrency_conflict_retry", operation="create_invoice", farm_id=farm_id, error=str(e))
            invoice = self.db.create_invoice(draft)

        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            farm_id=farm_id,
            total=str(invoice.total),
        )
        return invoice

    def update_status(self, invoice_id: int, new_status: InvoiceStatus) -> Invoice:
        """Set the status of an invoice.

        Args:
            invoice_id: Invoice ID
            new_status: Target status

        Returns:
            The updated invoice

        Raises:
            NotFoundError: If the invoice doesn't exist
            BusinessRuleError: In strict mode, if the transition is not allowed
        """
        new_status = InvoiceStatus(new_status)
        invoice = self.get_invoice(invoice_id)

        if self.strict_transitions and not is_allowed(invoice.status, new_status):
            raise BusinessRuleError(
                illegal_transition(invoice.invoice_number, invoice.status.value, new_status.value)
            )

        updated = self.db.update_invoice_status(invoice_id, new_status)
        logger.info(
            "invoice_status_changed",
            invoice_id=invoice_id,
            old_status=invoice.status.value,
            new_status=new_status.value,
        )
        return updated

    def get_invoice(self, invoice_id: int) -> Invoice:
        """Get an invoice with its lines in sort order.

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def list_invoices(
        self,
        farm_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        type: Optional[InvoiceType] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> InvoicePage:
        """List invoices newest first, one page at a time.

        Args:
            farm_id: Optional farm filter
            status: Optional status filter
            type: Optional type filter
            search: Optional case-insensitive match on the invoice number
            page: 1-based page number
            limit: Page size, 1-100

        Returns:
            InvoicePage with the items and the total match count
        """
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

        items, total = self.db.list_invoices(
            farm_id=farm_id,
            status=InvoiceStatus(status) if status is not None else None,
            type=InvoiceType(type) if type is not None else None,
            search=search,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return InvoicePage(items=tuple(items), total=total, page=page, limit=limit)
