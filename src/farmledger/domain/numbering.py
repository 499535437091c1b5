"""Invoice number formatting."""

INVOICE_PREFIX = "FLA"


def format_invoice_number(year: int, sequence: int) -> str:
    """Format an invoice number, e.g. ``FLA-2025-00042``."""
    return f"{INVOICE_PREFIX}-{year}-{sequence:05d}"
