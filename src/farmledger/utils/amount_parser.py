"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY = re.compile(r"(MAD|DHS?|DH)\.?$", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse a MAD amount string into a Decimal.

    Handles various formats:
    - "1234.56"
    - "1234,56" (decimal comma)
    - "1 234,56" (space as thousands separator)
    - "1,234.56" and "1.234,56"
    - "250 MAD", "250 DH", "250dhs"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    original = amount_str
    amount_str = _CURRENCY.sub("", amount_str.strip())

    # Remove whitespace, including no-break spaces used as thousands separators
    amount_str = re.sub(r"\s+", "", amount_str)

    # The rightmost of "," and "." is the decimal separator
    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif "," in amount_str:
        head, _, tail = amount_str.rpartition(",")
        if amount_str.count(",") == 1 and len(tail) != 3:
            amount_str = f"{head}.{tail}"
        else:
            amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{original}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{original}'")
    return amount
