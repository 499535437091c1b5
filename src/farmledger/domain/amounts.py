"""Decimal checks for amounts entering the domain.

Money columns store two decimals and line quantities three, so values with
more places are rejected here instead of being rounded on write.
"""

from decimal import Decimal

from farmledger.domain.errors import ValidationError

MONEY_PLACES = 2
QUANTITY_PLACES = 3
HOURS_PLACES = 2


def to_decimal(value, field: str) -> Decimal:
    """Convert a value to a finite Decimal.

    Raises:
        ValidationError: If the value is not a finite number
    """
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except ArithmeticError as e:
        raise ValidationError(f"Invalid {field}: {value!r}") from e
    if not result.is_finite():
        raise ValidationError(f"Invalid {field}: {value!r}")
    return result


def check_places(value: Decimal, places: int, field: str) -> Decimal:
    """Reject a value with more than ``places`` decimals."""
    if value.normalize().as_tuple().exponent < -places:
        raise ValidationError(f"{field.capitalize()} cannot have more than {places} decimals")
    return value


def positive_amount(value, field: str) -> Decimal:
    """Return a strictly positive money amount with at most two decimals.

    Raises:
        ValidationError: If the value is not finite, not positive or has
            more than two decimals
    """
    amount = to_decimal(value, field)
    if amount <= 0:
        raise ValidationError(f"{field.capitalize()} must be greater than 0")
    return check_places(amount, MONEY_PLACES, field)
