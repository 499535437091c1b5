"""Moroccan statutory rates used by invoicing and payroll.

Static lookup tables, no state. Amounts are MAD.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from farmledger.domain.entities import TvaRate

CENT = Decimal("0.01")

TVA_RATES: dict[TvaRate, Decimal] = {
    TvaRate.TVA_0: Decimal("0.00"),
    TvaRate.TVA_7: Decimal("0.07"),
    TvaRate.TVA_10: Decimal("0.10"),
    TvaRate.TVA_14: Decimal("0.14"),
    TvaRate.TVA_20: Decimal("0.20"),
}

# SMAG (salaire minimum agricole garanti), daily
SMAG_DAILY = Decimal("84.37")

HOURS_PER_DAY = Decimal("8")
OVERTIME_MULTIPLIER = Decimal("1.25")

CNSS_EMPLOYEE_RATE = Decimal("0.0448")
CNSS_EMPLOYER_RATE = Decimal("0.0898")
CNSS_CEILING = Decimal("6000")

AMO_EMPLOYEE_RATE = Decimal("0.0226")
AMO_EMPLOYER_RATE = Decimal("0.0411")

MONTHS_PER_YEAR = Decimal("12")
FRAIS_PRO_RATE = Decimal("0.20")
FRAIS_PRO_ANNUAL_CAP = Decimal("30000")


@dataclass(frozen=True)
class IRBracket:
    """Annual income-tax bracket; ``max`` of None means unbounded."""

    min: Decimal
    max: Optional[Decimal]
    rate: Decimal
    deduction: Decimal

    def contains(self, amount: Decimal) -> bool:
        if amount < self.min:
            return False
        return self.max is None or amount <= self.max


IR_BRACKETS: tuple[IRBracket, ...] = (
    IRBracket(Decimal("0"), Decimal("30000"), Decimal("0"), Decimal("0")),
    IRBracket(Decimal("30001"), Decimal("50000"), Decimal("0.10"), Decimal("3000")),
    IRBracket(Decimal("50001"), Decimal("60000"), Decimal("0.20"), Decimal("8000")),
    IRBracket(Decimal("60001"), Decimal("80000"), Decimal("0.30"), Decimal("14000")),
    IRBracket(Decimal("80001"), Decimal("180000"), Decimal("0.34"), Decimal("17200")),
    IRBracket(Decimal("180001"), None, Decimal("0.38"), Decimal("24400")),
)


def round2(amount: Decimal) -> Decimal:
    """Round half-up to the cent."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def tva_fraction(rate: Optional[TvaRate]) -> Decimal:
    """Return the fraction for a TVA rate code (unknown or missing is 0)."""
    if rate is None:
        return Decimal("0")
    return TVA_RATES.get(TvaRate(rate), Decimal("0"))


def find_ir_bracket(annual_taxable: Decimal) -> Optional[IRBracket]:
    """Return the first bracket containing the annual taxable income.

    Brackets are integer-bounded, so a fractional income between two
    brackets (e.g. 30000.50) matches none.
    """
    for bracket in IR_BRACKETS:
        if bracket.contains(annual_taxable):
            return bracket
    return None


def annual_income_tax(annual_taxable: Decimal) -> Decimal:
    """Progressive IR on an annual taxable income, never negative."""
    bracket = find_ir_bracket(annual_taxable)
    if bracket is None:
        return Decimal("0")
    return max(Decimal("0"), annual_taxable * bracket.rate - bracket.deduction)
