"""Tests for the invoice status transition table and settlement rule."""

from decimal import Decimal

import pytest

from farmledger.domain.entities import InvoiceStatus
from farmledger.domain.errors import BusinessRuleError
from farmledger.domain.invoice_status import TRANSITIONS, accepts_payments, is_allowed
from farmledger.domain.settlement import settle

S = InvoiceStatus


def test_every_status_has_an_entry():
    assert set(TRANSITIONS) == set(InvoiceStatus)


@pytest.mark.parametrize(
    "current,new",
    [
        (S.BROUILLON, S.VALIDEE),
        (S.VALIDEE, S.ENVOYEE),
        (S.ENVOYEE, S.PARTIELLEMENT_PAYEE),
        (S.PARTIELLEMENT_PAYEE, S.PAYEE),
        (S.ENVOYEE, S.EN_LITIGE),
        (S.VALIDEE, S.BROUILLON),
    ],
)
def test_workflow_moves_allowed(current, new):
    assert is_allowed(current, new)


@pytest.mark.parametrize(
    "current,new",
    [
        (S.PAYEE, S.BROUILLON),
        (S.ANNULEE, S.VALIDEE),
        (S.ENVOYEE, S.BROUILLON),
        (S.PARTIELLEMENT_PAYEE, S.ANNULEE),
    ],
)
def test_illegal_moves_refused(current, new):
    assert not is_allowed(current, new)


def test_same_status_always_allowed():
    for status in InvoiceStatus:
        assert is_allowed(status, status)


def test_payable_statuses():
    assert accepts_payments(S.ENVOYEE)
    assert accepts_payments(S.BROUILLON)
    assert not accepts_payments(S.ANNULEE)
    assert not accepts_payments(S.EN_LITIGE)


class TestSettle:
    def test_partial(self):
        result = settle("FLA-2025-00001", S.ENVOYEE, Decimal("240"), Decimal("0"), Decimal("240"), Decimal("100"))
        assert result.amount_paid == Decimal("100")
        assert result.amount_due == Decimal("140")
        assert result.status == S.PARTIELLEMENT_PAYEE

    def test_exact_settles(self):
        result = settle("FLA-2025-00001", S.PARTIELLEMENT_PAYEE, Decimal("240"), Decimal("100"), Decimal("140"), Decimal("140"))
        assert result.amount_due == Decimal("0")
        assert result.status == S.PAYEE

    def test_over_payment(self):
        with pytest.raises(BusinessRuleError, match="exceeds remaining due"):
            settle("FLA-2025-00001", S.ENVOYEE, Decimal("240"), Decimal("0"), Decimal("240"), Decimal("240.01"))

    def test_disputed_invoice(self):
        with pytest.raises(BusinessRuleError, match="EN_LITIGE"):
            settle("FLA-2025-00001", S.EN_LITIGE, Decimal("240"), Decimal("0"), Decimal("240"), Decimal("10"))
