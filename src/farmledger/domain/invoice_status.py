"""Invoice status transition table."""

from farmledger.domain.entities import InvoiceStatus

_S = InvoiceStatus

# Moves the approval workflow and the payment engine are expected to make.
TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    _S.BROUILLON: frozenset({_S.VALIDEE, _S.ANNULEE, _S.EN_LITIGE, _S.PARTIELLEMENT_PAYEE, _S.PAYEE}),
    _S.VALIDEE: frozenset({_S.BROUILLON, _S.ENVOYEE, _S.ANNULEE, _S.EN_LITIGE, _S.PARTIELLEMENT_PAYEE, _S.PAYEE}),
    _S.ENVOYEE: frozenset({_S.ANNULEE, _S.EN_LITIGE, _S.PARTIELLEMENT_PAYEE, _S.PAYEE}),
    _S.PARTIELLEMENT_PAYEE: frozenset({_S.PAYEE, _S.EN_LITIGE}),
    _S.EN_LITIGE: frozenset(),
    _S.PAYEE: frozenset(),
    _S.ANNULEE: frozenset(),
}

# Payments are refused in these states. PAYEE needs no entry: its amount due is 0.
NON_PAYABLE = frozenset({_S.ANNULEE, _S.EN_LITIGE})


def is_allowed(current: InvoiceStatus, new: InvoiceStatus) -> bool:
    """Return True if the transition table allows ``current -> new``.

    Re-asserting the current status is always allowed.
    """
    if current == new:
        return True
    return new in TRANSITIONS[current]


def accepts_payments(status: InvoiceStatus) -> bool:
    """Return True if a payment may be applied in this status."""
    return status not in NON_PAYABLE
