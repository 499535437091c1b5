"""Domain layer for farmledger.

Services live in their own modules (``farmledger.domain.invoice``,
``farmledger.domain.payroll``, ...) and are imported from there.
"""
