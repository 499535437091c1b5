"""farmledger: bookkeeping, invoicing and payroll for small farms.

The command line entry point is ``farmledger.cli.main:main``.
"""
