"""Utility functions for farmledger."""

from farmledger.utils.date_parser import month_bounds, parse_date, parse_period
from farmledger.utils.amount_parser import parse_amount

__all__ = ["month_bounds", "parse_date", "parse_period", "parse_amount"]
