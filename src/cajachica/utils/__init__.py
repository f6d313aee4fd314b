"""Utility modules for cajachica."""

from cajachica.utils.date_parser import parse_date, parse_datetime
from cajachica.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_datetime", "parse_amount"]
