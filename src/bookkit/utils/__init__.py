"""Utility functions for bookkit."""

from bookkit.utils.date_parser import parse_date
from bookkit.utils.amount_parser import parse_amount
from bookkit.utils.profile_resolver import resolve_profile

__all__ = ["parse_date", "parse_amount", "resolve_profile"]
