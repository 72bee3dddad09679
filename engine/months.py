"""Helpers for "YYYY-MM" year-month strings."""

from datetime import date
from typing import List, Tuple

from config.defaults import MONTH_NAMES, LAST_MONTH_OF_YEAR
from engine.errors import InvalidInputError


def parse_year_month(year_month: str) -> Tuple[int, int]:
    try:
        year_str, month_str = year_month.split("-")
        year, month = int(year_str), int(month_str)
    except (AttributeError, ValueError):
        raise InvalidInputError(f"Invalid year-month: {year_month!r}. Expected 'YYYY-MM'.")
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Invalid month in year-month: {year_month!r}")
    return year, month


def format_year_month(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def year_month_of(d: date) -> str:
    return format_year_month(d.year, d.month)


def month_name(year_month: str) -> str:
    _, month = parse_year_month(year_month)
    return MONTH_NAMES[month - 1]


def months_after_through_december(year_month: str) -> List[str]:
    """Months strictly after year_month up to December of the same year."""
    year, month = parse_year_month(year_month)
    return [format_year_month(year, m) for m in range(month + 1, LAST_MONTH_OF_YEAR + 1)]


def december_of(year_month: str) -> str:
    year, _ = parse_year_month(year_month)
    return format_year_month(year, LAST_MONTH_OF_YEAR)
