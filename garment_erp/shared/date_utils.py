from calendar import monthrange
from datetime import datetime
from typing import Tuple

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
MONTH_PATTERN = r"^\d{4}-\d{2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def parse_date(value: str) -> datetime:
    """Parse a YYYY-MM-DD string, raising ValueError with a readable message."""
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date format: {value}. Expected YYYY-MM-DD")


def month_bounds(year: int, month: int) -> Tuple[str, str]:
    """
    First and last calendar day of a month as YYYY-MM-DD strings.

    Dates are stored as zero-padded strings, so a lexical range query
    between these two bounds selects the whole month.
    """
    if month < 1 or month > 12:
        raise ValueError(f"Invalid month: {month}")
    _, num_days = monthrange(year, month)
    return (
        f"{year}-{str(month).zfill(2)}-01",
        f"{year}-{str(month).zfill(2)}-{str(num_days).zfill(2)}",
    )


def parse_month(value: str) -> Tuple[int, int]:
    """Split a YYYY-MM string into (year, month)."""
    try:
        dt = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValueError(f"Invalid month format: {value}. Expected YYYY-MM")
    return dt.year, dt.month


def month_label(year: int, month: int) -> str:
    """'October 2026' style label for report headers."""
    return datetime(year, month, 1).strftime("%B %Y")
