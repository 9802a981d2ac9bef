from datetime import date
from typing import Any

NOT_AVAILABLE = "N/A"


def format_date(value: Any) -> str:
    """Render a cell value for display as ``DD.MM.YYYY``.

    Dates (and datetimes) are formatted, strings are returned unchanged
    since spreadsheets often hold pre-formatted or placeholder text, and
    anything else renders as ``N/A``.
    """
    if isinstance(value, date):
        return f"{value.day:02d}.{value.month:02d}.{value.year}"
    if isinstance(value, str):
        return value
    return NOT_AVAILABLE


def format_number(value: Any) -> str:
    """Render integral floats without the trailing ``.0`` spreadsheets add."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
