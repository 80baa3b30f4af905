"""Date formatting helpers for PhotoRenamer.

Filename patterns use the compact letter notation known from photo tools
(``Y-m-d_H-i-s``). A pattern containing ``%`` is handed to ``strftime``
unchanged instead, so both notations can be used on the command line.
"""

from datetime import datetime
from typing import Callable

# Two digit years below this are in the 2000s
TWO_DIGIT_YEAR_PIVOT = 70

DATE_TOKENS: dict[str, Callable[[datetime], str]] = {
    "Y": lambda dt: f"{dt.year:04d}",
    "y": lambda dt: f"{dt.year % 100:02d}",
    "m": lambda dt: f"{dt.month:02d}",
    "n": lambda dt: str(dt.month),
    "d": lambda dt: f"{dt.day:02d}",
    "j": lambda dt: str(dt.day),
    "H": lambda dt: f"{dt.hour:02d}",
    "G": lambda dt: str(dt.hour),
    "i": lambda dt: f"{dt.minute:02d}",
    "s": lambda dt: f"{dt.second:02d}",
    "v": lambda dt: f"{dt.microsecond // 1000:03d}",
    "u": lambda dt: f"{dt.microsecond:06d}",
}


def format_date(value: datetime, pattern: str) -> str:
    """
    Format a datetime with a letter pattern or a strftime pattern.

    Letters listed in DATE_TOKENS are replaced by the matching date field,
    a backslash emits the following character literally and every other
    character is copied as is.

    Args:
        value: Date to format
        pattern: Letter pattern (``Y-m-d_H-i-s``) or strftime pattern

    Returns:
        Formatted string

    Example:
        format_date(datetime(2024, 5, 1, 10, 0, 0), "Y-m-d_H-i-s")
        → "2024-05-01_10-00-00"
    """
    if "%" in pattern:
        return value.strftime(pattern)

    parts: list[str] = []
    escaped = False

    for char in pattern:
        if escaped:
            parts.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in DATE_TOKENS:
            parts.append(DATE_TOKENS[char](value))
        else:
            parts.append(char)

    return "".join(parts)


def expand_two_digit_year(value: str) -> int:
    """
    Widen a 2-digit year to 4 digits.

    Years map into the window 1970-2069: 70-99 → 19xx, 00-69 → 20xx.

    Args:
        value: Two digit year string

    Returns:
        Four digit year
    """
    year = int(value)
    return year + 2000 if year < TWO_DIGIT_YEAR_PIVOT else year + 1900
