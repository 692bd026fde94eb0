"""Helpers for reading loosely typed JSON and query-string values."""
import math
from typing import Optional


def parse_id(value) -> Optional[int]:
    """Accept an int or a string of digits; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def is_number(value) -> bool:
    """True for JSON numbers (bools excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_positive_number(value) -> bool:
    """A finite JSON number greater than zero. Rejects the NaN and Infinity literals."""
    return is_number(value) and math.isfinite(value) and value > 0


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def positive_int_arg(value, default: int) -> int:
    """Parse a page/limit query argument; invalid or < 1 falls back to the default."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default
