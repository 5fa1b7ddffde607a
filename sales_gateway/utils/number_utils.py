"""Lenient numeric parsing for CSV cells and query parameters"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

# Plain integers only, optionally written as '30.0'; 18 digits keeps values in int64 range
INTEGER_PATTERN = re.compile(r"[+-]?(\d{1,18})(?:\.0*)?")


def parse_int(value: Any) -> Optional[int]:
    """Parse a plain integer such as '30' or '30.0'; None otherwise.

    Exponent notation ('1e6') is rejected so oversized input never expands
    into a huge integer.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip().replace(",", "")
    match = INTEGER_PATTERN.fullmatch(text)
    if match is None:
        return None
    number = int(match.group(1))
    return -number if text.startswith("-") else number


def parse_decimal(value: Any, allow_negative: bool = False) -> Optional[Decimal]:
    """Parse a finite decimal; negatives are rejected unless allowed"""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip().replace(",", "")
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    if number < 0 and not allow_negative:
        return None
    return number


def parse_non_negative_int(value: Any) -> Optional[int]:
    number = parse_int(value)
    if number is None or number < 0:
        return None
    return number
