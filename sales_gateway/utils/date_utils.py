"""Date parsing utilities"""

from datetime import date, datetime, time, timezone
from typing import Any, Optional

# Accepted in addition to ISO 8601
FALLBACK_FORMATS = ("%Y/%m/%d", "%Y/%m/%d %H:%M:%S")


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a date or timestamp into a naive UTC datetime, None if unparseable"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)

    text = str(value).strip()
    if not text:
        return None

    try:
        return _to_naive_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def is_date_only(value: Any) -> bool:
    """True for a bare calendar date such as '2023-09-01'"""
    text = str(value or "").strip()
    try:
        date.fromisoformat(text)
    except ValueError:
        return False
    return len(text) == 10


def end_of_day(value: datetime) -> datetime:
    """Last representable instant of the given day"""
    return datetime.combine(value.date(), time.max)
