"""Record ordering by date, quantity or customer name"""

from functools import cmp_to_key
from typing import Any, Iterable, List

from sales_gateway.domain.models import SalesRecord, SortField, SortOrder


def sort_key(record: SalesRecord, field: SortField) -> Any:
    """Comparable key for a record; None marks a missing key"""
    if field is SortField.QUANTITY:
        return record.quantity or 0
    if field is SortField.CUSTOMER:
        name = (record.customer_name or "").strip()
        return name.casefold() if name else None
    return record.date


def compare(a: SalesRecord, b: SalesRecord, field: SortField, direction: SortOrder) -> int:
    """
    Three-way comparison of two records.

    Missing keys sort after present ones in both directions; direction only
    flips the comparison between present keys.
    """
    key_a = sort_key(a, field)
    key_b = sort_key(b, field)

    if key_a is None or key_b is None:
        return (key_a is None) - (key_b is None)

    base = (key_a > key_b) - (key_a < key_b)
    return -base if direction is SortOrder.DESC else base


def sort_records(records: Iterable[SalesRecord], field: SortField, direction: SortOrder) -> List[SalesRecord]:
    """Stable sort: records with equal keys keep their relative order"""
    return sorted(records, key=cmp_to_key(lambda a, b: compare(a, b, field, direction)))
