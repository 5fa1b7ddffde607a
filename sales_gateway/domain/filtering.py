"""Record filtering - search, multi-select and range predicates"""

from datetime import datetime
from typing import FrozenSet, Iterable, List, Optional

from sales_gateway.domain.models import FilterSpec, SalesRecord


def matches_search(record: SalesRecord, search: str) -> bool:
    """Case-insensitive substring match on customer name or phone number"""
    if not search:
        return True
    needle = search.lower()
    return needle in (record.customer_name or "").lower() or needle in (record.phone_number or "").lower()


def matches_selection(value: str, selected: FrozenSet[str]) -> bool:
    return not selected or value in selected


def matches_tags(record: SalesRecord, selected: FrozenSet[str]) -> bool:
    """At least one requested tag must be present on the record"""
    if not selected:
        return True
    return not record.tag_set.isdisjoint(selected)


def matches_age(age: Optional[int], age_min: Optional[int], age_max: Optional[int]) -> bool:
    if age_min is None and age_max is None:
        return True
    if age is None:
        return False
    if age_min is not None and age < age_min:
        return False
    if age_max is not None and age > age_max:
        return False
    return True


def matches_date(
    value: Optional[datetime],
    date_from: Optional[datetime],
    date_to: Optional[datetime],
) -> bool:
    if date_from is None and date_to is None:
        return True
    if value is None:
        return False
    if date_from is not None and value < date_from:
        return False
    if date_to is not None and value > date_to:
        return False
    return True


def matches(record: SalesRecord, spec: FilterSpec) -> bool:
    """Decide whether a record satisfies every active predicate of the FilterSpec"""
    return (
        matches_selection(record.customer_region, spec.regions)
        and matches_selection(record.gender, spec.genders)
        and matches_selection(record.product_category, spec.categories)
        and matches_selection(record.payment_method, spec.payment_methods)
        and matches_age(record.age, spec.age_min, spec.age_max)
        and matches_date(record.date, spec.date_from, spec.date_to)
        and matches_tags(record, spec.tags)
        and matches_search(record, spec.search)
    )


def apply_filters(records: Iterable[SalesRecord], spec: FilterSpec) -> List[SalesRecord]:
    """Keep matching records in their original order"""
    return [record for record in records if matches(record, spec)]
