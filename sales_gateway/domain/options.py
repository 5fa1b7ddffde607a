"""Distinct filter values for populating UI controls"""

from typing import Callable, Dict, Iterable, List, Optional, Sequence

from sales_gateway.domain.models import SalesRecord

# Response key -> values contributed by one record
OPTION_FIELDS: Dict[str, Callable[[SalesRecord], Iterable[str]]] = {
    "region": lambda record: (record.customer_region,),
    "gender": lambda record: (record.gender,),
    "category": lambda record: (record.product_category,),
    "paymentMethod": lambda record: (record.payment_method,),
    "tags": lambda record: record.tag_set,
}


def options_for(
    records: Iterable[SalesRecord],
    fields: Optional[Sequence[str]] = None,
) -> Dict[str, List[str]]:
    """Sorted distinct non-empty values per field, over every given record"""
    fields = list(fields) if fields is not None else list(OPTION_FIELDS)
    values: Dict[str, set] = {name: set() for name in fields}

    for record in records:
        for name in fields:
            for value in OPTION_FIELDS[name](record):
                value = (value or "").strip()
                if value:
                    values[name].add(value)

    return {name: sorted(found) for name, found in values.items()}
