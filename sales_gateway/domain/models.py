"""Domain models - pure Python dataclasses representing sales entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

TAG_DELIMITER = "|"


class SortField(str, Enum):
    """Sortable record attributes"""

    DATE = "date"
    QUANTITY = "quantity"
    CUSTOMER = "customer"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def split_tags(raw: str) -> FrozenSet[str]:
    """Split a delimited tag string, dropping blank entries"""
    return frozenset(tag.strip() for tag in (raw or "").split(TAG_DELIMITER) if tag.strip())


@dataclass(frozen=True)
class SalesRecord:
    """One transaction line from the sales dataset"""

    transaction_id: str
    date: Optional[datetime]
    customer_id: str = ""
    customer_name: str = ""
    phone_number: str = ""
    gender: str = ""
    age: Optional[int] = None
    customer_region: str = ""
    customer_type: str = ""
    product_id: str = ""
    product_name: str = ""
    brand: str = ""
    product_category: str = ""
    tags: str = ""  # "|"-delimited
    quantity: Optional[int] = None
    price_per_unit: Optional[Decimal] = None
    discount_percentage: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    final_amount: Optional[Decimal] = None
    payment_method: str = ""
    order_status: str = ""
    delivery_type: str = ""
    store_id: str = ""
    store_location: str = ""
    salesperson_id: str = ""
    employee_name: str = ""

    @property
    def tag_set(self) -> FrozenSet[str]:
        return split_tags(self.tags)


@dataclass(frozen=True)
class FilterSpec:
    """Normalized, request-scoped query: predicates plus sort and page parameters.

    Empty selection sets mean "no restriction". Range bounds are inclusive and
    either side may be omitted.
    """

    search: str = ""
    regions: FrozenSet[str] = frozenset()
    genders: FrozenSet[str] = frozenset()
    categories: FrozenSet[str] = frozenset()
    payment_methods: FrozenSet[str] = frozenset()
    tags: FrozenSet[str] = frozenset()
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    sort_by: SortField = SortField.DATE
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    page_size: int = 10


@dataclass
class ResultPage:
    """Output of a sales query"""

    items: List[SalesRecord]
    total_items: int
    total_pages: int
    page: int
    page_size: int
    filters: Dict[str, List[str]] = field(default_factory=dict)
    sort_by: SortField = SortField.DATE
