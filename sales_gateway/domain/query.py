"""Sales query pipeline - raw parameters in, result page out"""

from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from sales_gateway.domain.filtering import apply_filters
from sales_gateway.domain.models import FilterSpec, ResultPage, SalesRecord, SortField, SortOrder
from sales_gateway.domain.options import options_for
from sales_gateway.domain.pagination import DEFAULT_PAGE_SIZE, paginate
from sales_gateway.domain.sorting import sort_records
from sales_gateway.utils.date_utils import end_of_day, is_date_only, parse_datetime
from sales_gateway.utils.number_utils import parse_int

# FilterSpec attribute -> accepted query parameter names, first match wins
PARAMETER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "search": ("search",),
    "regions": ("region", "regions"),
    "genders": ("gender", "genders"),
    "categories": ("category", "categories"),
    "payment_methods": ("paymentMethod", "paymentMethods"),
    "tags": ("tags", "tag"),
    "age_min": ("ageMin", "minAge"),
    "age_max": ("ageMax", "maxAge"),
    "date_from": ("startDate", "dateFrom"),
    "date_to": ("endDate", "dateTo"),
    "sort_by": ("sortBy",),
    "sort_order": ("sortOrder",),
    "page": ("page",),
    "page_size": ("pageSize",),
}

SORT_FIELD_NAMES: Dict[str, SortField] = {
    "date": SortField.DATE,
    "quantity": SortField.QUANTITY,
    "customer": SortField.CUSTOMER,
    "customername": SortField.CUSTOMER,
    "customer_name": SortField.CUSTOMER,
}


def _raw_values(raw_params: Mapping[str, Any], name: str) -> List[str]:
    values: List[str] = []
    for key in PARAMETER_ALIASES[name]:
        raw = raw_params.get(key)
        if raw is None:
            continue
        if isinstance(raw, (list, tuple)):
            values.extend(str(item) for item in raw if item is not None)
        else:
            values.append(str(raw))
    return values


def _scalar(raw_params: Mapping[str, Any], name: str) -> Optional[str]:
    for value in _raw_values(raw_params, name):
        if value.strip():
            return value.strip()
    return None


def _selection(raw_params: Mapping[str, Any], name: str) -> FrozenSet[str]:
    """Accepts both comma lists and repeated keys: region=East,West or region=East&region=West"""
    return frozenset(
        part.strip()
        for value in _raw_values(raw_params, name)
        for part in value.split(",")
        if part.strip()
    )


def _date_bound(raw_params: Mapping[str, Any], name: str, upper: bool) -> Optional[datetime]:
    text = _scalar(raw_params, name)
    parsed = parse_datetime(text)
    if parsed is not None and upper and is_date_only(text):
        return end_of_day(parsed)
    return parsed


def build_filter_spec(
    raw_params: Mapping[str, Any],
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: Optional[int] = None,
) -> FilterSpec:
    """
    Normalize raw query parameters into a FilterSpec.

    Parsing is permissive: unknown sort fields, non-numeric numbers and
    unparseable dates fall back to their defaults instead of failing.
    """
    sort_by = SORT_FIELD_NAMES.get((_scalar(raw_params, "sort_by") or "").lower(), SortField.DATE)
    sort_order = SortOrder.ASC if (_scalar(raw_params, "sort_order") or "").lower() == "asc" else SortOrder.DESC

    page = parse_int(_scalar(raw_params, "page"))
    page_size = parse_int(_scalar(raw_params, "page_size"))
    if page_size is None or page_size < 1:
        page_size = default_page_size
    if max_page_size is not None:
        page_size = min(page_size, max_page_size)

    return FilterSpec(
        search=(_scalar(raw_params, "search") or "").lower(),
        regions=_selection(raw_params, "regions"),
        genders=_selection(raw_params, "genders"),
        categories=_selection(raw_params, "categories"),
        payment_methods=_selection(raw_params, "payment_methods"),
        tags=_selection(raw_params, "tags"),
        age_min=parse_int(_scalar(raw_params, "age_min")),
        age_max=parse_int(_scalar(raw_params, "age_max")),
        date_from=_date_bound(raw_params, "date_from", upper=False),
        date_to=_date_bound(raw_params, "date_to", upper=True),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page if page is not None and page >= 1 else 1,
        page_size=page_size,
    )


def run_query(
    records: Sequence[SalesRecord],
    spec: FilterSpec,
    filter_options: Optional[Dict[str, List[str]]] = None,
) -> ResultPage:
    """
    Filter, sort and paginate the records for one request.

    Filter options are derived from the full record set, not the matches,
    unless precomputed options are passed in.
    """
    matched = apply_filters(records, spec)
    ordered = sort_records(matched, spec.sort_by, spec.sort_order)
    page = paginate(ordered, spec.page, spec.page_size)

    if filter_options is None:
        filter_options = options_for(records)

    return ResultPage(
        items=page.items,
        total_items=page.total_items,
        total_pages=page.total_pages,
        page=page.page,
        page_size=spec.page_size,
        filters=filter_options,
        sort_by=spec.sort_by,
    )


class SalesQueryService:
    """Runs queries against a record store, loading it on first use"""

    def __init__(self, store, default_page_size: int = DEFAULT_PAGE_SIZE, max_page_size: Optional[int] = None):
        self.store = store
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def execute(self, raw_params: Mapping[str, Any]) -> ResultPage:
        """
        Raises:
            DataSourceError: The store could not be loaded
            StoreNotReadyError: The store is not available for reading
        """
        await self.store.load()
        spec = build_filter_spec(raw_params, self.default_page_size, self.max_page_size)
        return run_query(self.store.all(), spec, self.store.options())
