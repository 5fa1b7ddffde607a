"""Page slicing and page metadata"""

import math
from typing import List, NamedTuple, Optional, Sequence

from sales_gateway.domain.models import SalesRecord

DEFAULT_PAGE_SIZE = 10


class Page(NamedTuple):
    items: List[SalesRecord]
    total_items: int
    total_pages: int
    page: int


def paginate(sequence: Sequence[SalesRecord], page: Optional[int], page_size: Optional[int]) -> Page:
    """
    Slice one page out of an ordered sequence.

    - total_pages is never below 1, even for an empty sequence
    - page is clamped into [1, total_pages] so an out-of-range request
      returns the last page instead of an empty one
    - a missing or non-positive page size falls back to DEFAULT_PAGE_SIZE
    """
    if not page_size or page_size < 1:
        page_size = DEFAULT_PAGE_SIZE

    total_items = len(sequence)
    total_pages = max(1, math.ceil(total_items / page_size))
    page = min(max(page or 1, 1), total_pages)

    start = (page - 1) * page_size
    return Page(
        items=list(sequence[start:start + page_size]),
        total_items=total_items,
        total_pages=total_pages,
        page=page,
    )
