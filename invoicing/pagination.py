# invoicing/pagination.py

import math
from typing import List, Union

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5

ELLIPSIS = "..."

PageLink = Union[int, str]


def total_pages(count: int) -> int:
    return math.ceil(count / ITEMS_PER_PAGE)


def page_offset(page: int) -> int:
    """Row offset of a 1-indexed page."""
    if page < 1:
        raise ValueError(f"page must be a positive integer, got {page}")
    return (page - 1) * ITEMS_PER_PAGE


def generate_pagination(current_page: int, total: int) -> List[PageLink]:
    """
    Page links shown under the invoice table.

    Up to 7 pages are listed in full; beyond that the first/last pages and
    the neighbourhood of the current page are kept and gaps become "...".
    """
    if total <= 7:
        return list(range(1, total + 1))

    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, total - 1, total]

    if current_page >= total - 2:
        return [1, 2, ELLIPSIS, total - 2, total - 1, total]

    return [
        1,
        ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        ELLIPSIS,
        total,
    ]
