"""
Query parameter validation for listing catalog entries.

The list endpoint receives its parameters as raw strings.  These
helpers turn them into bounded values and a store filter, raising
``ValueError`` with a client facing message for anything malformed.
They never touch the store.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from service_catalog_api.app.core.config import settings

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_FIELD = "created_at"
DEFAULT_SORT_ORDER = 1

SORT_FIELDS = {"name", "created_at"}
SORT_ORDERS = {1, -1}

# Values travel to the store as BSON int64.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: int


@dataclass(frozen=True)
class ListQuery:
    """Validated parameters for a list request."""

    pagination: Pagination
    sort: SortSpec
    filter: Dict[str, Any] = field(default_factory=dict)


def _parse_int(value: Optional[str], default: int, message: str) -> int:
    if value is None:
        return default
    # int() would also accept "1_0", surrounding spaces and non-ASCII digits.
    if not _INTEGER.fullmatch(value):
        raise ValueError(message)
    try:
        number = int(value)
    except ValueError:
        # more digits than the interpreter converts
        raise ValueError(message) from None
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(message)
    return number


def parse_pagination(
    page: Optional[str],
    page_size: Optional[str],
    max_page_size: Optional[int] = None,
) -> Pagination:
    """Parse ``page`` and ``pageSize``; both must be integers >= 1.

    ``max_page_size`` defaults to ``settings.max_page_size``; a value of
    ``0`` means no upper bound.
    """
    page_number = _parse_int(page, DEFAULT_PAGE, "Invalid page number")
    if page_number < 1:
        raise ValueError("Invalid page number")
    size = _parse_int(page_size, DEFAULT_PAGE_SIZE, "Invalid page size")
    if size < 1:
        raise ValueError("Invalid page size")
    limit = settings.max_page_size if max_page_size is None else max_page_size
    if limit and size > limit:
        raise ValueError("Invalid page size")
    if (page_number - 1) * size > INT64_MAX:
        raise ValueError("Invalid page number")
    return Pagination(page=page_number, page_size=size)


def parse_sort(sort_field: Optional[str], sort_order: Optional[str]) -> SortSpec:
    """Parse ``sortField`` (``name``/``created_at``) and ``sortOrder`` (``1``/``-1``)."""
    order = _parse_int(sort_order, DEFAULT_SORT_ORDER, "Invalid sort order")
    if order not in SORT_ORDERS:
        raise ValueError("Invalid sort order")
    field_name = DEFAULT_SORT_FIELD if sort_field is None else sort_field
    if field_name not in SORT_FIELDS:
        raise ValueError("Invalid sort field")
    return SortSpec(field=field_name, order=order)


def build_search_filter(search: Optional[str]) -> Dict[str, Any]:
    """Build a store filter matching ``search`` in name or description.

    The match is a case-insensitive substring match; regex
    metacharacters in ``search`` are matched literally.  An empty
    search matches every entry.
    """
    if not search:
        return {}
    pattern = re.escape(search)
    return {
        "$or": [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    }


def parse_list_query(
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    sort_field: Optional[str] = None,
    sort_order: Optional[str] = None,
    search: Optional[str] = None,
) -> ListQuery:
    """Validate every list parameter at once."""
    return ListQuery(
        pagination=parse_pagination(page, page_size),
        sort=parse_sort(sort_field, sort_order),
        filter=build_search_filter(search),
    )
