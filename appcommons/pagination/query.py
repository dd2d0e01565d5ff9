"""SQL fragment generation for keyset pagination.

Generated fragments have the shape::

    [WHERE|AND] id {<|>} '<id>' AND createdAt {<=|>=} $n
    ORDER BY createdAt {desc|asc}, id {desc|asc} LIMIT {25|50|100|500}

The identifier is embedded as a literal while the timestamp is bound as a
positional argument; ``build_page_args`` returns that argument and must be
used with the same ``Pagination`` as ``build_page_fragment``.
"""

from enum import IntEnum
from typing import Any, Dict, List

from .cursor import Pagination


ID_COLUMN = "id"
CREATED_AT_COLUMN = "createdAt"

BASE_ORDER_BY_CLAUSE = f"ORDER BY {CREATED_AT_COLUMN} desc, {ID_COLUMN} desc"
BASE_ORDER_BY_CLAUSE_OPPOSITE = f"ORDER BY {CREATED_AT_COLUMN} asc, {ID_COLUMN} asc"


class PageSize(IntEnum):
    """Supported page size tiers; the value is the LIMIT applied."""

    REGULAR = 25
    MEDIUM = 50
    LARGE = 100
    EXTRA_LARGE = 500


EXPECTED_MAX_ROW_COUNT: Dict[PageSize, int] = {size: int(size) for size in PageSize}

_ORDER_BY_WITH_LIMIT: Dict[PageSize, str] = {
    size: f"{BASE_ORDER_BY_CLAUSE} LIMIT {int(size)}" for size in PageSize
}
_ORDER_BY_WITH_LIMIT_OPPOSITE: Dict[PageSize, str] = {
    size: f"{BASE_ORDER_BY_CLAUSE_OPPOSITE} LIMIT {int(size)}" for size in PageSize
}


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_page_fragment(
    page: Pagination,
    append: bool,
    size: PageSize = PageSize.REGULAR,
    *,
    param_index: int = 1
) -> str:
    """Build the pagination suffix of a query.

    Args:
        page: Requested page boundary
        append: True to continue an existing WHERE clause with ``AND``,
            False to open one with ``WHERE``
        size: Page size tier
        param_index: Position of the timestamp placeholder among the query's
            positional arguments

    Returns:
        Query fragment starting with a space
    """
    size = PageSize(size)
    keyword = "AND" if append else "WHERE"
    placeholder = f"${param_index}"

    if page.next is not None:
        return (
            f" {keyword} {ID_COLUMN} < {_quote_literal(page.next.id)}"
            f" AND {CREATED_AT_COLUMN} <= {placeholder} {_ORDER_BY_WITH_LIMIT[size]}"
        )
    if page.previous is not None:
        return (
            f" {keyword} {ID_COLUMN} > {_quote_literal(page.previous.id)}"
            f" AND {CREATED_AT_COLUMN} >= {placeholder} {_ORDER_BY_WITH_LIMIT_OPPOSITE[size]}"
        )
    return f" {_ORDER_BY_WITH_LIMIT[size]}"


def build_page_fragment_regular(page: Pagination, append: bool, *, param_index: int = 1) -> str:
    """Same as ``build_page_fragment`` with the regular page size."""
    return build_page_fragment(page, append, PageSize.REGULAR, param_index=param_index)


def build_page_args(page: Pagination) -> List[Any]:
    """Return the positional argument matching ``build_page_fragment``."""
    if page.next is not None:
        return [page.next.timestamp]
    if page.previous is not None:
        return [page.previous.timestamp]
    return []


def append_page_args(page: Pagination, *args: Any) -> List[Any]:
    """Append the pagination argument to a query's existing arguments."""
    return [*args, *build_page_args(page)]
