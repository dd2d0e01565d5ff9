"""Pagination module for cursor-based keyset pagination."""

from .cursor import (
    Paginateable,
    BasePaginateable,
    Cursor,
    Pagination,
    parse_cursor,
    new_pagination
)
from .query import (
    PageSize,
    EXPECTED_MAX_ROW_COUNT,
    build_page_fragment,
    build_page_fragment_regular,
    build_page_args,
    append_page_args
)
from .links import (
    PREVIOUS_PAGE_PARAM,
    NEXT_PAGE_PARAM,
    get_pagination,
    get_pagination_links,
    create_link_header
)

__all__ = [
    "Paginateable",
    "BasePaginateable",
    "Cursor",
    "Pagination",
    "parse_cursor",
    "new_pagination",
    "PageSize",
    "EXPECTED_MAX_ROW_COUNT",
    "build_page_fragment",
    "build_page_fragment_regular",
    "build_page_args",
    "append_page_args",
    "PREVIOUS_PAGE_PARAM",
    "NEXT_PAGE_PARAM",
    "get_pagination",
    "get_pagination_links",
    "create_link_header"
]
