"""Request-level pagination parsing and link generation."""

import logging
from typing import Dict, Optional
from urllib.parse import urlencode, urlunsplit

from fastapi import Request

from ..errors.exceptions import CursorFormatError
from .cursor import Pagination, parse_cursor


logger = logging.getLogger(__name__)

PREVIOUS_PAGE_PARAM = "previous"
NEXT_PAGE_PARAM = "next"


def get_pagination(request: Request) -> Pagination:
    """Read the ``previous``/``next`` cursors of a request.

    Malformed cursors are ignored so a bad token degrades to the first page.
    Usable directly as a FastAPI dependency.
    """
    result = Pagination()

    previous = request.query_params.get(PREVIOUS_PAGE_PARAM)
    if previous:
        try:
            result.previous = parse_cursor(previous)
        except CursorFormatError as e:
            logger.debug(f"Ignoring malformed previous cursor: {e}")

    next_token = request.query_params.get(NEXT_PAGE_PARAM)
    if next_token:
        try:
            result.next = parse_cursor(next_token)
        except CursorFormatError as e:
            logger.debug(f"Ignoring malformed next cursor: {e}")

    return result


def _page_url(request: Request, param: str, token: str) -> str:
    url = request.url
    return urlunsplit((url.scheme, url.netloc, url.path, urlencode({param: token}), ""))


def get_pagination_links(request: Request, pagination: Optional[Pagination]) -> Dict[str, str]:
    """Build absolute links for each cursor of a pagination.

    Args:
        request: The request being answered; its scheme, host and path are reused
        pagination: Boundaries of the page being returned

    Returns:
        Mapping of ``previous``/``next`` to URLs, only for cursors that are set
    """
    links: Dict[str, str] = {}
    if pagination is None:
        return links

    if pagination.previous is not None:
        links[PREVIOUS_PAGE_PARAM] = _page_url(request, PREVIOUS_PAGE_PARAM, pagination.previous.encode())
    if pagination.next is not None:
        links[NEXT_PAGE_PARAM] = _page_url(request, NEXT_PAGE_PARAM, pagination.next.encode())
    return links


def create_link_header(links: Dict[str, str]) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        links: Output of ``get_pagination_links``

    Returns:
        Link header value or None if no links
    """
    rels = {NEXT_PAGE_PARAM: "next", PREVIOUS_PAGE_PARAM: "prev"}
    values = [
        f'<{links[name]}>; rel="{rel}"'
        for name, rel in rels.items()
        if name in links
    ]
    return ", ".join(values) if values else None
