"""Cursor and pagination models for keyset pagination."""

import base64
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID

from ..errors.exceptions import CursorFormatError


@runtime_checkable
class Paginateable(Protocol):
    """Minimal row contract pagination depends on."""

    id: str
    created_at: datetime
    updated_at: datetime


class BasePaginateable(BaseModel):
    """Reusable row base carrying the pagination key columns."""

    id: str = Field(default="", description="Time-ordered unique identifier")
    created_at: Optional[datetime] = Field(default=None, description="Row creation time")
    updated_at: Optional[datetime] = Field(default=None, description="Last update time")

    def quick_fix(self) -> bool:
        """Fill in a missing id and timestamps.

        A generated ULID also supplies ``created_at`` so that identifier order
        and creation order agree, which keyset pagination relies on.

        Returns:
            True if any field was assigned
        """
        changed = False
        if not self.id:
            generated = ULID()
            self.id = str(generated)
            if self.created_at is None:
                self.created_at = generated.datetime
            changed = True
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
            changed = True
        if self.updated_at is None:
            self.updated_at = self.created_at
            changed = True
        return changed


class Cursor(BaseModel):
    """Position of a single row in a (created_at, id) ordered result set."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Identifier of the referenced row")
    timestamp: datetime = Field(description="Creation time of the referenced row")

    @classmethod
    def from_paginateable(cls, row: Paginateable) -> "Cursor":
        """Build a cursor from a fetched row."""
        return cls(id=str(row.id), timestamp=row.created_at)

    def encode(self) -> str:
        """Encode the cursor as an opaque URL-safe token."""
        raw = self.model_dump_json().encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    def __str__(self) -> str:
        return self.encode()


def parse_cursor(token: str) -> Cursor:
    """Decode a cursor token.

    Args:
        token: Token previously produced by ``Cursor.encode``

    Returns:
        The decoded cursor

    Raises:
        CursorFormatError: If the token is empty or malformed
    """
    if not token:
        raise CursorFormatError("Empty cursor provided", token=token)

    try:
        padded = token + "=" * (-len(token) % 4)
        raw = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        return Cursor.model_validate_json(raw)
    except (ValueError, TypeError) as e:
        raise CursorFormatError(f"Invalid cursor format: {e}", token=token) from e


class Pagination(BaseModel):
    """Page boundary request made of an optional previous and next cursor.

    When both cursors are present ``next`` takes priority.
    """

    previous: Optional[Cursor] = None
    next: Optional[Cursor] = None

    @classmethod
    def from_rows(
        cls,
        first: Optional[Paginateable] = None,
        last: Optional[Paginateable] = None
    ) -> "Pagination":
        """Build a pagination from boundary rows.

        ``first`` populates ``next`` and ``last`` populates ``previous``.
        """
        page = cls()
        if first is not None:
            page.next = Cursor.from_paginateable(first)
        if last is not None:
            page.previous = Cursor.from_paginateable(last)
        return page

    @property
    def is_open(self) -> bool:
        """True when neither cursor is set, i.e. the first page."""
        return self.next is None and self.previous is None


def new_pagination(
    first: Optional[Paginateable] = None,
    last: Optional[Paginateable] = None
) -> Pagination:
    """Shorthand for ``Pagination.from_rows``."""
    return Pagination.from_rows(first, last)
