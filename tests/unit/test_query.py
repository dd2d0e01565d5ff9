"""Tests for pagination query fragment generation."""

import pytest
from datetime import datetime, timezone

from appcommons.pagination import (
    Cursor,
    EXPECTED_MAX_ROW_COUNT,
    PageSize,
    Pagination,
    append_page_args,
    build_page_args,
    build_page_fragment,
    build_page_fragment_regular
)


NEXT_TS = datetime(2024, 5, 2, 10, 0, tzinfo=timezone.utc)
PREVIOUS_TS = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def next_cursor():
    return Cursor(id="01HX0000000000000000000NXT", timestamp=NEXT_TS)


@pytest.fixture
def previous_cursor():
    return Cursor(id="01HX0000000000000000000PRV", timestamp=PREVIOUS_TS)


class TestPageSize:
    """Test page size tiers."""

    def test_tier_values(self):
        """Tiers map to their row limits."""
        assert EXPECTED_MAX_ROW_COUNT == {
            PageSize.REGULAR: 25,
            PageSize.MEDIUM: 50,
            PageSize.LARGE: 100,
            PageSize.EXTRA_LARGE: 500,
        }


class TestBuildPageFragment:
    """Test build_page_fragment."""

    @pytest.mark.parametrize("size,limit", [
        (PageSize.REGULAR, 25),
        (PageSize.MEDIUM, 50),
        (PageSize.LARGE, 100),
        (PageSize.EXTRA_LARGE, 500),
    ])
    def test_open_page(self, size, limit):
        """Without cursors only ordering and limit are emitted."""
        fragment = build_page_fragment(Pagination(), False, size)

        assert fragment == f" ORDER BY createdAt desc, id desc LIMIT {limit}"

    @pytest.mark.parametrize("append", [True, False])
    def test_open_page_ignores_append(self, append):
        """The append flag has no effect without a cursor."""
        fragment = build_page_fragment(Pagination(), append)

        assert "WHERE" not in fragment
        assert "AND" not in fragment

    @pytest.mark.parametrize("size,limit", [
        (PageSize.REGULAR, 25),
        (PageSize.MEDIUM, 50),
        (PageSize.LARGE, 100),
        (PageSize.EXTRA_LARGE, 500),
    ])
    def test_next_cursor(self, next_cursor, size, limit):
        """A next cursor seeks older rows in descending order."""
        fragment = build_page_fragment(Pagination(next=next_cursor), False, size)

        assert fragment == (
            f" WHERE id < '{next_cursor.id}' AND createdAt <= $1"
            f" ORDER BY createdAt desc, id desc LIMIT {limit}"
        )

    @pytest.mark.parametrize("size,limit", [
        (PageSize.REGULAR, 25),
        (PageSize.MEDIUM, 50),
        (PageSize.LARGE, 100),
        (PageSize.EXTRA_LARGE, 500),
    ])
    def test_previous_cursor(self, previous_cursor, size, limit):
        """A previous cursor seeks newer rows in ascending order."""
        fragment = build_page_fragment(Pagination(previous=previous_cursor), False, size)

        assert fragment == (
            f" WHERE id > '{previous_cursor.id}' AND createdAt >= $1"
            f" ORDER BY createdAt asc, id asc LIMIT {limit}"
        )

    def test_append_uses_and(self, next_cursor, previous_cursor):
        """append=True continues an existing WHERE clause."""
        next_fragment = build_page_fragment(Pagination(next=next_cursor), True)
        previous_fragment = build_page_fragment(Pagination(previous=previous_cursor), True)

        assert next_fragment.startswith(f" AND id < '{next_cursor.id}'")
        assert previous_fragment.startswith(f" AND id > '{previous_cursor.id}'")
        assert "WHERE" not in next_fragment
        assert "WHERE" not in previous_fragment

    @pytest.mark.parametrize("size", list(PageSize))
    @pytest.mark.parametrize("append", [True, False])
    def test_next_takes_priority(self, next_cursor, previous_cursor, size, append):
        """With both cursors set the result equals the next-only fragment."""
        both = build_page_fragment(Pagination(next=next_cursor, previous=previous_cursor), append, size)
        next_only = build_page_fragment(Pagination(next=next_cursor), append, size)

        assert both == next_only

    def test_param_index(self, next_cursor):
        """The timestamp placeholder follows the caller's existing arguments."""
        fragment = build_page_fragment(Pagination(next=next_cursor), True, param_index=3)

        assert "createdAt <= $3 " in fragment

    def test_identifier_quotes_are_escaped(self):
        """Single quotes in an identifier cannot close the literal."""
        cursor = Cursor(id="x' OR '1'='1", timestamp=NEXT_TS)
        fragment = build_page_fragment(Pagination(next=cursor), False)

        assert "id < 'x'' OR ''1''=''1'" in fragment

    def test_tie_break_on_id(self, next_cursor):
        """Ordering always breaks created_at ties on id."""
        for page in (Pagination(), Pagination(next=next_cursor)):
            assert "ORDER BY createdAt desc, id desc" in build_page_fragment(page, False)

    def test_plain_int_size(self):
        """Plain integers matching a tier are accepted."""
        assert build_page_fragment(Pagination(), False, 100).endswith("LIMIT 100")

    def test_unknown_size(self):
        """Sizes outside the tiers are rejected."""
        with pytest.raises(ValueError):
            build_page_fragment(Pagination(), False, 30)

    def test_regular_shortcut(self, next_cursor):
        """The regular shortcut uses the 25 row tier."""
        page = Pagination(next=next_cursor)

        assert build_page_fragment_regular(page, True) == build_page_fragment(page, True, PageSize.REGULAR)


class TestBuildPageArgs:
    """Test build_page_args and append_page_args."""

    def test_no_cursor(self):
        assert build_page_args(Pagination()) == []

    def test_next(self, next_cursor):
        assert build_page_args(Pagination(next=next_cursor)) == [NEXT_TS]

    def test_previous(self, previous_cursor):
        assert build_page_args(Pagination(previous=previous_cursor)) == [PREVIOUS_TS]

    def test_next_takes_priority(self, next_cursor, previous_cursor):
        """Arguments follow the same precedence as the fragment."""
        assert build_page_args(Pagination(next=next_cursor, previous=previous_cursor)) == [NEXT_TS]

    def test_append(self, next_cursor):
        """Pagination arguments come after the caller's arguments."""
        assert append_page_args(Pagination(next=next_cursor), "gpt", 7) == ["gpt", 7, NEXT_TS]

    def test_append_without_cursor(self):
        assert append_page_args(Pagination(), "gpt") == ["gpt"]
