"""Tests for the filter -> sort -> paginate pipeline."""

from datetime import datetime

import pytest

from erp_console.core.search import contains, paginate, resolve_path, sort_key, sortable_fields
from erp_console.domain.schemas.search import SearchParams

FIELDS = sortable_fields("name", "price", "created_at", "address.city")


def _rows(count: int) -> list[dict]:
    return [{"name": f"item-{i:02d}", "price": i} for i in range(count)]


def _names(response) -> list:
    return [row["name"] for row in response.data]


class TestPagination:
    @pytest.mark.parametrize("page,expected", [(1, 10), (2, 10), (3, 3), (4, 0), (10, 0)])
    def test_page_sizes(self, page: int, expected: int) -> None:
        response = paginate(_rows(23), SearchParams(page=page, limit=10), lambda row: True, FIELDS)
        assert len(response.data) == expected
        assert len(response.data) == min(10, max(0, 23 - (page - 1) * 10))
        assert response.total == 23
        assert response.total_pages == 3
        assert response.page == page
        assert response.limit == 10

    def test_empty_collection(self) -> None:
        response = paginate([], SearchParams(), lambda row: True, FIELDS)
        assert response.data == []
        assert response.total == 0
        assert response.total_pages == 0

    def test_total_counts_filtered_items(self) -> None:
        response = paginate(_rows(23), SearchParams(limit=5), lambda row: row["price"] % 2 == 0, FIELDS)
        assert response.total == 12
        assert response.total_pages == 3
        assert all(row["price"] % 2 == 0 for row in response.data)

    def test_slice_follows_sorted_order(self) -> None:
        params = SearchParams(page=2, limit=3, sort="price", order="desc")
        response = paginate(_rows(10), params, lambda row: True, FIELDS)
        assert [row["price"] for row in response.data] == [6, 5, 4]


class TestSorting:
    def test_strings_compare_case_insensitively(self) -> None:
        rows = [{"name": "banana"}, {"name": "Apple"}, {"name": "cherry"}]
        response = paginate(rows, SearchParams(sort="name"), lambda row: True, FIELDS)
        assert _names(response) == ["Apple", "banana", "cherry"]

    def test_iso_strings_compare_as_timestamps(self) -> None:
        rows = [
            {"name": "b", "created_at": "2024-01-10T09:00:00-03:00"},
            {"name": "a", "created_at": "2024-01-10T11:00:00+00:00"},
            {"name": "c", "created_at": "2023-12-31T23:00:00-03:00"},
        ]
        response = paginate(rows, SearchParams(sort="createdAt"), lambda row: True, FIELDS)
        # 11:00 UTC is 08:00 at -03:00, earlier than 09:00 -03:00
        assert _names(response) == ["c", "a", "b"]

    def test_datetimes_and_iso_strings_mix(self) -> None:
        rows = [
            {"name": "late", "created_at": datetime(2024, 5, 1, 12, 0)},
            {"name": "early", "created_at": "2024-04-01T12:00:00"},
        ]
        response = paginate(rows, SearchParams(sort="created_at"), lambda row: True, FIELDS)
        assert _names(response) == ["early", "late"]

    def test_none_sorts_last_ascending_and_first_descending(self) -> None:
        rows = [{"name": "x", "price": None}, {"name": "y", "price": 2}, {"name": "z", "price": 1}]
        ascending = paginate(rows, SearchParams(sort="price", order="asc"), lambda row: True, FIELDS)
        descending = paginate(rows, SearchParams(sort="price", order="desc"), lambda row: True, FIELDS)
        assert _names(ascending) == ["z", "y", "x"]
        assert _names(descending) == ["x", "y", "z"]

    def test_unknown_sort_keeps_filtered_order(self) -> None:
        rows = [{"name": "c"}, {"name": "a"}, {"name": "b"}]
        response = paginate(rows, SearchParams(sort="colour"), lambda row: True, FIELDS)
        assert _names(response) == ["c", "a", "b"]

    def test_default_sort_is_first_declared_field(self) -> None:
        rows = [{"name": "c"}, {"name": "a"}, {"name": "b"}]
        response = paginate(rows, SearchParams(), lambda row: True, FIELDS)
        assert _names(response) == ["a", "b", "c"]

    def test_entity_default_sort_and_order(self) -> None:
        rows = _rows(4)
        response = paginate(rows, SearchParams(), lambda row: True, FIELDS, default_sort="price", default_order="desc")
        assert [row["price"] for row in response.data] == [3, 2, 1, 0]

    def test_dot_path(self) -> None:
        rows = [
            {"name": "one", "address": {"city": "Santos"}},
            {"name": "two", "address": {"city": "campinas"}},
            {"name": "three", "address": None},
        ]
        response = paginate(rows, SearchParams(sort="address.city"), lambda row: True, FIELDS)
        assert _names(response) == ["two", "one", "three"]

    def test_sorting_is_idempotent(self) -> None:
        rows = [{"name": n, "price": p} for n, p in [("a", 3), ("b", 1), ("c", 2), ("d", 1)]]
        params = SearchParams(sort="price", limit=50)
        once = paginate(rows, params, lambda row: True, FIELDS).data
        twice = paginate(once, params, lambda row: True, FIELDS).data
        assert once == twice

    def test_descending_reverses_ascending_for_distinct_values(self) -> None:
        rows = _rows(7)
        ascending = paginate(rows, SearchParams(sort="price", limit=50), lambda row: True, FIELDS).data
        descending = paginate(rows, SearchParams(sort="price", order="desc", limit=50), lambda row: True, FIELDS).data
        assert descending == list(reversed(ascending))

    def test_ties_keep_input_order(self) -> None:
        rows = [{"name": "first", "price": 1}, {"name": "second", "price": 1}, {"name": "third", "price": 0}]
        response = paginate(rows, SearchParams(sort="price"), lambda row: True, FIELDS)
        assert _names(response) == ["third", "first", "second"]


class TestHelpers:
    def test_sortable_fields_register_camel_case_aliases(self) -> None:
        fields = sortable_fields("stock_quantity", "address.zip_code")
        assert fields["stock_quantity"] == ("stock_quantity",)
        assert fields["stockQuantity"] == ("stock_quantity",)
        assert fields["address.zipCode"] == ("address", "zip_code")

    def test_resolve_path_stops_at_missing_link(self) -> None:
        assert resolve_path({"address": None}, ("address", "city")) is None
        assert resolve_path({"address": {"city": "Santos"}}, ("address", "city")) == "Santos"

    def test_sort_key_ranks(self) -> None:
        assert sort_key(5) < sort_key("abc") < sort_key(None)
        assert sort_key("ABC") == sort_key("abc")

    def test_contains_is_case_insensitive(self) -> None:
        assert contains("Monitor Gamer", "gamer")
        assert not contains(None, "x")
        assert contains("", "")
