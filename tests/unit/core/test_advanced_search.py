"""Тесты AdvancedSearch (inventory_search.core.advanced_search)."""

from inventory_search.core.advanced_search import AdvancedSearch, SortDirection
from inventory_search.core.ranked_search import RankedSearch

FIELDS = ["partNumber", "description", "category", "shelf"]


def make_advanced(parts, query=""):
    return AdvancedSearch(RankedSearch(parts, FIELDS, initial_query=query))


class TestFilters:
    """Фильтры по полям."""

    def test_equality_filter(self, parts):
        advanced = make_advanced(parts)
        advanced.update_filter("category", "Filters")

        assert [item["id"] for item in advanced.results] == [1, 2]
        assert advanced.result_count == 2
        assert advanced.total_count == 5

    def test_list_means_any_of(self, parts):
        advanced = make_advanced(parts)
        advanced.update_filter("category", ["Belts", "Bearings"])

        assert [item["id"] for item in advanced.results] == [3, 4]

    def test_inactive_values(self, parts):
        """"all", "" и None фильтр не применяют."""
        advanced = make_advanced(parts)
        for value in ("all", "", None, []):
            advanced.update_filter("category", value)
            assert len(advanced.results) == 5

    def test_filters_apply_to_ranked_results(self, parts):
        advanced = make_advanced(parts, query="filter")
        advanced.update_filter("shelf", "A2")

        assert [item["partNumber"] for item in advanced.results] == ["AF-200"]

    def test_clear_filters(self, parts):
        advanced = make_advanced(parts)
        advanced.update_filter("category", "Filters")
        advanced.update_filter("shelf", "A1")
        advanced.clear_filter("shelf")
        assert len(advanced.results) == 2

        advanced.clear_all_filters()
        assert len(advanced.results) == 5


class TestSorting:
    """Сортировка результатов."""

    def test_numeric_sort(self, parts):
        advanced = make_advanced(parts)
        advanced.toggle_sort("quantity")

        assert [item["quantity"] for item in advanced.results] == [0, 4, 7, 12, 100]

    def test_toggle_same_field_reverses(self, parts):
        advanced = make_advanced(parts)
        advanced.toggle_sort("quantity")
        advanced.toggle_sort("quantity")

        assert advanced.sort_direction is SortDirection.DESC
        assert advanced.results[0]["quantity"] == 100

    def test_new_field_resets_direction(self, parts):
        advanced = make_advanced(parts)
        advanced.toggle_sort("quantity")
        advanced.toggle_sort("quantity")
        advanced.toggle_sort("description")

        assert advanced.sort_direction is SortDirection.ASC
        assert advanced.results[0]["description"] == "Air Filter"

    def test_string_sort_is_case_insensitive(self):
        items = [{"name": "beta"}, {"name": "Alpha"}, {"name": "gamma"}]
        advanced = AdvancedSearch(RankedSearch(items, ["name"]), sort_by="name")

        assert [item["name"] for item in advanced.results] == ["Alpha", "beta", "gamma"]

    def test_without_sort_keeps_ranking(self, parts):
        advanced = make_advanced(parts, query="a2")
        assert advanced.results[0]["partNumber"] == "AF-200"


class TestFilterOptions:
    """Значения для выпадающих фильтров."""

    def test_unique_sorted_values(self, parts):
        advanced = make_advanced(parts)
        assert advanced.filter_options("category") == ["Bearings", "Belts", "Filters"]

    def test_numeric_options(self, parts):
        advanced = make_advanced(parts)
        assert advanced.filter_options("quantity") == [0, 4, 7, 12, 100]
