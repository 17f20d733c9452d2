"""Фильтры и сортировка поверх ранжированного поиска.

Классы:
    SortDirection
        Направление сортировки.
    AdvancedSearch
        Фильтры по полям + сортировка результатов RankedSearch.
"""

from datetime import date, datetime
from enum import Enum
from functools import cmp_to_key
from numbers import Number
from typing import Any, Optional

from inventory_search.core.ranked_search import RankedSearch
from inventory_search.domain import FieldPath, Item, resolve_field_path

ALL_VALUES = "all"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _compare_values(a: Any, b: Any) -> int:
    """Сравнение разнотипных значений полей.

    Строки — без учёта регистра, числа — численно, даты — хронологически,
    остальное — по строковому представлению.
    """
    if isinstance(a, str) and isinstance(b, str):
        left, right = a.casefold(), b.casefold()
    elif (
        isinstance(a, Number)
        and isinstance(b, Number)
        and not isinstance(a, bool)
        and not isinstance(b, bool)
    ):
        left, right = a, b
    elif isinstance(a, (datetime, date)) and type(a) is type(b):
        left, right = a, b
    else:
        left, right = str(a).casefold(), str(b).casefold()
    return (left > right) - (left < right)


class AdvancedSearch:
    """Фильтрация и сортировка результатов ранжированного поиска.

    Фильтр — равенство значения поля; список означает "одно из".
    Пустые значения и "all" фильтр не применяют. Сортировка стабильна,
    при сортировке ранжирование по score заменяется порядком поля.

    Attributes:
        search: Нижележащий RankedSearch.
        filters: Активные фильтры (поле → значение или список значений).
        sort_by: Поле сортировки (None — порядок ранжирования).
        sort_direction: Направление сортировки.
    """

    def __init__(
        self,
        search: RankedSearch,
        *,
        sort_by: Optional[FieldPath] = None,
    ) -> None:
        self.search = search
        self.filters: dict[FieldPath, Any] = {}
        self.sort_by = sort_by
        self.sort_direction = SortDirection.ASC

    # === Фильтры ===

    def update_filter(self, field: FieldPath, value: Any) -> None:
        self.filters[field] = value

    def clear_filter(self, field: FieldPath) -> None:
        self.filters.pop(field, None)

    def clear_all_filters(self) -> None:
        self.filters.clear()

    @staticmethod
    def _is_active(value: Any) -> bool:
        if value is None or value == ALL_VALUES:
            return False
        if isinstance(value, (str, list, tuple, set)) and not value:
            return False
        return True

    def _passes(self, item: Item) -> bool:
        for field, expected in self.filters.items():
            if not self._is_active(expected):
                continue
            actual = resolve_field_path(item, field)
            if isinstance(expected, (list, tuple, set)):
                if actual not in expected:
                    return False
            elif actual != expected:
                return False
        return True

    # === Сортировка ===

    def toggle_sort(self, field: FieldPath) -> None:
        """То же поле — смена направления, новое поле — по возрастанию."""
        if self.sort_by == field:
            self.sort_direction = (
                SortDirection.DESC
                if self.sort_direction is SortDirection.ASC
                else SortDirection.ASC
            )
        else:
            self.sort_by = field
            self.sort_direction = SortDirection.ASC

    def _sorted(self, items: list[Item]) -> list[Item]:
        if not self.sort_by:
            return items
        sort_field = self.sort_by

        def compare(a: Item, b: Item) -> int:
            return _compare_values(
                resolve_field_path(a, sort_field), resolve_field_path(b, sort_field)
            )

        return sorted(
            items,
            key=cmp_to_key(compare),
            reverse=self.sort_direction is SortDirection.DESC,
        )

    # === Вывод ===

    @property
    def results(self) -> list[Item]:
        filtered = [item for item in self.search.results if self._passes(item)]
        return self._sorted(filtered)

    @property
    def result_count(self) -> int:
        return len(self.results)

    @property
    def total_count(self) -> int:
        return len(self.search.items)

    def filter_options(self, field: FieldPath) -> list[Any]:
        """Уникальные непустые значения поля по всей коллекции, отсортированные."""
        values: list[Any] = []
        for item in self.search.items:
            value = resolve_field_path(item, field)
            if value is not None and value not in values:
                values.append(value)
        return sorted(values, key=cmp_to_key(_compare_values))


__all__ = ["AdvancedSearch", "SortDirection", "ALL_VALUES"]
