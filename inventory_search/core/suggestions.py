"""Подсказки поиска и навигация по ним с клавиатуры.

Классы:
    SuggestionEngine
        Сливает историю, совпадения в элементах, категории и usage patterns.
    NavigationKey
        Клавиши навигации по списку подсказок.
    SuggestionNavigator
        Курсор выбора и видимость выпадающего списка.

Функции:
    categories
        Категории с количеством элементов.
    word_completions
        Слова из полей элементов, дополняющие запрос.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Callable, Optional

from inventory_search.core.history import SearchHistoryStore
from inventory_search.core.usage_patterns import UsagePatternStore
from inventory_search.domain import (
    CategorySummary,
    FieldPath,
    Item,
    SuggestionEntry,
    SuggestionType,
    field_text,
    resolve_field_path,
    stringify,
)
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORY_FIELD = "category"
UNCATEGORIZED = "Uncategorized"
HISTORY_PREVIEW = 5
SUGGESTION_LIMIT = 8


def categories(
    items: Sequence[Item],
    category_field: FieldPath = DEFAULT_CATEGORY_FIELD,
) -> list[CategorySummary]:
    """Категории с элементами, по убыванию количества.

    Элементы без категории попадают в "Uncategorized".
    """
    grouped: dict[str, list[Item]] = {}
    for item in items:
        name = stringify(resolve_field_path(item, category_field)) or UNCATEGORIZED
        grouped.setdefault(name, []).append(item)

    summaries = [
        CategorySummary(name=name, count=len(members), items=tuple(members))
        for name, members in grouped.items()
    ]
    return sorted(summaries, key=lambda s: s.count, reverse=True)


def word_completions(
    items: Sequence[Item],
    fields: Sequence[FieldPath],
    query: str,
    limit: int = 5,
) -> list[str]:
    """Целые слова из полей, содержащие запрос и длиннее него.

    Запрос короче двух символов подсказок не даёт.

    Returns:
        До limit уникальных слов в порядке обнаружения.
    """
    if not query.strip() or len(query) < 2:
        return []

    needle = query.lower()
    words: list[str] = []
    for item in items:
        for path in fields:
            value = stringify(resolve_field_path(item, path))
            if needle not in value.lower():
                continue
            for word in value.split():
                if needle in word.lower() and len(word) > len(query) and word not in words:
                    words.append(word)
    return words[:limit]


class SuggestionEngine:
    """Генератор подсказок.

    Для пустого запроса — до history_preview последних запросов из истории.
    Для непустого, в фиксированном порядке обнаружения:
        1. значения полей элементов, содержащие запрос (текст в нижнем
           регистре, без повторов);
        2. категории, содержащие запрос, с числом элементов;
        3. ключи usage patterns, содержащие запрос, с totalCount.
    Затем стабильная сортировка: история первой, далее по убыванию count
    (отсутствующий count = 0); обрезка до limit.

    Attributes:
        fields: Поля элементов для подсказок.
        history: Хранилище истории.
        patterns: Хранилище usage patterns.
        category_field: Поле категории.
        limit: Максимум подсказок.
        history_preview: Сколько записей истории показывать для пустого запроса.
    """

    def __init__(
        self,
        fields: Sequence[FieldPath],
        history: SearchHistoryStore,
        patterns: UsagePatternStore,
        *,
        category_field: FieldPath = DEFAULT_CATEGORY_FIELD,
        limit: int = SUGGESTION_LIMIT,
        history_preview: int = HISTORY_PREVIEW,
    ) -> None:
        self.fields = tuple(fields)
        self.history = history
        self.patterns = patterns
        self.category_field = category_field
        self.limit = limit
        self.history_preview = history_preview

    def generate(self, query: str, items: Sequence[Item]) -> list[SuggestionEntry]:
        """Строит список подсказок для сырого (не debounced) запроса."""
        if not query.strip():
            return [
                SuggestionEntry(
                    type=SuggestionType.HISTORY, text=entry.term, count=entry.count
                )
                for entry in self.history.recent(self.history_preview)
            ]

        term = query.lower()
        candidates: list[SuggestionEntry] = []
        candidates.extend(self._item_matches(term, items))
        candidates.extend(self._category_matches(term, items))
        candidates.extend(self._pattern_matches(term))

        ranked = sorted(
            candidates,
            key=lambda s: (s.type is not SuggestionType.HISTORY, -(s.count or 0)),
        )
        logger.trace("Suggestions generated", candidates=len(candidates))
        return ranked[: self.limit]

    def _item_matches(self, term: str, items: Sequence[Item]) -> list[SuggestionEntry]:
        seen: set[str] = set()
        matches: list[SuggestionEntry] = []
        for item in items:
            for path in self.fields:
                value = field_text(item, path)
                if term in value and value not in seen:
                    seen.add(value)
                    matches.append(
                        SuggestionEntry(
                            type=SuggestionType.ITEM,
                            text=value,
                            source_item=item,
                            field=path,
                        )
                    )
        return matches

    def _category_matches(
        self, term: str, items: Sequence[Item]
    ) -> list[SuggestionEntry]:
        counts: dict[str, int] = {}
        for item in items:
            category = stringify(resolve_field_path(item, self.category_field))
            if category:
                counts[category] = counts.get(category, 0) + 1

        return [
            SuggestionEntry(type=SuggestionType.CATEGORY, text=category, count=count)
            for category, count in counts.items()
            if term in category.lower()
        ]

    def _pattern_matches(self, term: str) -> list[SuggestionEntry]:
        return [
            SuggestionEntry(
                type=SuggestionType.PATTERN, text=query, count=pattern.total_count
            )
            for query, pattern in self.patterns.patterns.items()
            if term in query
        ]


class NavigationKey(str, Enum):
    DOWN = "ArrowDown"
    UP = "ArrowUp"
    ENTER = "Enter"
    ESCAPE = "Escape"

    @classmethod
    def parse(cls, key: "str | NavigationKey") -> Optional["NavigationKey"]:
        """Разбирает имя клавиши ("ArrowDown", "down", "Esc")."""
        if isinstance(key, NavigationKey):
            return key
        normalized = key.strip().lower()
        aliases = {
            "arrowdown": cls.DOWN,
            "down": cls.DOWN,
            "arrowup": cls.UP,
            "up": cls.UP,
            "enter": cls.ENTER,
            "return": cls.ENTER,
            "escape": cls.ESCAPE,
            "esc": cls.ESCAPE,
        }
        return aliases.get(normalized)


class SuggestionNavigator:
    """Курсор по списку подсказок.

    Курсор -1 означает "ничего не выбрано". Down/Up двигают курсор по кругу,
    Enter с валидным курсором вызывает on_select, Escape скрывает и очищает
    список.
    Если список пуст или скрыт, клавиши игнорируются.

    Attributes:
        suggestions: Текущий список подсказок.
        cursor: Индекс выбранной подсказки или -1.
        visible: Показан ли список.
    """

    def __init__(
        self, on_select: Optional[Callable[[SuggestionEntry], None]] = None
    ) -> None:
        self.suggestions: list[SuggestionEntry] = []
        self.cursor = -1
        self.visible = False
        self._on_select = on_select

    def set_suggestions(self, suggestions: list[SuggestionEntry]) -> None:
        """Заменяет список; курсор сбрасывается, если список изменился."""
        if suggestions != self.suggestions:
            self.cursor = -1
        self.suggestions = suggestions

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.cursor = -1

    def dismiss(self) -> None:
        """Скрывает и очищает список без выбора."""
        self.hide()
        self.suggestions = []

    @property
    def selected(self) -> Optional[SuggestionEntry]:
        if 0 <= self.cursor < len(self.suggestions):
            return self.suggestions[self.cursor]
        return None

    def on_key(self, key: "str | NavigationKey") -> bool:
        """Обрабатывает клавишу.

        Returns:
            True если клавиша обработана (вызывающему стоит подавить действие
            по умолчанию).
        """
        if not self.visible or not self.suggestions:
            return False

        parsed = NavigationKey.parse(key)
        size = len(self.suggestions)

        if parsed is NavigationKey.DOWN:
            self.cursor = self.cursor + 1 if self.cursor < size - 1 else 0
        elif parsed is NavigationKey.UP:
            self.cursor = self.cursor - 1 if self.cursor > 0 else size - 1
        elif parsed is NavigationKey.ENTER:
            entry = self.selected
            if entry is not None and self._on_select is not None:
                self._on_select(entry)
        elif parsed is NavigationKey.ESCAPE:
            self.dismiss()
        else:
            return False
        return True
