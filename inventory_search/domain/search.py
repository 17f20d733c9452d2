"""DTO слоя поиска и подсказок.

Классы:
    ScoredMatch
        Элемент с релевантностью и набором совпавших полей.
    SuggestionType
        Источник подсказки (history/item/category/pattern).
    SuggestionEntry
        Одна подсказка в выпадающем списке.
    HistoryEntry
        Запись истории поиска.
    UsagePattern
        Наблюдения "запрос → выбранные элементы".
    CategorySummary
        Категория с количеством элементов.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from inventory_search.domain.item import FieldPath, Item


@dataclass(frozen=True)
class ScoredMatch:
    """Результат скоринга одного элемента.

    Пересчитывается на каждый запрос, не хранится.

    Attributes:
        item: Исходный элемент (та же ссылка, не копия).
        score: Неотрицательная релевантность; 0 означает "не найдено".
        matched_fields: Поля, давшие совпадение (каждое не более одного раза).
    """

    item: Item
    score: int
    matched_fields: tuple[FieldPath, ...] = ()

    @property
    def is_match(self) -> bool:
        return self.score > 0


class SuggestionType(str, Enum):
    """Источник подсказки.

    Attributes:
        HISTORY: Недавний поисковый запрос.
        ITEM: Значение поля элемента, содержащее запрос.
        CATEGORY: Название категории.
        PATTERN: Ранее наблюдавшийся запрос из usage patterns.
    """

    HISTORY = "history"
    ITEM = "item"
    CATEGORY = "category"
    PATTERN = "pattern"


@dataclass(frozen=True)
class SuggestionEntry:
    """Подсказка для поля поиска.

    Attributes:
        type: Источник подсказки.
        text: Текст, который станет запросом при выборе.
        count: Частота (история, размер категории, totalCount паттерна).
        source_item: Элемент, из поля которого взят текст (только ITEM).
        field: Поле элемента (только ITEM).
    """

    type: SuggestionType
    text: str
    count: Optional[int] = None
    source_item: Optional[Item] = field(default=None, compare=False)
    field: Optional[FieldPath] = None


@dataclass
class HistoryEntry:
    """Запись истории поиска.

    Attributes:
        term: Поисковый запрос (как ввёл пользователь).
        timestamp: Время последнего использования, epoch миллисекунды.
        count: Сколько раз запрос добавлялся в историю.
    """

    term: str
    timestamp: int
    count: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"term": self.term, "timestamp": self.timestamp, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """Восстанавливает запись из JSON.

        Raises:
            KeyError: Нет поля term.
            TypeError, ValueError: Поля неверного типа.
        """
        term = data["term"]
        if not isinstance(term, str):
            raise TypeError(f"history term must be a string, got {type(term).__name__}")
        return cls(
            term=term,
            timestamp=int(data.get("timestamp", 0)),
            count=max(1, int(data.get("count", 1))),
        )


@dataclass
class UsagePattern:
    """Что пользователь выбирал после конкретного запроса.

    Attributes:
        items: identity элемента → число выборов.
        total_count: Сумма всех выборов по запросу.
    """

    items: dict[str, int] = field(default_factory=dict)
    total_count: int = 0

    def record(self, item_key: str) -> None:
        self.items[item_key] = self.items.get(item_key, 0) + 1
        self.total_count += 1

    def count_for(self, item_key: Optional[str]) -> int:
        if item_key is None:
            return 0
        return self.items.get(item_key, 0)

    def to_dict(self) -> dict[str, Any]:
        # Формат хранения совместим с web-клиентом: {"items": {...}, "totalCount": n}
        return {"items": dict(self.items), "totalCount": self.total_count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UsagePattern":
        raw_items = data.get("items") or {}
        if not isinstance(raw_items, dict):
            raise TypeError("pattern items must be an object")
        items = {str(key): int(value) for key, value in raw_items.items()}
        total = data.get("totalCount")
        return cls(
            items=items,
            total_count=int(total) if total is not None else sum(items.values()),
        )


@dataclass(frozen=True)
class CategorySummary:
    """Категория с элементами.

    Attributes:
        name: Название категории ("Uncategorized" для элементов без неё).
        count: Количество элементов.
        items: Элементы категории в порядке коллекции.
    """

    name: str
    count: int
    items: tuple[Item, ...] = ()
