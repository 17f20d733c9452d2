"""Доменный слой с чистыми объектами данных (DTO).

Классы:
    ScoredMatch
        Элемент с релевантностью.
    SuggestionType, SuggestionEntry
        Подсказки поиска.
    HistoryEntry
        Запись истории поиска.
    UsagePattern
        Наблюдения "запрос → выбранный элемент".
    CategorySummary
        Категория с количеством элементов.
    CacheEntry
        Закэшированный ответ.
    RequestOutcome
        Исход запроса без данных (ABORTED).

Функции:
    resolve_field_path, field_text, identity_key
        Доступ к полям элементов.
"""

from inventory_search.domain.item import (
    Item,
    FieldPath,
    DEFAULT_IDENTITY_FIELD,
    resolve_field_path,
    stringify,
    field_text,
    identity_key,
)
from inventory_search.domain.search import (
    ScoredMatch,
    SuggestionType,
    SuggestionEntry,
    HistoryEntry,
    UsagePattern,
    CategorySummary,
)
from inventory_search.domain.cache import CacheEntry, RequestOutcome, ABORTED

__all__ = [
    "Item",
    "FieldPath",
    "DEFAULT_IDENTITY_FIELD",
    "resolve_field_path",
    "stringify",
    "field_text",
    "identity_key",
    "ScoredMatch",
    "SuggestionType",
    "SuggestionEntry",
    "HistoryEntry",
    "UsagePattern",
    "CategorySummary",
    "CacheEntry",
    "RequestOutcome",
    "ABORTED",
]
