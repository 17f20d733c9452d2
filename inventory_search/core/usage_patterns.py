"""Обучение на выборе пользователя: запрос → выбранные элементы.

Классы:
    UsagePatternStore
        Наблюдения по запросам, PersistentKV.

Количество паттернов не ограничено (вытеснения нет): размер растёт
с числом различных запросов, после которых пользователь что-то выбирал.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from inventory_search.domain import (
    DEFAULT_IDENTITY_FIELD,
    FieldPath,
    Item,
    UsagePattern,
    identity_key,
)
from inventory_search.errors import StorageError
from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

PATTERNS_KEY = "usage-patterns"

Listener = Callable[[], None]


class UsagePatternStore:
    """Хранилище usage patterns.

    Загружается из PersistentKV один раз; повреждённые данные дают пустое
    состояние. Каждое наблюдение сохраняет полную карту паттернов.

    Attributes:
        kv: Хранилище.
        key: Ключ в хранилище.
        identity_field: Поле идентичности элемента.
    """

    def __init__(
        self,
        kv: BaseKeyValueStore,
        *,
        key: str = PATTERNS_KEY,
        identity_field: FieldPath = DEFAULT_IDENTITY_FIELD,
    ) -> None:
        self.kv = kv
        self.key = key
        self.identity_field = identity_field
        self._listeners: list[Listener] = []
        self._patterns: dict[str, UsagePattern] = self._load()

    def _load(self) -> dict[str, UsagePattern]:
        try:
            raw = self.kv.load(self.key)
            if raw is None:
                return {}
            if not isinstance(raw, dict):
                raise TypeError(f"expected an object, got {type(raw).__name__}")
            patterns = {
                str(query): UsagePattern.from_dict(data) for query, data in raw.items()
            }
        except (StorageError, TypeError, ValueError, AttributeError) as e:
            logger.error_with_context(
                e, "Failed to load usage patterns", level=logging.WARNING, key=self.key
            )
            return {}

        logger.debug("Usage patterns loaded", patterns=len(patterns))
        return patterns

    @property
    def patterns(self) -> Mapping[str, UsagePattern]:
        """Карта паттернов только для чтения (живое представление)."""
        return self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, query: object) -> bool:
        return isinstance(query, str) and query.lower() in self._patterns

    def get(self, query: str) -> Optional[UsagePattern]:
        return self._patterns.get(query.lower())

    def record(self, query: str, item: Optional[Item]) -> bool:
        """Записывает выбор item после запроса query.

        Пустой запрос, отсутствующий элемент или элемент без ключа
        идентичности игнорируются.

        Returns:
            True если наблюдение записано.
        """
        if not query.strip() or item is None:
            return False

        item_key = identity_key(item, self.identity_field)
        if item_key is None:
            logger.debug("Selected item has no identity key, skipped", query=query)
            return False

        normalized = query.lower()
        pattern = self._patterns.get(normalized)
        if pattern is None:
            pattern = UsagePattern()
            self._patterns[normalized] = pattern
        pattern.record(item_key)

        logger.trace(
            "Usage observed",
            query=normalized,
            item_key=item_key,
            total=pattern.total_count,
        )

        if not self.kv.save(self.key, self.to_dict()):
            logger.warning("Usage patterns were not persisted", key=self.key)
        self._notify()
        return True

    def top_items(self, query: str, limit: int = 5) -> list[tuple[str, int]]:
        """Чаще всего выбираемые элементы по запросу.

        Returns:
            Список (identity, count) по убыванию count.
        """
        pattern = self.get(query)
        if pattern is None:
            return []
        ranked = sorted(pattern.items.items(), key=lambda kv: kv[1], reverse=True)
        return ranked[:limit]

    def to_dict(self) -> dict[str, Any]:
        return {query: pattern.to_dict() for query, pattern in self._patterns.items()}

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписка на изменения; возвращает функцию отписки."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
