"""История поисковых запросов.

Классы:
    SearchHistoryStore
        Последние запросы (most-recent-first, не больше limit), PersistentKV.
"""

import logging
import time
from typing import Callable, Optional

from inventory_search.domain import HistoryEntry
from inventory_search.errors import StorageError
from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

HISTORY_KEY = "search-history"
DEFAULT_HISTORY_LIMIT = 10

Listener = Callable[[], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


class SearchHistoryStore:
    """Недавние поисковые запросы.

    Состояние загружается из PersistentKV один раз при создании;
    повреждённые данные логируются и дают пустую историю. Каждая мутация
    сохраняет полный список; ошибка записи не откатывает состояние в памяти.

    Attributes:
        kv: Хранилище.
        key: Ключ в хранилище.
        limit: Максимальная длина истории.
    """

    def __init__(
        self,
        kv: BaseKeyValueStore,
        *,
        key: str = HISTORY_KEY,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock_ms: Optional[Callable[[], int]] = None,
    ) -> None:
        self.kv = kv
        self.key = key
        self.limit = limit
        self._clock_ms = clock_ms or _now_ms
        self._listeners: list[Listener] = []
        self._entries: list[HistoryEntry] = self._load()

    def _load(self) -> list[HistoryEntry]:
        try:
            raw = self.kv.load(self.key)
            if raw is None:
                return []
            if not isinstance(raw, list):
                raise TypeError(f"expected a list, got {type(raw).__name__}")
            entries = [HistoryEntry.from_dict(entry) for entry in raw]
        except (StorageError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error_with_context(
                e, "Failed to load search history", level=logging.WARNING, key=self.key
            )
            return []

        logger.debug("Search history loaded", entries=len(entries))
        return entries[: self.limit]

    @property
    def entries(self) -> list[HistoryEntry]:
        """Копия истории, самые свежие первыми."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def recent(self, limit: int) -> list[HistoryEntry]:
        return self._entries[:limit]

    def add(self, term: str) -> Optional[HistoryEntry]:
        """Добавляет запрос в начало истории.

        Пустой или состоящий из пробелов запрос игнорируется. Существующая
        запись с тем же текстом удаляется, новая получает count + 1.

        Args:
            term: Поисковый запрос (сравнивается точно, без нормализации).

        Returns:
            Новая запись или None если term пустой.
        """
        if not term.strip():
            return None

        previous = next((e for e in self._entries if e.term == term), None)
        entry = HistoryEntry(
            term=term,
            timestamp=self._clock_ms(),
            count=(previous.count if previous else 0) + 1,
        )
        remaining = [e for e in self._entries if e.term != term]
        self._entries = [entry, *remaining][: self.limit]

        self._persist()
        self._notify()
        return entry

    def clear(self) -> None:
        """Очищает историю и удаляет ключ из хранилища."""
        self._entries = []
        self.kv.delete(self.key)
        logger.info("Search history cleared")
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписка на изменения; возвращает функцию отписки."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _persist(self) -> None:
        if not self.kv.save(self.key, [e.to_dict() for e in self._entries]):
            logger.warning("Search history was not persisted", key=self.key)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
