"""Кэш ответов API с TTL.

Классы:
    ResponseCache
        Ключ → (данные, метка времени), ленивое истечение.

Функции:
    make_cache_key
        Ключ кэша из метода, эндпоинта и тела запроса.
    resource_prefix
        Первый сегмент пути эндпоинта (класс ресурса для инвалидации).
"""

import json
import time
from collections import OrderedDict
from typing import Any, Optional

from inventory_search.core.debounce import Clock
from inventory_search.domain import CacheEntry
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TTL = 300.0

_MISSING = object()


def make_cache_key(method: str, endpoint: str, body: Optional[Any] = None) -> str:
    """Ключ вида "GET:/parts:{}" (тело сериализуется компактно, None → {})."""
    payload = json.dumps(
        body if body is not None else {},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return f"{method}:{endpoint}:{payload}"


def resource_prefix(endpoint: str) -> str:
    """"/parts/5" → "parts"; "/" → "" (инвалидирует весь кэш)."""
    return endpoint.lstrip("/").split("/", 1)[0].split("?", 1)[0]


class ResponseCache:
    """Кэш JSON-ответов.

    Запись валидна, пока now - timestamp <= ttl; протухшая запись удаляется
    при обращении (фоновой очистки нет). При заданном max_entries самая
    старая по вставке запись вытесняется.

    Attributes:
        ttl: Время жизни записи в секундах.
        max_entries: Верхняя граница размера (None — без ограничения).
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        *,
        clock: Optional[Clock] = None,
        max_entries: Optional[int] = None,
    ) -> None:
        if ttl < 0:
            raise ValueError("ttl must be non-negative")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")

        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock or time.monotonic
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str, default: Any = None) -> Any:
        """Значение по ключу или default при промахе/истечении."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return default

        if entry.is_expired(self._clock(), self.ttl):
            del self._entries[key]
            self._misses += 1
            self._evictions += 1
            logger.trace("Cache entry expired", key=key)
            return default

        self._hits += 1
        logger.trace("Cache hit", key=key)
        return entry.data

    def lookup(self, key: str) -> tuple[bool, Any]:
        """Как get, но различает промах и закэшированный None.

        Returns:
            (True, данные) при попадании, (False, None) при промахе.
        """
        value = self.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def has(self, key: str) -> bool:
        return self.lookup(key)[0]

    def set(self, key: str, data: Any) -> None:
        """Перезаписывает значение с текущей меткой времени."""
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(data=data, timestamp=self._clock())

        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.trace("Cache entry evicted", key=evicted)

    def clear(self, pattern: Optional[str] = None) -> int:
        """Удаляет записи.

        Args:
            pattern: Подстрока ключа; None — очистить всё.

        Returns:
            Количество удалённых записей.
        """
        if pattern is None:
            removed = len(self._entries)
            self._entries.clear()
        else:
            doomed = [key for key in self._entries if pattern in key]
            for key in doomed:
                del self._entries[key]
            removed = len(doomed)

        logger.debug("Cache cleared", pattern=pattern, removed=removed)
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def stats(self) -> dict[str, int]:
        return {
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "size": len(self._entries),
        }
