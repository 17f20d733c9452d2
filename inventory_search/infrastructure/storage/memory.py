"""In-memory реализация PersistentKV.

Классы:
    InMemoryKeyValueStore
        Хранилище в словаре процесса (тесты, эфемерные сессии).
"""

import json
from typing import Any, Optional

from inventory_search.errors import StorageError
from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Key-value хранилище в памяти.

    Значения хранятся сериализованными в JSON, как в localStorage:
    load() всегда возвращает независимую копию, а несериализуемое
    значение отклоняется при save().
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value, ensure_ascii=False)

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON under key '{key}': {e}") from e

    def save(self, key: str, value: Any) -> bool:
        try:
            self._data[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning("Value is not JSON-serializable", key=key, error=str(e))
            return False
        logger.trace("Value saved", key=key, size=len(self._data[key]))
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def set_raw(self, key: str, raw: str) -> None:
        """Кладёт сырую строку в обход сериализации (для тестов и миграций)."""
        self._data[key] = raw

    def keys(self) -> list[str]:
        return list(self._data)
