"""Peewee + SQLite реализация PersistentKV.

Классы:
    PeeweeKeyValueStore
        Key-value хранилище в таблице kv_store.

Функции:
    init_sqlite_database
        Создаёт SqliteDatabase с настройками для локального хранилища.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from peewee import Database, PeeweeException, SqliteDatabase

from inventory_search.errors import StorageError
from inventory_search.infrastructure.storage.peewee.models import KeyValueModel
from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

MODELS = [KeyValueModel]


def init_sqlite_database(db_path: str | Path) -> SqliteDatabase:
    """Инициализирует SQLite БД для key-value хранилища.

    Args:
        db_path: Путь к файлу БД (":memory:" для тестов).

    Returns:
        Настроенный экземпляр SqliteDatabase.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    logger.debug("Initializing database", path=str(db_path))

    return SqliteDatabase(
        str(db_path),
        pragmas={
            "journal_mode": "wal",
            "synchronous": "normal",
        },
    )


class PeeweeKeyValueStore(BaseKeyValueStore):
    """Key-value хранилище поверх Peewee.

    Модель привязывается к БД через bind_ctx на время каждой операции,
    поэтому несколько хранилищ с разными БД не мешают друг другу.

    Attributes:
        database: Peewee Database.
    """

    def __init__(self, database: Database) -> None:
        self.database = database
        try:
            with self.database.bind_ctx(MODELS):
                self.database.create_tables(MODELS, safe=True)
        except PeeweeException as e:
            # load() сообщит StorageError, save/delete вернут False
            logger.error_with_context(e, "Failed to prepare table kv_store")
        else:
            logger.debug("Table kv_store ready")

    def load(self, key: str) -> Optional[Any]:
        try:
            with self.database.bind_ctx(MODELS):
                row = KeyValueModel.get_or_none(KeyValueModel.key == key)
        except PeeweeException as e:
            raise StorageError(f"Cannot read key '{key}': {e}") from e
        if row is None:
            return None
        try:
            return json.loads(row.value)
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON under key '{key}': {e}") from e

    def save(self, key: str, value: Any) -> bool:
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning("Value is not JSON-serializable", key=key, error=str(e))
            return False

        try:
            with self.database.bind_ctx(MODELS):
                KeyValueModel.insert(
                    key=key, value=payload, updated_at=datetime.now()
                ).on_conflict_replace().execute()
        except PeeweeException as e:
            logger.error_with_context(e, "Failed to save value", key=key)
            return False

        logger.trace("Value saved", key=key, size=len(payload))
        return True

    def delete(self, key: str) -> bool:
        try:
            with self.database.bind_ctx(MODELS):
                removed = KeyValueModel.delete().where(KeyValueModel.key == key).execute()
        except PeeweeException as e:
            logger.error_with_context(e, "Failed to delete value", key=key)
            return False
        return removed > 0

    def set_raw(self, key: str, raw: str) -> None:
        """Записывает сырой текст в обход сериализации (для тестов и миграций)."""
        with self.database.bind_ctx(MODELS):
            KeyValueModel.insert(key=key, value=raw).on_conflict_replace().execute()
