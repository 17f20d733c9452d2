"""Файловая реализация PersistentKV (один JSON-документ на хранилище).

Классы:
    JsonFileKeyValueStore
        Хранит все ключи в одном JSON-объекте на диске.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from inventory_search.errors import StorageError
from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)


class JsonFileKeyValueStore(BaseKeyValueStore):
    """Key-value хранилище в плоском JSON-файле.

    Формат файла: {"search-history": [...], "usage-patterns": {...}}.
    Запись атомарна на уровне файла (temp-файл + os.replace).

    Attributes:
        path: Путь к JSON-файлу.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        logger.debug("JSON key-value store created", path=str(self.path))

    def _read_document(self) -> dict[str, Any]:
        """Читает весь документ.

        Raises:
            StorageError: Файл не читается или не является JSON-объектом.
        """
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        except ValueError as e:
            raise StorageError(f"Malformed JSON in {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageError(f"Top-level JSON in {self.path} is not an object")
        return document

    def _write_document(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read_for_update(self) -> dict[str, Any]:
        try:
            return self._read_document()
        except StorageError as e:
            # Повреждённый файл перезаписывается целиком
            logger.warning("Overwriting malformed store file", path=str(self.path), error=str(e))
            return {}

    def load(self, key: str) -> Optional[Any]:
        return self._read_document().get(key)

    def save(self, key: str, value: Any) -> bool:
        document = self._read_for_update()
        document[key] = value
        try:
            self._write_document(document)
        except (OSError, TypeError, ValueError) as e:
            logger.error_with_context(e, "Failed to write store file", path=str(self.path), key=key)
            return False
        logger.trace("Value saved", key=key, path=str(self.path))
        return True

    def delete(self, key: str) -> bool:
        document = self._read_for_update()
        if key not in document:
            return False
        del document[key]
        try:
            self._write_document(document)
        except OSError as e:
            logger.error_with_context(e, "Failed to write store file", path=str(self.path), key=key)
            return False
        return True
