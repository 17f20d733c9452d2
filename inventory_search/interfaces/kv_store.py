"""Интерфейс персистентного key-value хранилища.

Классы:
    BaseKeyValueStore
        ABC для хранилищ истории поиска и usage patterns.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseKeyValueStore(ABC):
    """Абстрактное key-value хранилище со строковыми ключами и JSON-значениями.

    Заменяет localStorage браузера: реализации бывают in-memory (тесты),
    файловые и SQLite. Гарантий durability сверх "записали — прочитали" нет.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """Читает значение по ключу.

        Args:
            key: Фиксированный идентификатор ("search-history").

        Returns:
            Десериализованное JSON-значение или None если ключа нет.

        Raises:
            StorageError: Если сохранённые данные повреждены или хранилище
                не читается.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, key: str, value: Any) -> bool:
        """Перезаписывает значение по ключу.

        Args:
            key: Идентификатор.
            value: JSON-сериализуемое значение.

        Returns:
            True при успехе, False если запись не удалась.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Удаляет ключ.

        Returns:
            True если ключ существовал и удалён.
        """
        raise NotImplementedError


__all__ = ["BaseKeyValueStore"]
