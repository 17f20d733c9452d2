"""Иерархия исключений inventory_search.

Классы:
    InventorySearchError
        Базовое исключение библиотеки.
    TransportError
        Сетевая ошибка или HTTP-ответ с кодом ошибки.
    RequestCancelled
        Запрос вытеснен более новым и отменён через CancellationToken.
    StorageError
        Сохранённое значение PersistentKV не удалось разобрать.
"""

from typing import Optional


class InventorySearchError(Exception):
    """Базовое исключение inventory_search."""


class TransportError(InventorySearchError):
    """Ошибка транспорта (сеть, таймаут, HTTP 4xx/5xx, невалидный JSON).

    Attributes:
        status_code: HTTP-статус ответа (None для сетевых ошибок).
        endpoint: Эндпоинт, на котором произошла ошибка.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class RequestCancelled(InventorySearchError):
    """Запрос отменён кооперативно (токен отмены сработал)."""


class StorageError(InventorySearchError):
    """Повреждённые данные в PersistentKV (невалидный JSON и т.п.)."""
