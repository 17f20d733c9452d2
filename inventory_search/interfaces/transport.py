"""Интерфейс сетевого транспорта.

Классы:
    BaseTransport
        ABC для отправки JSON-запросов к REST API инвентаря.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from inventory_search.core.request_coordinator import CancellationToken


class BaseTransport(ABC):
    """Абстрактный транспорт.

    Единственная настоящая асинхронная граница системы. Реализация обязана
    следить за токеном отмены и бросать работу как можно раньше; уже
    выполненные побочные эффекты (записанный POST) не откатываются.
    """

    @abstractmethod
    async def send(
        self,
        method: str,
        endpoint: str,
        body: Optional[Any] = None,
        token: Optional["CancellationToken"] = None,
    ) -> Any:
        """Отправляет запрос и возвращает JSON-ответ.

        Args:
            method: HTTP-метод в верхнем регистре.
            endpoint: Путь относительно базового URL ("/parts/5").
            body: JSON-тело (для мутаций).
            token: Токен кооперативной отмены.

        Returns:
            Десериализованный JSON.

        Raises:
            RequestCancelled: Токен сработал до получения ответа.
            TransportError: Сетевая ошибка или ответ с кодом ошибки.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Освобождает ресурсы транспорта (по умолчанию ничего)."""
        return None


__all__ = ["BaseTransport"]
