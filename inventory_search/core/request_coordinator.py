"""Координация сетевых запросов: кэш, вытеснение, инвалидация.

Классы:
    CancellationToken
        Кооперативная отмена поверх asyncio.Event.
    RequestCoordinator
        Обёртка над транспортом с ResponseCache и отменой предыдущего запроса.
"""

import asyncio
from typing import Any, Optional, Union

from inventory_search.core.response_cache import (
    ResponseCache,
    make_cache_key,
    resource_prefix,
)
from inventory_search.domain import ABORTED, RequestOutcome
from inventory_search.errors import RequestCancelled, TransportError
from inventory_search.interfaces.transport import BaseTransport
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

RequestResult = Union[Any, RequestOutcome]


class CancellationToken:
    """Токен кооперативной отмены.

    Транспорт проверяет cancelled или ждёт wait() параллельно с запросом.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        """Ждёт срабатывания токена."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled("Request was superseded")


class RequestCoordinator:
    """Точка входа для всех сетевых запросов.

    GET с включённым кэшем возвращает попадание сразу. Иначе отменяется
    непосредственно предыдущий запрос этого координатора, выполняется новый;
    успешный GET кэшируется, успешная мутация (не GET) очищает все ключи
    своего класса ресурса ("/parts/5" → clear("parts")). Отменённый запрос
    возвращает ABORTED, прочие ошибки транспорта пробрасываются.

    Attributes:
        transport: Сетевой транспорт.
        cache: Кэш ответов.
        last_error: Последняя ошибка транспорта (сбрасывается при успехе).
    """

    def __init__(self, transport: BaseTransport, cache: ResponseCache) -> None:
        self.transport = transport
        self.cache = cache
        self.last_error: Optional[TransportError] = None
        self._current: Optional[CancellationToken] = None
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        """Есть ли незавершённые запросы."""
        return self._in_flight > 0

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        body: Optional[Any] = None,
        use_cache: bool = True,
        invalidate_cache: bool = False,
        cancel_previous: bool = True,
    ) -> RequestResult:
        """Выполняет запрос.

        Args:
            method: HTTP-метод (регистр не важен).
            endpoint: Путь относительно базового URL.
            body: JSON-тело.
            use_cache: Читать и писать кэш для GET.
            invalidate_cache: Не читать кэш, но сохранить свежий ответ.
            cancel_previous: Участвовать в вытеснении; False для пакетных
                операций, которые должны выполниться все.

        Returns:
            JSON-ответ или ABORTED, если запрос был вытеснен.

        Raises:
            TransportError: Сетевая ошибка или HTTP-ответ с кодом ошибки.
        """
        method = method.upper()
        is_get = method == "GET"
        cache_key = make_cache_key(method, endpoint, body)

        if is_get and use_cache and not invalidate_cache:
            hit, data = self.cache.lookup(cache_key)
            if hit:
                logger.debug("Served from cache", endpoint=endpoint)
                return data

        token = CancellationToken()
        if cancel_previous:
            if self._current is not None:
                self._current.cancel()
                logger.trace("Previous request cancelled", endpoint=endpoint)
            self._current = token

        self._in_flight += 1
        try:
            data = await self.transport.send(method, endpoint, body=body, token=token)
        except RequestCancelled:
            logger.debug("Request aborted", method=method, endpoint=endpoint)
            return ABORTED
        except TransportError as e:
            self.last_error = e
            logger.error_with_context(
                e, "Request failed", method=method, endpoint=endpoint
            )
            raise
        finally:
            self._in_flight -= 1
            if self._current is token:
                self._current = None

        self.last_error = None

        if not is_get:
            removed = self.cache.clear(resource_prefix(endpoint))
            logger.debug(
                "Cache invalidated after mutation",
                method=method,
                endpoint=endpoint,
                removed=removed,
            )

        # Транспорт мог не заметить отмену; вытесненный ответ не отдаём и не кэшируем
        if token.cancelled:
            logger.debug("Late response of superseded request", endpoint=endpoint)
            return ABORTED

        if is_get and use_cache:
            self.cache.set(cache_key, data)
        return data

    def cancel_pending(self) -> None:
        """Отменяет текущий вытесняемый запрос, если он есть."""
        if self._current is not None:
            self._current.cancel()
            self._current = None

    def invalidate(self, pattern: Optional[str] = None) -> int:
        return self.cache.clear(pattern)
