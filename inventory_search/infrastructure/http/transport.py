"""HTTP-транспорт на httpx.

Классы:
    HttpxTransport
        BaseTransport поверх httpx.AsyncClient с кооперативной отменой.
"""

import asyncio
import contextlib
from typing import Any, Optional

import httpx

from inventory_search.core.request_coordinator import CancellationToken
from inventory_search.errors import RequestCancelled, TransportError
from inventory_search.interfaces.transport import BaseTransport
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}


class HttpxTransport(BaseTransport):
    """JSON-транспорт к REST API инвентаря.

    Запрос выполняется отдельной задачей и гонится с токеном отмены:
    если токен срабатывает раньше, задача отменяется и бросается
    RequestCancelled. Ответ с кодом вне 2xx, сетевая ошибка или
    невалидный JSON превращаются в TransportError.

    Attributes:
        base_url: Базовый URL API ("http://localhost:3001/api").
        timeout: Таймаут запроса в секундах.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        headers: Optional[dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={**DEFAULT_HEADERS, **(headers or {})},
        )

    async def send(
        self,
        method: str,
        endpoint: str,
        body: Optional[Any] = None,
        token: Optional[CancellationToken] = None,
    ) -> Any:
        if token is not None:
            token.raise_if_cancelled()

        logger.trace("HTTP request", method=method, endpoint=endpoint)
        request = asyncio.ensure_future(
            self._client.request(method, endpoint, json=body)
        )

        if token is None:
            response = await self._await_response(request, endpoint)
        else:
            cancelled = asyncio.ensure_future(token.wait())
            try:
                await asyncio.wait(
                    {request, cancelled}, return_when=asyncio.FIRST_COMPLETED
                )
            except asyncio.CancelledError:
                request.cancel()
                raise
            finally:
                cancelled.cancel()

            if not request.done():
                request.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await request
                raise RequestCancelled(f"{method} {endpoint} cancelled")
            response = await self._await_response(request, endpoint)

        return self._decode(response, method, endpoint)

    @staticmethod
    async def _await_response(
        request: "asyncio.Future[httpx.Response]", endpoint: str
    ) -> httpx.Response:
        try:
            return await request
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__, endpoint=endpoint) from e

    @staticmethod
    def _decode(response: httpx.Response, method: str, endpoint: str) -> Any:
        if not response.is_success:
            logger.debug(
                "HTTP error response",
                method=method,
                endpoint=endpoint,
                status=response.status_code,
            )
            raise TransportError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                endpoint=endpoint,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "Invalid JSON in response",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
