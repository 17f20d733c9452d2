"""Клиент REST API инвентаря.

Классы:
    InventoryClient
        Типизированные методы для запчастей, полок, транзакций и статистики
        поверх RequestCoordinator.
"""

import asyncio
from collections.abc import Iterable
from typing import Any, Optional, Union
from urllib.parse import quote

from inventory_search.core.request_coordinator import RequestCoordinator, RequestResult
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

ItemId = Union[int, str]


class InventoryClient:
    """Методы API инвентаря.

    Чтения кэшируются координатором (кроме поиска и health check),
    мутации инвалидируют свой класс ресурса. Пакетные операции выполняются
    параллельно вне механизма вытеснения и возвращают результаты всех
    вызовов, включая исключения.

    Attributes:
        coordinator: Координатор запросов.
    """

    def __init__(self, coordinator: RequestCoordinator) -> None:
        self.coordinator = coordinator

    # === Parts ===

    async def fetch_parts(self, invalidate_cache: bool = False) -> RequestResult:
        return await self.coordinator.request(
            "GET", "/parts", invalidate_cache=invalidate_cache
        )

    async def fetch_part(self, part_id: ItemId) -> RequestResult:
        return await self.coordinator.request("GET", f"/parts/{part_id}")

    async def search_parts(self, query: str) -> RequestResult:
        """Серверный поиск (не кэшируется)."""
        return await self.coordinator.request(
            "GET", f"/parts/search/{quote(query, safe='')}", use_cache=False
        )

    async def create_part(self, data: dict[str, Any]) -> RequestResult:
        return await self.coordinator.request("POST", "/parts", body=data)

    async def update_part(self, part_id: ItemId, data: dict[str, Any]) -> RequestResult:
        return await self.coordinator.request("PUT", f"/parts/{part_id}", body=data)

    async def delete_part(self, part_id: ItemId) -> RequestResult:
        return await self.coordinator.request("DELETE", f"/parts/{part_id}")

    async def checkout_part(
        self,
        part_id: ItemId,
        user_data: Optional[dict[str, Any]] = None,
        *,
        cancel_previous: bool = True,
    ) -> RequestResult:
        return await self.coordinator.request(
            "POST",
            f"/parts/{part_id}/checkout",
            body=user_data,
            cancel_previous=cancel_previous,
        )

    async def checkin_part(
        self, part_id: ItemId, *, cancel_previous: bool = True
    ) -> RequestResult:
        return await self.coordinator.request(
            "POST", f"/parts/{part_id}/checkin", cancel_previous=cancel_previous
        )

    # === Shelves ===

    async def fetch_shelves(self, invalidate_cache: bool = False) -> RequestResult:
        return await self.coordinator.request(
            "GET", "/shelves", invalidate_cache=invalidate_cache
        )

    async def create_shelf(self, data: dict[str, Any]) -> RequestResult:
        return await self.coordinator.request("POST", "/shelves", body=data)

    async def update_shelf(self, shelf_id: ItemId, data: dict[str, Any]) -> RequestResult:
        return await self.coordinator.request("PUT", f"/shelves/{shelf_id}", body=data)

    async def delete_shelf(self, shelf_id: ItemId) -> RequestResult:
        return await self.coordinator.request("DELETE", f"/shelves/{shelf_id}")

    # === Reports ===

    async def fetch_transactions(self, invalidate_cache: bool = False) -> RequestResult:
        return await self.coordinator.request(
            "GET", "/transactions", invalidate_cache=invalidate_cache
        )

    async def fetch_dashboard_stats(
        self, invalidate_cache: bool = False
    ) -> RequestResult:
        return await self.coordinator.request(
            "GET", "/dashboard/stats", invalidate_cache=invalidate_cache
        )

    async def health_check(self) -> RequestResult:
        return await self.coordinator.request("GET", "/health", use_cache=False)

    # === Batch ===

    async def batch_checkout(
        self, operations: Iterable[tuple[ItemId, Optional[dict[str, Any]]]]
    ) -> list[Union[Any, BaseException]]:
        """Выдача нескольких запчастей.

        Args:
            operations: Пары (part_id, user_data).

        Returns:
            Результат или исключение для каждой операции, в исходном порядке.
        """
        calls = [
            self.checkout_part(part_id, user_data, cancel_previous=False)
            for part_id, user_data in operations
        ]
        results = await asyncio.gather(*calls, return_exceptions=True)
        self._log_batch("checkout", results)
        return list(results)

    async def batch_checkin(
        self, part_ids: Iterable[ItemId]
    ) -> list[Union[Any, BaseException]]:
        """Возврат нескольких запчастей (результат или исключение на каждую)."""
        calls = [
            self.checkin_part(part_id, cancel_previous=False) for part_id in part_ids
        ]
        results = await asyncio.gather(*calls, return_exceptions=True)
        self._log_batch("checkin", results)
        return list(results)

    @staticmethod
    def _log_batch(operation: str, results: list[Any]) -> None:
        failed = sum(1 for r in results if isinstance(r, BaseException))
        logger.info(
            "Batch finished",
            operation=operation,
            total=len(results),
            failed=failed,
        )

    def clear_cache(self, pattern: Optional[str] = None) -> int:
        return self.coordinator.invalidate(pattern)
