"""Тесты InventoryClient (inventory_search.client)."""

import asyncio

import pytest

from inventory_search.client import InventoryClient
from inventory_search.core.request_coordinator import RequestCoordinator
from inventory_search.core.response_cache import ResponseCache
from inventory_search.errors import TransportError


@pytest.fixture
def cache(clock):
    return ResponseCache(clock=clock)


@pytest.fixture
def client(transport, cache):
    return InventoryClient(RequestCoordinator(transport, cache))


class TestReads:
    """Чтения и кэш."""

    def test_fetch_parts_cached(self, client, transport):
        transport.respond("GET", "/parts", [{"id": 1}])

        asyncio.run(client.fetch_parts())
        asyncio.run(client.fetch_parts())

        assert transport.calls == [("GET", "/parts", None)]

    def test_fetch_parts_invalidate(self, client, transport):
        transport.respond("GET", "/parts", [])

        asyncio.run(client.fetch_parts())
        asyncio.run(client.fetch_parts(invalidate_cache=True))

        assert len(transport.calls) == 2

    def test_search_parts_encodes_query_and_skips_cache(self, client, transport, cache):
        asyncio.run(client.search_parts("oil filter/10"))

        assert transport.calls == [("GET", "/parts/search/oil%20filter%2F10", None)]
        assert len(cache) == 0

    def test_endpoints(self, client, transport):
        async def scenario():
            await client.fetch_part(5)
            await client.fetch_shelves()
            await client.fetch_transactions()
            await client.fetch_dashboard_stats()
            await client.health_check()

        asyncio.run(scenario())

        assert [endpoint for _, endpoint, _ in transport.calls] == [
            "/parts/5",
            "/shelves",
            "/transactions",
            "/dashboard/stats",
            "/health",
        ]


class TestMutations:
    """Мутации и инвалидация."""

    def test_checkout_invalidates_parts(self, client, transport, cache):
        transport.respond("GET", "/parts", [])
        transport.respond("GET", "/shelves", [])

        async def scenario():
            await client.fetch_parts()
            await client.fetch_shelves()
            await client.checkout_part(1, {"user": "alex", "quantity": 1})

        asyncio.run(scenario())

        assert transport.calls[-1] == (
            "POST",
            "/parts/1/checkout",
            {"user": "alex", "quantity": 1},
        )
        assert len(cache) == 1

    def test_crud_methods(self, client, transport):
        async def scenario():
            await client.create_part({"partNumber": "X-1"})
            await client.update_part(1, {"quantity": 3})
            await client.delete_part(1)
            await client.checkin_part(2)
            await client.create_shelf({"name": "A"})
            await client.update_shelf("A", {"name": "B"})
            await client.delete_shelf("B")

        asyncio.run(scenario())

        assert [(method, endpoint) for method, endpoint, _ in transport.calls] == [
            ("POST", "/parts"),
            ("PUT", "/parts/1"),
            ("DELETE", "/parts/1"),
            ("POST", "/parts/2/checkin"),
            ("POST", "/shelves"),
            ("PUT", "/shelves/A"),
            ("DELETE", "/shelves/B"),
        ]

    def test_clear_cache(self, client, cache):
        cache.set("GET:/parts:{}", [])
        assert client.clear_cache("parts") == 1


class TestBatch:
    """Пакетные операции."""

    def test_batch_checkin_runs_all(self, client, transport):
        for part_id in (1, 2, 3):
            transport.respond("POST", f"/parts/{part_id}/checkin", {"id": part_id})

        results = asyncio.run(client.batch_checkin([1, 2, 3]))

        assert results == [{"id": 1}, {"id": 2}, {"id": 3}]

    def test_batch_collects_errors(self, client, transport):
        transport.respond("POST", "/parts/1/checkout", {"id": 1})
        transport.respond(
            "POST", "/parts/2/checkout", TransportError("HTTP error! status: 409")
        )

        results = asyncio.run(
            client.batch_checkout([(1, {"quantity": 1}), (2, {"quantity": 5})])
        )

        assert results[0] == {"id": 1}
        assert isinstance(results[1], TransportError)
