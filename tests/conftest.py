"""
Конфигурация pytest для тестов inventory_search.

Определяет фикстуры для:
- Тестовой коллекции запчастей
- Управляемых часов (debounce, TTL кэша)
- Хранилищ PersistentKV
- Сетевого транспорта без сети
- Изоляции глобальной конфигурации
"""

import asyncio
import os

import pytest

from inventory_search.config import reset_config
from inventory_search.core.history import SearchHistoryStore
from inventory_search.core.usage_patterns import UsagePatternStore
from inventory_search.errors import RequestCancelled
from inventory_search.infrastructure.storage import InMemoryKeyValueStore
from inventory_search.interfaces.transport import BaseTransport


class FakeClock:
    """Ручные часы: время двигается только через advance()/set()."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now

    def set(self, value: float) -> None:
        self.now = value


class FakeTransport(BaseTransport):
    """Транспорт с заготовленными ответами.

    respond() задаёт ответ (или исключение) для пары (метод, эндпоинт),
    hold() задерживает эндпоинт до set() возвращённого события. Пока
    запрос задержан, срабатывание токена даёт RequestCancelled, если
    не включён ignore_cancel.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object]] = []
        self.responses: dict[tuple[str, str], object] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.ignore_cancel = False

    def respond(self, method: str, endpoint: str, value: object) -> None:
        self.responses[(method, endpoint)] = value

    def hold(self, endpoint: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[endpoint] = gate
        return gate

    async def send(self, method, endpoint, body=None, token=None):
        self.calls.append((method, endpoint, body))
        gate = self.gates.get(endpoint)
        if gate is not None:
            if token is None or self.ignore_cancel:
                await gate.wait()
            else:
                gate_task = asyncio.ensure_future(gate.wait())
                token_task = asyncio.ensure_future(token.wait())
                _, pending = await asyncio.wait(
                    {gate_task, token_task}, return_when=asyncio.FIRST_COMPLETED
                )
                for task in pending:
                    task.cancel()
                if token.cancelled:
                    raise RequestCancelled("cancelled by token")

        value = self.responses.get((method, endpoint))
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def transport():
    """Транспорт без сети."""
    return FakeTransport()


@pytest.fixture
def clock():
    """Часы с нулевой отметкой."""
    return FakeClock()


@pytest.fixture
def parts():
    """Небольшой каталог запчастей инструментальной кладовой."""
    return [
        {
            "id": 1,
            "partNumber": "OF-100",
            "description": "Oil Filter",
            "category": "Filters",
            "shelf": "A1",
            "quantity": 12,
        },
        {
            "id": 2,
            "partNumber": "AF-200",
            "description": "Air Filter",
            "category": "Filters",
            "shelf": "A2",
            "quantity": 4,
        },
        {
            "id": 3,
            "partNumber": "VB-300",
            "description": "V-Belt 40in",
            "category": "Belts",
            "shelf": "B1",
            "quantity": 7,
        },
        {
            "id": 4,
            "partNumber": "BR-400",
            "description": "Bearing 6204",
            "category": "Bearings",
            "shelf": "C3",
            "quantity": 0,
        },
        {
            "id": 5,
            "partNumber": "GL-500",
            "description": "Nitrile Gloves",
            "shelf": "D1",
            "quantity": 100,
        },
    ]


@pytest.fixture
def kv():
    """Пустое in-memory хранилище."""
    return InMemoryKeyValueStore()


@pytest.fixture
def history(kv):
    """История поиска с предсказуемыми метками времени."""
    ticks = iter(range(1_000, 1_000_000, 1_000))
    return SearchHistoryStore(kv, clock_ms=lambda: next(ticks))


@pytest.fixture
def patterns(kv):
    """Хранилище usage patterns."""
    return UsagePatternStore(kv)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Изолирует тесты от inventory.toml, .env и переменных INVENTORY_*."""
    for key in list(os.environ):
        if key.startswith("INVENTORY_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("inventory_search.config.find_config_file", lambda: None)
    reset_config()
    yield
    reset_config()
