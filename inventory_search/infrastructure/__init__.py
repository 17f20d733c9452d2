"""Реализации инфраструктурных компонентов.

Модули:
    storage
        Адаптеры PersistentKV (память, JSON-файл, SQLite).
    http
        Сетевой транспорт на httpx.
"""

from inventory_search.infrastructure.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    PeeweeKeyValueStore,
    init_sqlite_database,
)
from inventory_search.infrastructure.http import HttpxTransport

__all__ = [
    # Storage
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "PeeweeKeyValueStore",
    "init_sqlite_database",
    # HTTP
    "HttpxTransport",
]
