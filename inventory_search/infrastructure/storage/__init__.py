"""Реализации PersistentKV.

Модули:
    memory
        InMemoryKeyValueStore для тестов и эфемерных сессий.
    json_file
        JsonFileKeyValueStore — плоский JSON-файл.
    peewee
        PeeweeKeyValueStore — SQLite через Peewee.
"""

from inventory_search.infrastructure.storage.memory import InMemoryKeyValueStore
from inventory_search.infrastructure.storage.json_file import JsonFileKeyValueStore
from inventory_search.infrastructure.storage.peewee import (
    PeeweeKeyValueStore,
    init_sqlite_database,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "PeeweeKeyValueStore",
    "init_sqlite_database",
]
