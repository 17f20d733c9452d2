"""Реализация PersistentKV для Peewee + SQLite.

Модули:
    models
        Внутренние ORM модели.
    adapter
        PeeweeKeyValueStore и init_sqlite_database.
"""

from inventory_search.infrastructure.storage.peewee.adapter import (
    PeeweeKeyValueStore,
    init_sqlite_database,
)

__all__ = [
    "PeeweeKeyValueStore",
    "init_sqlite_database",
]
