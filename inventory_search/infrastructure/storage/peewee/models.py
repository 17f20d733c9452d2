"""Внутренние ORM модели для Peewee (скрыты от внешнего API).

Классы:
    BaseModel
        Базовая модель без привязки к конкретной БД.
    KeyValueModel
        Строка key-value хранилища.
"""

from datetime import datetime

from peewee import CharField, DateTimeField, Model, TextField


class BaseModel(Model):
    """Базовая модель (без привязки к конкретной БД).

    База данных привязывается в адаптере через bind_ctx.
    """

    class Meta:
        database = None


class KeyValueModel(BaseModel):
    """Значение PersistentKV, сериализованное в JSON.

    Attributes:
        key: Идентификатор ("search-history", "usage-patterns").
        value: JSON-текст значения.
        updated_at: Время последней записи.
    """

    key = CharField(max_length=255, primary_key=True)
    value = TextField()
    updated_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = "kv_store"
