"""Доступ к полям элементов инвентаря.

Элемент (Item) — произвольный mapping полей, которым владеет внешний
слой данных. Слой поиска его только читает.

Функции:
    resolve_field_path
        Читает значение по dotted-пути ("location.shelf").
    field_text
        Строковое представление поля для сопоставления.
    identity_key
        Ключ идентичности элемента (partNumber с fallback на id).
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

Item = Mapping[str, Any]
FieldPath = str

DEFAULT_IDENTITY_FIELD = "partNumber"
FALLBACK_IDENTITY_FIELD = "id"


def resolve_field_path(item: Any, path: FieldPath) -> Any:
    """Последовательно индексирует элемент по частям dotted-пути.

    Отсутствующее промежуточное значение прерывает обход и даёт None.
    Числовые части пути индексируют списки ("tags.0").

    Args:
        item: Элемент (mapping) или вложенное значение.
        path: Dotted-путь к полю.

    Returns:
        Значение поля или None если путь не разрешается.
    """
    current = item
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, Sequence) and not isinstance(current, str):
            if not part.isdigit() or int(part) >= len(current):
                return None
            current = current[int(part)]
        else:
            return None
    return current


def stringify(value: Any) -> str:
    """Приводит значение поля к тексту так, как его видит пользователь."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    return str(value)


def field_text(item: Any, path: FieldPath) -> str:
    """Значение поля в нижнем регистре (пустая строка для отсутствующих)."""
    return stringify(resolve_field_path(item, path)).lower()


def identity_key(
    item: Any,
    identity_field: FieldPath = DEFAULT_IDENTITY_FIELD,
) -> Optional[str]:
    """Ключ идентичности элемента.

    Берётся designated-поле, при его отсутствии — поле id.
    Ключи нормализуются в str, т.к. хранятся как ключи JSON-объекта.

    Args:
        item: Элемент инвентаря.
        identity_field: Уникальное поле (по умолчанию partNumber).

    Returns:
        Строковый ключ или None если у элемента нет ни одного из полей.
    """
    for path in (identity_field, FALLBACK_IDENTITY_FIELD):
        value = resolve_field_path(item, path)
        if value is not None and value != "":
            return stringify(value)
    return None


__all__ = [
    "Item",
    "FieldPath",
    "DEFAULT_IDENTITY_FIELD",
    "FALLBACK_IDENTITY_FIELD",
    "resolve_field_path",
    "stringify",
    "field_text",
    "identity_key",
]
