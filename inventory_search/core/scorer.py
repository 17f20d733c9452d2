"""Скоринг элемента инвентаря по текстовому запросу.

Функции:
    tokenize_query
        Разбивает запрос на слова в нижнем регистре.
    score_item
        Релевантность одного элемента + совпавшие поля.

Константы:
    EXACT_MATCH_SCORE, PREFIX_MATCH_SCORE, SUBSTRING_MATCH_SCORE
        Веса совпадения слова с полем.
    USAGE_BOOST
        Вес одного наблюдения из usage patterns.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

from inventory_search.domain import (
    DEFAULT_IDENTITY_FIELD,
    FieldPath,
    Item,
    ScoredMatch,
    UsagePattern,
    field_text,
    identity_key,
)

EXACT_MATCH_SCORE = 100
PREFIX_MATCH_SCORE = 50
SUBSTRING_MATCH_SCORE = 10
USAGE_BOOST = 5


def tokenize_query(query: str) -> list[str]:
    """Слова запроса в нижнем регистре, пустые токены отброшены."""
    return query.lower().split()


def _word_score(value: str, word: str) -> int:
    if word not in value:
        return 0
    if value == word:
        return EXACT_MATCH_SCORE
    if value.startswith(word):
        return PREFIX_MATCH_SCORE
    return SUBSTRING_MATCH_SCORE


def score_item(
    item: Item,
    fields: Sequence[FieldPath],
    query: str,
    patterns: Optional[Mapping[str, UsagePattern]] = None,
    identity_field: FieldPath = DEFAULT_IDENTITY_FIELD,
) -> ScoredMatch:
    """Вычисляет релевантность элемента.

    Для каждой пары (поле, слово), где слово — подстрока значения поля:
    +100 за точное совпадение, +50 за префикс, иначе +10. Поле попадает
    в matched_fields не более одного раза. Если для полного запроса
    (в нижнем регистре) есть usage pattern с наблюдениями этого элемента,
    добавляется 5 × число наблюдений.

    Args:
        item: Элемент инвентаря.
        fields: Поля для сопоставления (dotted-пути).
        query: Сырой текст запроса.
        patterns: Usage patterns (lowercase запрос → UsagePattern).
        identity_field: Поле идентичности для буста.

    Returns:
        ScoredMatch; score == 0 означает "не найдено".
    """
    words = tokenize_query(query)
    score = 0
    matched: list[FieldPath] = []

    for path in fields:
        value = field_text(item, path)
        for word in words:
            gained = _word_score(value, word)
            if gained:
                score += gained
                if path not in matched:
                    matched.append(path)

    if patterns:
        pattern = patterns.get(query.lower())
        if pattern is not None:
            score += USAGE_BOOST * pattern.count_for(identity_key(item, identity_field))

    return ScoredMatch(item=item, score=score, matched_fields=tuple(matched))


__all__ = [
    "EXACT_MATCH_SCORE",
    "PREFIX_MATCH_SCORE",
    "SUBSTRING_MATCH_SCORE",
    "USAGE_BOOST",
    "tokenize_query",
    "score_item",
]
