"""Ранжированный поиск по коллекции элементов.

Классы:
    RankedSearch
        Машина состояний: сырой запрос → (debounce) → ранжированные элементы.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

from inventory_search.core.debounce import Clock, Debouncer
from inventory_search.core.highlight import (
    DEFAULT_HIGHLIGHT_CLASS,
    highlight_spans,
    highlight_text,
)
from inventory_search.core.scorer import score_item, tokenize_query
from inventory_search.domain import (
    DEFAULT_IDENTITY_FIELD,
    FieldPath,
    Item,
    ScoredMatch,
    UsagePattern,
)
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)


class RankedSearch:
    """Упорядоченные элементы, соответствующие текущему запросу.

    Входы:
        on_query_change(text) — каждое нажатие клавиши (синхронно меняет
            сырой запрос и переносит debounce);
        tick(now) — ход часов, может зафиксировать debounced-запрос;
        on_collection_change(items) — новый снимок коллекции;
        on_patterns_change(patterns) — обновлённые usage patterns.

    Проход сопоставления выполняется только при изменении debounced-запроса,
    коллекции или паттернов. Пустой debounced-запрос возвращает ту же
    коллекцию без копирования; непустой — элементы с score > 0, стабильно
    отсортированные по убыванию score.

    Attributes:
        fields: Поля для сопоставления.
        identity_field: Поле идентичности (для буста usage patterns).
        recompute_count: Сколько проходов сопоставления выполнено.
    """

    def __init__(
        self,
        items: Sequence[Item],
        fields: Sequence[FieldPath],
        *,
        patterns: Optional[Mapping[str, UsagePattern]] = None,
        identity_field: FieldPath = DEFAULT_IDENTITY_FIELD,
        initial_query: str = "",
        debounce_ms: int = 300,
        clock: Optional[Clock] = None,
    ) -> None:
        if not fields:
            raise ValueError("RankedSearch requires at least one field")

        self.fields: tuple[FieldPath, ...] = tuple(fields)
        self.identity_field = identity_field
        self._items: Sequence[Item] = items
        self._patterns: Mapping[str, UsagePattern] = patterns if patterns is not None else {}
        self._raw_query = initial_query
        self._debouncer: Debouncer[str] = Debouncer(
            initial_query, delay_ms=debounce_ms, clock=clock
        )
        self._matches: list[ScoredMatch] = []
        self._results: Sequence[Item] = items
        self.recompute_count = 0
        self._recompute()

    # === Состояние ===

    @property
    def query(self) -> str:
        """Сырой запрос (обновляется на каждое нажатие)."""
        return self._raw_query

    @property
    def debounced_query(self) -> str:
        return self._debouncer.value

    @property
    def items(self) -> Sequence[Item]:
        return self._items

    @property
    def results(self) -> Sequence[Item]:
        """Ранжированные элементы для debounced-запроса."""
        return self._results

    @property
    def matches(self) -> list[ScoredMatch]:
        """ScoredMatch для непустого запроса (пусто для пустого)."""
        return list(self._matches)

    @property
    def is_searching(self) -> bool:
        """Сырой запрос ещё не догнал debounced."""
        return self._raw_query != self._debouncer.value

    @property
    def has_results(self) -> bool:
        return len(self._results) > 0

    @property
    def query_words(self) -> list[str]:
        return tokenize_query(self._debouncer.value)

    # === Входы ===

    def on_query_change(self, text: str, now: Optional[float] = None) -> None:
        """Новое значение поля ввода; пересчёта нет до истечения debounce."""
        self._raw_query = text
        self._debouncer.push(text, now=now)

    def tick(self, now: Optional[float] = None) -> bool:
        """Продвигает debounce.

        Returns:
            True если debounced-запрос изменился и результаты пересчитаны.
        """
        if not self._debouncer.tick(now=now):
            return False
        self._recompute()
        return True

    def flush(self) -> bool:
        """Фиксирует сырой запрос немедленно (Enter, выбор подсказки)."""
        if not self._debouncer.flush():
            return False
        self._recompute()
        return True

    def on_collection_change(self, items: Sequence[Item]) -> None:
        self._items = items
        self._recompute()

    def on_patterns_change(
        self, patterns: Optional[Mapping[str, UsagePattern]] = None
    ) -> None:
        """Пересчёт после изменения usage patterns.

        Args:
            patterns: Новая карта; None — карта та же, изменилось содержимое.
        """
        if patterns is not None:
            self._patterns = patterns
        if self._debouncer.value.strip():
            self._recompute()

    def clear(self) -> None:
        """Сбрасывает сырой и debounced-запрос в пустую строку."""
        self._raw_query = ""
        if self._debouncer.value == "" and not self._debouncer.pending:
            return
        self._debouncer.reset("")
        self._recompute()

    # === Вывод ===

    def highlight(
        self,
        text: str,
        css_class: str = DEFAULT_HIGHLIGHT_CLASS,
    ) -> str:
        """Оборачивает вхождения слов debounced-запроса в <span class=...>."""
        if not self._debouncer.value.strip() or not text:
            return text
        return highlight_text(
            text,
            self.query_words,
            open_marker=f'<span class="{css_class}">',
            close_marker="</span>",
        )

    def highlight_spans(self, text: str) -> list[tuple[int, int]]:
        """Интервалы совпадений для рендереров без HTML (Rich, терминал)."""
        if not self._debouncer.value.strip() or not text:
            return []
        return highlight_spans(text, self.query_words)

    # === Внутреннее ===

    def _recompute(self) -> None:
        query = self._debouncer.value
        self.recompute_count += 1

        if not query.strip():
            self._matches = []
            self._results = self._items
            return

        scored = [
            score_item(
                item,
                self.fields,
                query,
                patterns=self._patterns,
                identity_field=self.identity_field,
            )
            for item in self._items
        ]
        # sorted() стабилен: равные score сохраняют порядок коллекции
        self._matches = sorted(
            (m for m in scored if m.score > 0),
            key=lambda m: m.score,
            reverse=True,
        )
        self._results = [m.item for m in self._matches]

        logger.trace(
            "Match pass",
            query=query,
            total=len(self._items),
            matched=len(self._matches),
        )
