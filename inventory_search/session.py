"""Фасад поисковой сессии.

Классы:
    SearchSession
        Связывает ранжированный поиск, подсказки, историю, usage patterns,
        голосовой ввод и координатор запросов в одну точку входа.
"""

from collections.abc import Sequence
from typing import Any, Optional

from inventory_search.config import InventoryConfig, build_kv_store
from inventory_search.core.advanced_search import AdvancedSearch
from inventory_search.core.debounce import Clock
from inventory_search.core.highlight import DEFAULT_HIGHLIGHT_CLASS
from inventory_search.core.history import SearchHistoryStore
from inventory_search.core.ranked_search import RankedSearch
from inventory_search.core.request_coordinator import RequestCoordinator, RequestResult
from inventory_search.core.suggestions import (
    DEFAULT_CATEGORY_FIELD,
    HISTORY_PREVIEW,
    SUGGESTION_LIMIT,
    NavigationKey,
    SuggestionEngine,
    SuggestionNavigator,
    categories,
)
from inventory_search.core.usage_patterns import UsagePatternStore
from inventory_search.core.voice import strip_command_prefixes
from inventory_search.domain import (
    ABORTED,
    DEFAULT_IDENTITY_FIELD,
    CategorySummary,
    FieldPath,
    Item,
    SuggestionEntry,
)
from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ITEMS_ENDPOINT = "/parts"


class SearchSession:
    """Поисковая сессия над коллекцией элементов.

    Все зависимости передаются явно; глобального состояния нет. Подписки
    на хранилища держат выдачу и подсказки в актуальном состоянии: новое
    наблюдение usage pattern пересчитывает ранжирование, изменение истории
    пересобирает подсказки.

    Attributes:
        search: Ранжированный поиск.
        advanced: Фильтры и сортировка поверх search.
        history: Хранилище истории.
        patterns: Хранилище usage patterns.
        engine: Генератор подсказок.
        navigator: Курсор по подсказкам.
        coordinator: Координатор сетевых запросов (опционально).
        highlight_class: CSS-класс подсветки.

    Example:
        >>> kv = InMemoryKeyValueStore()
        >>> session = SearchSession(
        ...     items,
        ...     fields=["description"],
        ...     history=SearchHistoryStore(kv),
        ...     patterns=UsagePatternStore(kv),
        ... )
        >>> session.set_query("filter")
        >>> session.flush()
        >>> session.results
    """

    def __init__(
        self,
        items: Sequence[Item] = (),
        *,
        fields: Sequence[FieldPath],
        history: SearchHistoryStore,
        patterns: UsagePatternStore,
        coordinator: Optional[RequestCoordinator] = None,
        identity_field: FieldPath = DEFAULT_IDENTITY_FIELD,
        category_field: FieldPath = DEFAULT_CATEGORY_FIELD,
        debounce_ms: int = 300,
        suggestion_limit: int = SUGGESTION_LIMIT,
        history_preview: int = HISTORY_PREVIEW,
        highlight_class: str = DEFAULT_HIGHLIGHT_CLASS,
        clock: Optional[Clock] = None,
    ) -> None:
        self.history = history
        self.patterns = patterns
        self.coordinator = coordinator
        self.category_field = category_field
        self.highlight_class = highlight_class

        self.search = RankedSearch(
            items,
            fields,
            patterns=patterns.patterns,
            identity_field=identity_field,
            debounce_ms=debounce_ms,
            clock=clock,
        )
        self.advanced = AdvancedSearch(self.search)
        self.engine = SuggestionEngine(
            fields,
            history,
            patterns,
            category_field=category_field,
            limit=suggestion_limit,
            history_preview=history_preview,
        )
        self.navigator = SuggestionNavigator(on_select=self.select_suggestion)

        self._unsubscribe = [
            patterns.subscribe(self._on_patterns_changed),
            history.subscribe(self._refresh_suggestions),
        ]
        self._refresh_suggestions()

    @classmethod
    def from_config(
        cls,
        config: InventoryConfig,
        items: Sequence[Item] = (),
        *,
        kv: Optional[BaseKeyValueStore] = None,
        coordinator: Optional[RequestCoordinator] = None,
        clock: Optional[Clock] = None,
    ) -> "SearchSession":
        """Собирает сессию по конфигурации.

        Args:
            config: Конфигурация.
            items: Начальная коллекция.
            kv: PersistentKV (по умолчанию build_kv_store(config)).
            coordinator: Координатор запросов.
            clock: Часы для debounce.
        """
        kv = kv if kv is not None else build_kv_store(config)
        return cls(
            items,
            fields=config.search_fields,
            history=SearchHistoryStore(kv, limit=config.history_limit),
            patterns=UsagePatternStore(kv, identity_field=config.identity_field),
            coordinator=coordinator,
            identity_field=config.identity_field,
            category_field=config.category_field,
            debounce_ms=config.debounce_ms,
            suggestion_limit=config.suggestion_limit,
            history_preview=config.history_preview,
            highlight_class=config.highlight_class,
            clock=clock,
        )

    def close(self) -> None:
        """Отписывается от хранилищ."""
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    # === Состояние ===

    @property
    def query(self) -> str:
        return self.search.query

    @property
    def debounced_query(self) -> str:
        return self.search.debounced_query

    @property
    def is_searching(self) -> bool:
        return self.search.is_searching

    @property
    def items(self) -> Sequence[Item]:
        return self.search.items

    @property
    def results(self) -> Sequence[Item]:
        return self.search.results

    @property
    def suggestions(self) -> list[SuggestionEntry]:
        return self.navigator.suggestions

    @property
    def categories(self) -> list[CategorySummary]:
        return categories(self.search.items, self.category_field)

    # === Входы ===

    def set_query(self, text: str, now: Optional[float] = None) -> None:
        """Новое значение поля ввода: подсказки сразу, выдача после debounce."""
        self.search.on_query_change(text, now=now)
        self._refresh_suggestions()
        self.navigator.show()

    def tick(self, now: Optional[float] = None) -> bool:
        return self.search.tick(now=now)

    def flush(self) -> bool:
        return self.search.flush()

    def set_items(self, items: Sequence[Item]) -> None:
        self.search.on_collection_change(items)
        self._refresh_suggestions()

    def select_suggestion(self, entry: SuggestionEntry) -> None:
        """Делает подсказку активным запросом и записывает её в историю."""
        self.search.on_query_change(entry.text)
        self.search.flush()
        self.history.add(entry.text)
        # после уведомления истории, которое пересобирает подсказки
        self.navigator.dismiss()
        logger.debug("Suggestion selected", query=entry.text, kind=entry.type.value)

    def on_key(self, key: "str | NavigationKey") -> bool:
        return self.navigator.on_key(key)

    def select_item(self, item: Item) -> bool:
        """Пользователь выбрал элемент из выдачи.

        Записывает наблюдение usage pattern для текущего запроса и сам
        запрос в историю.

        Returns:
            True если наблюдение записано.
        """
        query = self.search.query
        recorded = self.patterns.record(query, item)
        self.history.add(query)
        return recorded

    def clear_history(self) -> None:
        self.history.clear()

    def handle_transcript(self, transcript: str) -> str:
        """Голосовой транскрипт → активный запрос и запись в историю.

        Returns:
            Очищенный запрос (пустой, если после снятия префиксов ничего
            не осталось; тогда запрос не меняется).
        """
        query = strip_command_prefixes(transcript)
        if query:
            self.set_query(query)
            self.flush()
            self.history.add(query)
        return query

    # === Вывод ===

    def highlight(self, text: str) -> str:
        return self.search.highlight(text, self.highlight_class)

    # === Сеть ===

    def _require_coordinator(self) -> RequestCoordinator:
        if self.coordinator is None:
            raise RuntimeError("SearchSession has no RequestCoordinator")
        return self.coordinator

    def invalidate(self, pattern: Optional[str] = None) -> int:
        """Очищает кэш ответов (по подстроке ключа или полностью)."""
        return self._require_coordinator().invalidate(pattern)

    async def request(
        self, method: str, endpoint: str, **options: Any
    ) -> RequestResult:
        return await self._require_coordinator().request(method, endpoint, **options)

    async def refresh_items(
        self,
        endpoint: str = DEFAULT_ITEMS_ENDPOINT,
        *,
        invalidate_cache: bool = False,
    ) -> bool:
        """Загружает коллекцию через координатор и подставляет её в поиск.

        Returns:
            True если коллекция обновлена; False если запрос вытеснен.

        Raises:
            TransportError: Ошибка сети или ответа.
            TypeError: Ответ не является списком элементов.
        """
        data = await self.request("GET", endpoint, invalidate_cache=invalidate_cache)
        if data is ABORTED:
            return False
        if not isinstance(data, list):
            raise TypeError(
                f"{endpoint} returned {type(data).__name__}, expected a list of items"
            )
        self.set_items(data)
        logger.info("Items refreshed", endpoint=endpoint, total=len(data))
        return True

    # === Внутреннее ===

    def _on_patterns_changed(self) -> None:
        self.search.on_patterns_change()
        self._refresh_suggestions()

    def _refresh_suggestions(self) -> None:
        self.navigator.set_suggestions(
            self.engine.generate(self.search.query, self.search.items)
        )
