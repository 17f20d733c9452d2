"""Бизнес-логика поиска (core layer).

Модули:
    scorer
        Оценка релевантности элемента запросу.
    debounce
        Debounce как машина состояний.
    highlight
        Подсветка совпадений.
    ranked_search
        Ранжированный поиск по коллекции.
    advanced_search
        Фильтры и сортировка поверх ранжированного поиска.
    suggestions
        Подсказки и навигация по ним.
    history, usage_patterns
        Персистентная история и обучение на выборе.
    response_cache, request_coordinator
        Кэш ответов и координация сетевых запросов.
    voice
        Голосовой ввод запроса.
"""

from inventory_search.core.scorer import (
    EXACT_MATCH_SCORE,
    PREFIX_MATCH_SCORE,
    SUBSTRING_MATCH_SCORE,
    USAGE_BOOST,
    score_item,
    tokenize_query,
)
from inventory_search.core.debounce import Clock, Debouncer
from inventory_search.core.highlight import highlight_spans, highlight_text
from inventory_search.core.ranked_search import RankedSearch
from inventory_search.core.advanced_search import AdvancedSearch, SortDirection
from inventory_search.core.suggestions import (
    NavigationKey,
    SuggestionEngine,
    SuggestionNavigator,
    categories,
    word_completions,
)
from inventory_search.core.history import SearchHistoryStore
from inventory_search.core.usage_patterns import UsagePatternStore
from inventory_search.core.response_cache import (
    ResponseCache,
    make_cache_key,
    resource_prefix,
)
from inventory_search.core.request_coordinator import (
    CancellationToken,
    RequestCoordinator,
)
from inventory_search.core.voice import VoiceSearchController, strip_command_prefixes

__all__ = [
    # Scoring
    "EXACT_MATCH_SCORE",
    "PREFIX_MATCH_SCORE",
    "SUBSTRING_MATCH_SCORE",
    "USAGE_BOOST",
    "score_item",
    "tokenize_query",
    # Search
    "Clock",
    "Debouncer",
    "highlight_spans",
    "highlight_text",
    "RankedSearch",
    "AdvancedSearch",
    "SortDirection",
    # Suggestions
    "NavigationKey",
    "SuggestionEngine",
    "SuggestionNavigator",
    "categories",
    "word_completions",
    # Persistence
    "SearchHistoryStore",
    "UsagePatternStore",
    # Network
    "ResponseCache",
    "make_cache_key",
    "resource_prefix",
    "CancellationToken",
    "RequestCoordinator",
    # Voice
    "VoiceSearchController",
    "strip_command_prefixes",
]
