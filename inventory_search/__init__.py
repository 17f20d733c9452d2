"""Inventory Search - клиентское ядро поиска по инвентарю.

Архитектура:
    Domain: Чистые DTO (ScoredMatch, SuggestionEntry, HistoryEntry, UsagePattern).
    Interfaces: Контракты (BaseKeyValueStore, BaseTransport, BaseVoiceRecognizer).
    Infrastructure: Реализации (PeeweeKeyValueStore, HttpxTransport, etc.).
    Core: Ранжирование, подсказки, история, кэш и координация запросов.
    Session: Фасад SearchSession.

Пример:
    >>> from inventory_search import (
    ...     InMemoryKeyValueStore,
    ...     SearchHistoryStore,
    ...     SearchSession,
    ...     UsagePatternStore,
    ... )
    >>>
    >>> kv = InMemoryKeyValueStore()
    >>> session = SearchSession(
    ...     [{"id": 1, "description": "Oil Filter"}],
    ...     fields=["description"],
    ...     history=SearchHistoryStore(kv),
    ...     patterns=UsagePatternStore(kv),
    ... )
    >>> session.set_query("filter")
    >>> session.flush()
    >>> session.results
"""

__version__ = "0.1.0"

# Domain Layer
from inventory_search.domain import (
    ABORTED,
    CacheEntry,
    CategorySummary,
    HistoryEntry,
    RequestOutcome,
    ScoredMatch,
    SuggestionEntry,
    SuggestionType,
    UsagePattern,
)

# Errors
from inventory_search.errors import (
    InventorySearchError,
    RequestCancelled,
    StorageError,
    TransportError,
)

# Interfaces Layer
from inventory_search.interfaces import (
    BaseKeyValueStore,
    BaseTransport,
    BaseVoiceRecognizer,
)

# Core Layer
from inventory_search.core import (
    AdvancedSearch,
    CancellationToken,
    Debouncer,
    RankedSearch,
    RequestCoordinator,
    ResponseCache,
    SearchHistoryStore,
    SuggestionEngine,
    SuggestionNavigator,
    UsagePatternStore,
    VoiceSearchController,
    score_item,
    strip_command_prefixes,
)

# Infrastructure Layer
from inventory_search.infrastructure import (
    HttpxTransport,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    PeeweeKeyValueStore,
    init_sqlite_database,
)

# Facade
from inventory_search.client import InventoryClient
from inventory_search.config import InventoryConfig, build_kv_store, get_config
from inventory_search.session import SearchSession

__all__ = [
    "__version__",
    # Domain
    "ABORTED",
    "CacheEntry",
    "CategorySummary",
    "HistoryEntry",
    "RequestOutcome",
    "ScoredMatch",
    "SuggestionEntry",
    "SuggestionType",
    "UsagePattern",
    # Errors
    "InventorySearchError",
    "RequestCancelled",
    "StorageError",
    "TransportError",
    # Interfaces
    "BaseKeyValueStore",
    "BaseTransport",
    "BaseVoiceRecognizer",
    # Core
    "AdvancedSearch",
    "CancellationToken",
    "Debouncer",
    "RankedSearch",
    "RequestCoordinator",
    "ResponseCache",
    "SearchHistoryStore",
    "SuggestionEngine",
    "SuggestionNavigator",
    "UsagePatternStore",
    "VoiceSearchController",
    "score_item",
    "strip_command_prefixes",
    # Infrastructure
    "HttpxTransport",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "PeeweeKeyValueStore",
    "init_sqlite_database",
    # Facade
    "InventoryClient",
    "InventoryConfig",
    "build_kv_store",
    "get_config",
    "SearchSession",
]
