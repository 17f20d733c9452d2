"""Тесты истории поиска (inventory_search.core.history)."""

from unittest.mock import MagicMock

from inventory_search.core.history import HISTORY_KEY, SearchHistoryStore
from inventory_search.infrastructure.storage import InMemoryKeyValueStore


class TestAddToHistory:
    """Тесты добавления запросов."""

    def test_dedup_and_count(self, history):
        history.add("filter")
        history.add("filter")
        history.add("belt")

        assert [(e.term, e.count) for e in history.entries] == [
            ("belt", 1),
            ("filter", 2),
        ]

    def test_reinsert_moves_to_front(self, history):
        history.add("filter")
        history.add("belt")
        history.add("filter")

        assert [e.term for e in history.entries] == ["filter", "belt"]
        assert history.entries[0].count == 2

    def test_blank_term_ignored(self, history):
        assert history.add("   ") is None
        assert history.add("") is None
        assert len(history) == 0

    def test_exact_term_equality(self, history):
        """Регистр и пробелы не нормализуются."""
        history.add("Filter")
        history.add("filter")
        assert len(history) == 2

    def test_capped_at_limit(self, kv):
        store = SearchHistoryStore(kv, limit=10)
        for i in range(15):
            store.add(f"term-{i}")

        assert len(store) == 10
        assert store.entries[0].term == "term-14"
        assert store.entries[-1].term == "term-5"

    def test_timestamp_updated(self, history):
        first = history.add("filter")
        second = history.add("filter")
        assert second.timestamp > first.timestamp

    def test_recent(self, history):
        for term in ("a", "b", "c"):
            history.add(term)
        assert [e.term for e in history.recent(2)] == ["c", "b"]


class TestHistoryPersistence:
    """Тесты сохранения через PersistentKV."""

    def test_persisted_after_add(self, kv, history):
        history.add("filter")
        assert kv.load(HISTORY_KEY) == [
            {"term": "filter", "timestamp": 1000, "count": 1}
        ]

    def test_loaded_on_create(self):
        kv = InMemoryKeyValueStore(
            {HISTORY_KEY: [{"term": "belt", "timestamp": 5, "count": 3}]}
        )
        store = SearchHistoryStore(kv)
        assert store.entries[0].term == "belt"
        assert store.entries[0].count == 3

    def test_malformed_json_gives_empty(self):
        kv = InMemoryKeyValueStore()
        kv.set_raw(HISTORY_KEY, "{not json")
        assert SearchHistoryStore(kv).entries == []

    def test_wrong_shape_gives_empty(self):
        kv = InMemoryKeyValueStore({HISTORY_KEY: {"term": "belt"}})
        assert SearchHistoryStore(kv).entries == []

    def test_entry_without_term_gives_empty(self):
        kv = InMemoryKeyValueStore({HISTORY_KEY: [{"count": 2}]})
        assert SearchHistoryStore(kv).entries == []

    def test_save_failure_keeps_memory_state(self):
        kv = MagicMock()
        kv.load.return_value = None
        kv.save.return_value = False

        store = SearchHistoryStore(kv)
        store.add("filter")

        assert [e.term for e in store.entries] == ["filter"]

    def test_clear_removes_key(self, kv, history):
        history.add("filter")
        history.clear()

        assert history.entries == []
        assert kv.load(HISTORY_KEY) is None


class TestHistorySubscription:
    """Тесты подписки на изменения."""

    def test_listener_notified(self, history):
        listener = MagicMock()
        history.subscribe(listener)

        history.add("filter")
        history.clear()

        assert listener.call_count == 2

    def test_unsubscribe(self, history):
        listener = MagicMock()
        unsubscribe = history.subscribe(listener)
        unsubscribe()

        history.add("filter")
        listener.assert_not_called()

    def test_blank_add_does_not_notify(self, history):
        listener = MagicMock()
        history.subscribe(listener)
        history.add(" ")
        listener.assert_not_called()
