"""Тесты конфигурации (inventory_search.config)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from inventory_search.config import (
    InventoryConfig,
    build_kv_store,
    build_response_cache,
    find_config_file,
    get_config,
    load_toml,
)
from inventory_search.infrastructure.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    PeeweeKeyValueStore,
)

TOML_TEXT = """
[api]
base_url = "http://toml.test/api/"

[cache]
ttl = 60

[search]
fields = ["description", "shelf"]
debounce_ms = 150

[storage]
backend = "json"
path = "data/store.json"
"""


@pytest.fixture
def toml_file(tmp_path, monkeypatch):
    path = tmp_path / "inventory.toml"
    path.write_text(TOML_TEXT, encoding="utf-8")
    monkeypatch.setattr("inventory_search.config.find_config_file", lambda: path)
    return path


class TestDefaults:
    """Значения по умолчанию."""

    def test_defaults(self):
        config = InventoryConfig()

        assert config.api_base_url == "http://localhost:3001/api"
        assert config.cache_ttl == 300.0
        assert config.debounce_ms == 300
        assert config.search_fields == ["partNumber", "description", "category", "shelf"]
        assert config.identity_field == "partNumber"
        assert config.suggestion_limit == 8
        assert config.history_limit == 10
        assert config.storage_backend == "sqlite"
        assert config.log_level == "WARNING"


class TestSources:
    """Приоритет источников."""

    def test_env_variables(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_CACHE_TTL", "42")
        monkeypatch.setenv("INVENTORY_SEARCH_FIELDS", "description, shelf")

        config = InventoryConfig()

        assert config.cache_ttl == 42
        assert config.search_fields == ["description", "shelf"]

    def test_toml_sections(self, toml_file):
        config = InventoryConfig()

        assert config.api_base_url == "http://toml.test/api"
        assert config.cache_ttl == 60
        assert config.search_fields == ["description", "shelf"]
        assert config.debounce_ms == 150
        assert config.storage_backend == "json"
        assert config.storage_path == Path("data/store.json")

    def test_env_overrides_toml(self, toml_file, monkeypatch):
        monkeypatch.setenv("INVENTORY_CACHE_TTL", "5")
        assert InventoryConfig().cache_ttl == 5

    def test_kwargs_override_env(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_DEBOUNCE_MS", "100")
        assert InventoryConfig(debounce_ms=50).debounce_ms == 50

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("INVENTORY_HISTORY_LIMIT=4\n", encoding="utf-8")
        assert InventoryConfig().history_limit == 4


class TestValidation:
    """Валидация значений."""

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            InventoryConfig(storage_backend="redis")

    def test_negative_ttl(self):
        with pytest.raises(ValidationError):
            InventoryConfig(cache_ttl=-1)

    def test_empty_fields(self):
        with pytest.raises(ValidationError):
            InventoryConfig(search_fields="")

    def test_log_file_empty_is_none(self):
        assert InventoryConfig(log_file="").log_file is None


class TestTomlHelpers:
    """Поиск и разбор inventory.toml."""

    def test_find_in_parent(self, tmp_path):
        (tmp_path / "inventory.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == tmp_path / "inventory.toml"

    def test_flat_keys(self, tmp_path):
        path = tmp_path / "inventory.toml"
        path.write_text("cache_ttl = 12\n", encoding="utf-8")
        assert load_toml(path) == {"cache_ttl": 12}

    def test_broken_toml(self, tmp_path):
        path = tmp_path / "inventory.toml"
        path.write_text("[cache\nttl = ", encoding="utf-8")
        assert load_toml(path) == {}

    def test_to_toml_dict(self):
        document = InventoryConfig(storage_path="kv.db").to_toml_dict()

        assert document["storage"]["path"] == "kv.db"
        assert document["cache"] == {"ttl": 300.0}
        assert "file" not in document.get("logging", {})


class TestGlobalConfig:
    """Глобальный аксессор."""

    def test_cached_instance(self):
        assert get_config() is get_config()

    def test_overrides_create_new(self):
        first = get_config()
        second = get_config(debounce_ms=10)

        assert second is not first
        assert second.debounce_ms == 10
        assert get_config() is second


class TestBuildKvStore:
    """Выбор реализации PersistentKV."""

    def test_memory(self):
        assert isinstance(
            build_kv_store(InventoryConfig(storage_backend="memory")),
            InMemoryKeyValueStore,
        )

    def test_json(self, tmp_path):
        store = build_kv_store(
            InventoryConfig(storage_backend="json", storage_path=tmp_path / "kv.json")
        )
        assert isinstance(store, JsonFileKeyValueStore)

    def test_sqlite(self, tmp_path):
        store = build_kv_store(
            InventoryConfig(storage_backend="sqlite", storage_path=tmp_path / "kv.db")
        )
        assert isinstance(store, PeeweeKeyValueStore)
        store.database.close()


class TestBuildResponseCache:
    """Кэш ответов по настройкам cache_*."""

    def test_defaults(self):
        cache = build_response_cache(InventoryConfig())

        assert cache.ttl == 300.0
        assert cache.max_entries is None

    def test_max_entries_from_env(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_CACHE_TTL", "30")
        monkeypatch.setenv("INVENTORY_CACHE_MAX_ENTRIES", "2")

        cache = build_response_cache(InventoryConfig())
        for key in ("GET:/parts:{}", "GET:/shelves:{}", "GET:/health:{}"):
            cache.set(key, [])

        assert cache.ttl == 30
        assert len(cache) == 2
        assert not cache.has("GET:/parts:{}")

    def test_max_entries_from_toml(self, tmp_path, monkeypatch):
        path = tmp_path / "inventory.toml"
        path.write_text("[cache]\nmax_entries = 5\n", encoding="utf-8")
        monkeypatch.setattr("inventory_search.config.find_config_file", lambda: path)

        assert build_response_cache(InventoryConfig()).max_entries == 5
