"""Единая конфигурация Inventory Search.

Загружает настройки из (в порядке приоритета):
1. Аргументы (переданные как kwargs, например из CLI)
2. Environment variables (INVENTORY_*) и .env
3. inventory.toml в текущей или родительских директориях
4. Default values

Классы:
    InventoryConfig
        Pydantic Settings с поддержкой TOML и env variables.

Функции:
    get_config
        Получить конфигурацию с возможными override'ами.
    reset_config
        Сбросить глобальную конфигурацию (для тестов).
    find_config_file
        Найти inventory.toml в текущей или родительских директориях.
    build_kv_store
        Создать PersistentKV по настройкам storage_*.
    build_response_cache
        Создать ResponseCache по настройкам cache_*.

Example:
    >>> from inventory_search.config import get_config
    >>> config = get_config(storage_backend="memory", log_level="DEBUG")
    >>> config.search_fields
    ['partNumber', 'description', 'category', 'shelf']
"""

import tomllib
from pathlib import Path
from typing import Annotated, Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from inventory_search.core.highlight import DEFAULT_HIGHLIGHT_CLASS
from inventory_search.core.response_cache import ResponseCache
from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.utils.logger import LoggingConfig, get_logger
from inventory_search.utils.logger.config import LogLevel

logger = get_logger(__name__)

CONFIG_FILE_NAME = "inventory.toml"

StorageBackend = Literal["memory", "json", "sqlite"]

# Секции TOML -> поля конфига
TOML_MAPPING: dict[tuple[str, str], str] = {
    ("api", "base_url"): "api_base_url",
    ("api", "timeout"): "api_timeout",
    ("cache", "ttl"): "cache_ttl",
    ("cache", "max_entries"): "cache_max_entries",
    ("search", "debounce_ms"): "debounce_ms",
    ("search", "fields"): "search_fields",
    ("search", "identity_field"): "identity_field",
    ("search", "category_field"): "category_field",
    ("search", "highlight_class"): "highlight_class",
    ("suggestions", "limit"): "suggestion_limit",
    ("history", "limit"): "history_limit",
    ("history", "preview"): "history_preview",
    ("storage", "backend"): "storage_backend",
    ("storage", "path"): "storage_path",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Найти inventory.toml в текущей или родительских директориях.

    Args:
        start_dir: Начальная директория поиска (по умолчанию cwd).

    Returns:
        Path к inventory.toml или None если не найден.
    """
    current = start_dir or Path.cwd()

    # Не больше 10 уровней вверх
    for _ in range(10):
        config_path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Загружает inventory.toml и выравнивает секции в плоские поля.

    [cache]
    ttl = 60

    превращается в {"cache_ttl": 60}. Плоские ключи верхнего уровня
    (cache_ttl = 60) тоже поддерживаются.
    """
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load TOML", path=str(path), error=str(e))
        return {}

    flat: dict[str, Any] = {}
    for (section, key), field_name in TOML_MAPPING.items():
        table = raw.get(section)
        if isinstance(table, dict) and key in table:
            flat[field_name] = table[key]

    for field_name in TOML_MAPPING.values():
        if field_name in raw:
            flat[field_name] = raw[field_name]

    return flat


class TomlSectionSource(PydanticBaseSettingsSource):
    """Источник настроек из inventory.toml (приоритет ниже env)."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        path = find_config_file()
        self._data: dict[str, Any] = load_toml(path) if path else {}
        if path:
            logger.debug("Loaded config from TOML", path=str(path))

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class InventoryConfig(BaseSettings):
    """Конфигурация Inventory Search.

    Attributes:
        api_base_url: Базовый URL REST API инвентаря.
        api_timeout: Таймаут HTTP-запроса в секундах.
        cache_ttl: TTL кэша ответов в секундах.
        cache_max_entries: Максимум записей в кэше (None — без ограничения).
        debounce_ms: Окно debounce запроса.
        history_limit: Максимальная длина истории поиска.
        history_preview: Записей истории в подсказках для пустого запроса.
        suggestion_limit: Максимум подсказок.
        search_fields: Поля элементов для поиска (FieldPath).
        identity_field: Поле идентичности элемента.
        category_field: Поле категории.
        storage_backend: Реализация PersistentKV (memory/json/sqlite).
        storage_path: Файл хранилища для json/sqlite.
        highlight_class: CSS-класс подсветки совпадений.
        log_level: Уровень логирования консоли.
        log_file: Путь к файлу логов.

    Environment Variables:
        INVENTORY_API_BASE_URL, INVENTORY_CACHE_TTL,
        INVENTORY_SEARCH_FIELDS (через запятую), INVENTORY_STORAGE_BACKEND,
        ... и другие с префиксом INVENTORY_.
    """

    # === API ===
    api_base_url: str = Field(
        default="http://localhost:3001/api",
        description="Базовый URL REST API",
    )

    api_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Таймаут HTTP-запроса (секунды)",
    )

    # === Cache ===
    cache_ttl: float = Field(
        default=300.0,
        ge=0,
        description="Время жизни ответа в кэше (секунды)",
    )

    cache_max_entries: Optional[int] = Field(
        default=None,
        ge=1,
        description="Максимум записей в кэше (None = без ограничения)",
    )

    # === Search ===
    debounce_ms: int = Field(
        default=300,
        ge=0,
        le=5000,
        description="Окно debounce запроса (мс)",
    )

    search_fields: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["partNumber", "description", "category", "shelf"],
        min_length=1,
        description="Поля элементов для поиска",
    )

    identity_field: str = Field(
        default="partNumber",
        description="Поле идентичности элемента",
    )

    category_field: str = Field(
        default="category",
        description="Поле категории элемента",
    )

    highlight_class: str = Field(
        default=DEFAULT_HIGHLIGHT_CLASS,
        description="CSS-класс подсветки совпадений",
    )

    # === Suggestions & history ===
    suggestion_limit: int = Field(default=8, ge=1, le=50)

    history_limit: int = Field(default=10, ge=1, le=100)

    history_preview: int = Field(default=5, ge=0, le=100)

    # === Storage ===
    storage_backend: StorageBackend = Field(
        default="sqlite",
        description="Реализация PersistentKV",
    )

    storage_path: Path = Field(
        default=Path("inventory_search.db"),
        description="Файл хранилища (json/sqlite)",
    )

    # === Logging ===
    log_level: LogLevel = Field(
        default="WARNING",
        description="Уровень логирования",
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Путь к файлу логов (None = только консоль)",
    )

    # === Validators ===
    @field_validator("search_fields", mode="before")
    @classmethod
    def split_fields(cls, v: Any) -> Any:
        """"partNumber, description" → ["partNumber", "description"]."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("storage_path", mode="before")
    @classmethod
    def validate_storage_path(cls, v: Any) -> Path:
        if v is None or v == "":
            return Path("inventory_search.db")
        return Path(v).expanduser()

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlSectionSource(settings_cls),
            file_secret_settings,
        )

    # === Utility Methods ===

    def to_logging_config(self) -> LoggingConfig:
        return LoggingConfig(level=self.log_level, log_file=self.log_file)

    def to_toml_dict(self) -> dict[str, Any]:
        """Структура для записи inventory.toml (обратная к load_toml)."""
        document: dict[str, Any] = {}
        for (section, key), field_name in TOML_MAPPING.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            if isinstance(value, Path):
                value = str(value)
            document.setdefault(section, {})[key] = value
        return document


def build_kv_store(config: InventoryConfig) -> BaseKeyValueStore:
    """Создаёт PersistentKV по storage_backend.

    Args:
        config: Конфигурация.

    Returns:
        InMemoryKeyValueStore, JsonFileKeyValueStore или PeeweeKeyValueStore.
    """
    from inventory_search.infrastructure.storage import (
        InMemoryKeyValueStore,
        JsonFileKeyValueStore,
        PeeweeKeyValueStore,
        init_sqlite_database,
    )

    logger.debug(
        "Building key-value store",
        backend=config.storage_backend,
        path=str(config.storage_path),
    )

    if config.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if config.storage_backend == "json":
        return JsonFileKeyValueStore(config.storage_path)
    return PeeweeKeyValueStore(init_sqlite_database(config.storage_path))


def build_response_cache(config: InventoryConfig) -> ResponseCache:
    """Кэш ответов API с TTL и границей размера из конфигурации."""
    return ResponseCache(config.cache_ttl, max_entries=config.cache_max_entries)


# === Global Config Accessor ===

_config: Optional[InventoryConfig] = None


def get_config(**overrides: Any) -> InventoryConfig:
    """Получить конфигурацию с возможными override'ами.

    При первом вызове создаёт конфигурацию.
    Если переданы overrides, всегда создаёт новый экземпляр.

    Args:
        **overrides: Значения, переопределяющие env и TOML.

    Returns:
        InventoryConfig с учётом всех источников.
    """
    global _config

    if overrides or _config is None:
        _config = InventoryConfig(**overrides)

    return _config


def reset_config() -> None:
    """Сбросить глобальный конфиг (для тестов)."""
    global _config
    _config = None


__all__ = [
    "InventoryConfig",
    "StorageBackend",
    "get_config",
    "reset_config",
    "find_config_file",
    "load_toml",
    "build_kv_store",
    "build_response_cache",
]
