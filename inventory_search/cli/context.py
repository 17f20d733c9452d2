"""CLI Context — контейнер зависимостей для команд.

Предоставляет ленивую инициализацию компонентов,
чтобы --help работал мгновенно.

Classes:
    CLIContext: Контейнер с ленивой загрузкой конфигурации, коллекции,
        хранилища и SearchSession.
"""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from rich.console import Console

from inventory_search.cli.console import console as default_console
from inventory_search.config import (
    InventoryConfig,
    build_kv_store,
    build_response_cache,
    get_config,
)

if TYPE_CHECKING:
    from inventory_search.domain import Item
    from inventory_search.interfaces.kv_store import BaseKeyValueStore
    from inventory_search.session import SearchSession


def load_items_file(path: Path) -> list["Item"]:
    """Читает коллекцию из JSON-файла.

    Поддерживается массив элементов или объект с ключом "items".

    Raises:
        OSError: Файл не читается.
        ValueError: Невалидный JSON или неподходящая структура.
    """
    with open(path, encoding="utf-8") as f:
        data: Any = json.load(f)

    if isinstance(data, dict) and "items" in data:
        data = data["items"]
    if not isinstance(data, list) or not all(isinstance(i, dict) for i in data):
        raise ValueError(f"{path}: expected a JSON array of objects")
    return data


@dataclass
class CLIContext:
    """Контейнер зависимостей для CLI команд.

    Attributes:
        items_path: JSON-файл с коллекцией (None — загрузка из API).
        log_level: Override уровня логирования из CLI.
        json_output: Режим JSON вывода (для скриптов).
        console: Rich Console для вывода.

    Example:
        >>> ctx = CLIContext(items_path=Path("parts.json"))
        >>> session = ctx.get_session()  # Ленивая инициализация
    """

    # CLI overrides (приоритет над config)
    items_path: Optional[Path] = None
    log_level: Optional[str] = None
    json_output: bool = False
    console: Console = field(default_factory=lambda: default_console)

    # Ленивая инициализация
    _config: Optional[InventoryConfig] = field(default=None, init=False, repr=False)
    _kv: Optional["BaseKeyValueStore"] = field(default=None, init=False, repr=False)
    _items: Optional[list["Item"]] = field(default=None, init=False, repr=False)
    _session: Optional["SearchSession"] = field(default=None, init=False, repr=False)
    _logging_configured: bool = field(default=False, init=False, repr=False)

    def get_config(self) -> InventoryConfig:
        """Загрузить конфигурацию (с учётом CLI overrides)."""
        if self._config is None:
            overrides = {}
            if self.log_level:
                overrides["log_level"] = self.log_level.upper()

            self._config = get_config(**overrides)
            self._ensure_logging(self._config)
        return self._config

    def get_kv(self) -> "BaseKeyValueStore":
        if self._kv is None:
            self._kv = build_kv_store(self.get_config())
        return self._kv

    def get_items(self) -> list["Item"]:
        """Коллекция из --items или из API.

        Raises:
            OSError, ValueError: Файл не читается или имеет неверный формат.
            TransportError: API недоступен.
        """
        if self._items is None:
            if self.items_path is not None:
                self._items = load_items_file(self.items_path)
            else:
                self._items = asyncio.run(self._fetch_items(self.get_config()))
        return self._items

    def get_session(self, with_items: bool = True) -> "SearchSession":
        """SearchSession поверх настроенного хранилища.

        Args:
            with_items: Загрузить коллекцию (для history/patterns не нужна).
        """
        if self._session is None:
            from inventory_search.session import SearchSession

            items = self.get_items() if with_items else []
            self._session = SearchSession.from_config(
                self.get_config(), items, kv=self.get_kv()
            )
        elif with_items and self._items is None:
            self._session.set_items(self.get_items())
        return self._session

    def _ensure_logging(self, config: InventoryConfig) -> None:
        """Настройка логирования из конфига (один раз)."""
        if self._logging_configured:
            return

        from inventory_search.utils.logger import setup_logging

        setup_logging(config.to_logging_config())
        self._logging_configured = True

    @staticmethod
    async def _fetch_items(config: InventoryConfig) -> list["Item"]:
        from inventory_search.client import InventoryClient
        from inventory_search.core.request_coordinator import RequestCoordinator
        from inventory_search.infrastructure.http import HttpxTransport

        async with HttpxTransport(
            config.api_base_url, timeout=config.api_timeout
        ) as transport:
            coordinator = RequestCoordinator(transport, build_response_cache(config))
            data = await InventoryClient(coordinator).fetch_parts()

        if not isinstance(data, list):
            raise ValueError(f"{config.api_base_url}/parts: expected a list of items")
        return data


__all__ = ["CLIContext", "load_items_file"]
