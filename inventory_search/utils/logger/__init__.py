"""Система семантического логирования с эмодзи и фильтрацией секретов.

Функции:
    get_logger(name: str) -> SearchLogger
        Получить настроенный логгер для модуля.

    setup_logging(config: LoggingConfig | None = None) -> None
        Инициализировать систему логирования.

Классы:
    SearchLogger
        Адаптер с поддержкой контекста (bind).

    LoggingConfig
        Pydantic-модель конфигурации с поддержкой environment variables.

Константы:
    TRACE: int
        Уровень TRACE (5), ниже DEBUG.

Environment Variables:
    INVENTORY_LOG_LEVEL: Уровень консольного вывода.
    INVENTORY_LOG_FILE: Путь к файлу логов.
    INVENTORY_LOG_JSON: JSON-формат для файла (true/false).
    INVENTORY_LOG_REDACT: Маскировать токены (true/false).

Example:
    >>> from inventory_search.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Cache hit", key="GET:/parts:{}")
"""

import logging

from rich.logging import RichHandler

from .config import LoggingConfig
from .filters import SensitiveDataFilter
from .formatters import FileFormatter, JSONFormatter
from .levels import TRACE, install_trace_level
from .logger import SearchLogger

install_trace_level()

_logging_configured: bool = False
_current_config: LoggingConfig | None = None

ROOT_LOGGER_NAME: str = "inventory_search"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Инициализирует систему логирования.

    Настраивает:
    - RichHandler для консоли (цветной вывод)
    - FileHandler для файла (опционально)
    - SensitiveDataFilter для маскирования токенов

    Args:
        config: Конфигурация логирования. Если None, используются дефолты.

    Note:
        Безопасно вызывать повторно — старые хендлеры будут удалены.
    """
    global _logging_configured, _current_config

    config = config or LoggingConfig()
    _current_config = config

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # TRACE, чтобы не фильтровать раньше хендлеров
    root_logger.setLevel(TRACE)

    sensitive_filter = SensitiveDataFilter() if config.redact_secrets else None

    console_level = logging.getLevelName(config.level)

    # markup=False: наши [request-id] иначе интерпретируются как style tag
    console_handler = RichHandler(
        level=console_level,
        show_time=True,
        show_level=False,
        show_path=config.show_path,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
    )

    if sensitive_filter:
        console_handler.addFilter(sensitive_filter)

    root_logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(
            config.log_file,
            mode="a",
            encoding="utf-8",
        )
        file_handler.setLevel(logging.getLevelName(config.file_level))
        file_handler.setFormatter(
            JSONFormatter() if config.json_format else FileFormatter()
        )

        if sensitive_filter:
            file_handler.addFilter(sensitive_filter)

        root_logger.addHandler(file_handler)

    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> SearchLogger:
    """Получить настроенный логгер для модуля.

    Args:
        name: Имя модуля (обычно __name__).

    Returns:
        SearchLogger с поддержкой контекста и эмодзи.
    """
    if not _logging_configured:
        setup_logging()

    return SearchLogger(name)


def get_current_config() -> LoggingConfig:
    """Возвращает активную LoggingConfig или дефолтную если не настроено."""
    return _current_config or LoggingConfig()


__all__ = [
    "TRACE",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "setup_logging",
    "get_current_config",
    "SearchLogger",
    "LoggingConfig",
    "FileFormatter",
    "JSONFormatter",
    "SensitiveDataFilter",
]
