"""Конфигурация системы логирования.

Классы:
    LoggingConfig
        Pydantic-модель для настройки логирования с поддержкой env variables.

Environment Variables:
    INVENTORY_LOG_LEVEL: Уровень логирования (DEBUG/INFO/WARNING/ERROR).
    INVENTORY_LOG_FILE: Путь к файлу логов.
    INVENTORY_LOG_JSON: Включить JSON-формат (true/false).
    INVENTORY_LOG_REDACT: Маскировать токены в URL и заголовках (true/false).
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Конфигурация системы логирования.

    Приоритет настроек (от высшего к низшему):
        1. Явный параметр в коде
        2. Environment variable
        3. Default value

    Attributes:
        level: Минимальный уровень для консольного вывода.
        file_level: Минимальный уровень для файлового вывода.
        log_file: Путь к файлу логов (None = только консоль).
        json_format: Использовать JSON-формат для файла.
        show_path: Показывать путь к модулю в выводе.
        redact_secrets: Маскировать токены в логах.

    Example:
        >>> config = LoggingConfig(level="DEBUG", log_file="/tmp/inventory.log")
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Минимальный уровень для консольного вывода",
    )

    file_level: LogLevel = Field(
        default="TRACE",
        description="Минимальный уровень для файлового вывода",
    )

    log_file: Path | None = Field(
        default=None,
        alias="file",
        description="Путь к файлу логов (None = только консоль)",
    )

    json_format: bool = Field(
        default=False,
        alias="json",
        description="Использовать JSON-формат для файла",
    )

    show_path: bool = Field(
        default=False,
        description="Показывать путь к модулю в выводе",
    )

    redact_secrets: bool = Field(
        default=True,
        alias="redact",
        description="Маскировать токены в логах",
    )

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_LOG_",
        env_file=None,
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
