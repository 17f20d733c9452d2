"""Форматтеры логирования с семантическими эмодзи.

Классы:
    FileFormatter
        Подробный форматтер для файлового вывода.

    JSONFormatter
        Структурированный JSON для агрегаторов логов.
"""

import json
import logging
from datetime import datetime
from typing import Any

from .levels import TRACE

# Маппинг компонентов имени модуля на эмодзи
EMOJI_MAP: dict[str, str] = {
    # Ранжирование
    "scorer": "🎯",
    "ranked_search": "🔍",
    "advanced_search": "🔍",
    "search": "🔍",
    "highlight": "🖍️",
    "debounce": "⏱️",
    # Подсказки и обучение
    "suggestions": "💡",
    "history": "🕘",
    "usage_patterns": "🧠",
    "voice": "🎙️",
    # Кэш и сеть
    "response_cache": "💾",
    "cache": "💾",
    "request_coordinator": "🌐",
    "transport": "🌐",
    "http": "🌐",
    "client": "🌐",
    # Хранилища
    "storage": "🗄️",
    "peewee": "🗄️",
    "json_file": "🗄️",
    "memory": "🗄️",
    # Оркестрация
    "session": "📥",
    "core": "📥",
    "config": "⚙️",
    "cli": "🖥️",
    "commands": "🖥️",
}

LEVEL_EMOJI: dict[int, str] = {
    logging.CRITICAL: "💀",
    logging.ERROR: "❌",
    logging.WARNING: "⚠️",
    logging.INFO: "",  # Для INFO используем эмодзи модуля
    logging.DEBUG: "🔧",
    TRACE: "🔬",
}

FALLBACK_EMOJI: str = "📌"

# Ключи контекста для отображения в префиксе
CONTEXT_ID_KEYS: tuple[str, ...] = (
    "session_id",
    "request_id",
)


def get_module_emoji(logger_name: str) -> str:
    """Определяет эмодзи по имени логгера.

    Args:
        logger_name: Полное имя логгера (например, inventory_search.core.scorer).

    Returns:
        Эмодзи для модуля или FALLBACK_EMOJI.
    """
    parts = logger_name.lower().split(".")

    # Ищем совпадение с конца (более специфичные модули)
    for part in reversed(parts):
        if part in EMOJI_MAP:
            return EMOJI_MAP[part]

    return FALLBACK_EMOJI


def format_context_prefix(record: logging.LogRecord) -> str:
    """Формирует префикс вида "[session-1/req-3] " или пустую строку."""
    context_ids: list[str] = []

    for key in CONTEXT_ID_KEYS:
        value = getattr(record, key, None)
        if value:
            context_ids.append(str(value))

    if context_ids:
        return f"[{'/'.join(context_ids)}] "
    return ""


def format_extra_context(record: logging.LogRecord) -> dict[str, Any]:
    """Извлекает дополнительный контекст из записи.

    Args:
        record: Запись лога.

    Returns:
        Словарь с контекстом (без стандартных полей LogRecord).
    """
    standard_fields = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }

    context_fields = set(CONTEXT_ID_KEYS)

    extra: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key not in standard_fields and key not in context_fields:
            if not key.startswith("_"):
                extra[key] = value

    return extra


class FileFormatter(logging.Formatter):
    """Подробный форматтер для файлового вывода.

    Формат: 2026-10-17 14:20:02 | MODULE | LEVEL | 🔍 [context] Message | key=value
    """

    def __init__(self, json_context: bool = False) -> None:
        """Инициализирует форматтер.

        Args:
            json_context: Выводить контекст как JSON.
        """
        super().__init__()
        self.json_context = json_context

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        module = record.name.split(".")[-1].upper()
        emoji = get_module_emoji(record.name)
        message = record.getMessage()
        extra = format_extra_context(record)

        parts = [
            time_str,
            module,
            record.levelname,
            f"{emoji} {format_context_prefix(record)}{message}",
        ]

        if extra:
            if self.json_context:
                parts.append(json.dumps(extra, ensure_ascii=False, default=str))
            else:
                parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))

        result = " | ".join(parts)

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class JSONFormatter(logging.Formatter):
    """JSON-форматтер для логов.

    Формат:
        {
            "timestamp": "2026-10-17T14:30:00.123Z",
            "level": "INFO",
            "logger": "inventory_search.core.response_cache",
            "message": "Cache invalidated",
            "context": {"request_id": "req-3"},
            "extra": {"pattern": "parts", "removed": 4}
        }
    """

    def __init__(self, include_location: bool = True) -> None:
        super().__init__()
        self.include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context: dict[str, Any] = {}
        for key in CONTEXT_ID_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                context[key] = value
        if context:
            data["context"] = context

        extra = format_extra_context(record)
        if extra:
            data["extra"] = extra

        if self.include_location:
            data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(data, ensure_ascii=False, default=str)
