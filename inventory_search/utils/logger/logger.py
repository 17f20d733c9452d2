"""Семантический логгер с поддержкой контекста.

Классы:
    SearchLogger
        Адаптер над logging.Logger с поддержкой контекста и специальных методов.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from .levels import TRACE
from .formatters import CONTEXT_ID_KEYS, get_module_emoji, LEVEL_EMOJI


class SearchLogger:
    """Адаптер для структурированного логирования с контекстом.

    Предоставляет:
    - Стандартные методы логирования (trace, debug, info, warning, error)
    - Метод bind() для привязки контекста (session_id, request_id)
    - error_with_context() для исключений на границах транспорта и хранилища

    Attributes:
        name: Имя логгера.
        _logger: Обёрнутый logging.Logger.
        _context: Привязанный контекст для всех сообщений.

    Example:
        >>> logger = SearchLogger("inventory_search.core.request_coordinator")
        >>> log = logger.bind(request_id="req-7")
        >>> log.debug("Request superseded")  # -> 🔧 [req-7] Request superseded
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = context or {}

    def bind(self, **context: Any) -> SearchLogger:
        """Создаёт новый логгер с дополнительным контекстом.

        Args:
            **context: Ключи контекста для привязки (session_id, request_id).

        Returns:
            Новый SearchLogger с объединённым контекстом.
        """
        merged_context = {**self._context, **context}
        return SearchLogger(self.name, merged_context)

    def _log(self, level: int, msg: str, **context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return

        extra = {**self._context, **context}

        # RichHandler не использует наш форматтер, поэтому ID контекста
        # вставляются прямо в сообщение
        context_ids: list[str] = []
        for key in CONTEXT_ID_KEYS:
            value = extra.get(key)
            if value:
                context_ids.append(str(value))

        context_prefix = f"[{'/'.join(context_ids)}] " if context_ids else ""

        emoji = LEVEL_EMOJI.get(level, "") or get_module_emoji(self.name)

        self._logger.log(level, f"{emoji} {context_prefix}{msg}", extra=extra)

    def trace(self, msg: str, **context: Any) -> None:
        """Логирование на уровне TRACE (5): ключи кэша, тела запросов."""
        self._log(TRACE, msg, **context)

    def debug(self, msg: str, **context: Any) -> None:
        """Логирование на уровне DEBUG (10)."""
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        """Логирование на уровне INFO (20)."""
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        """Логирование на уровне WARNING (30)."""
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        """Логирование на уровне ERROR (40)."""
        self._log(logging.ERROR, msg, **context)

    def critical(self, msg: str, **context: Any) -> None:
        """Логирование на уровне CRITICAL (50)."""
        self._log(logging.CRITICAL, msg, **context)

    def error_with_context(
        self,
        exc: Exception,
        msg: str | None = None,
        *,
        level: int = logging.ERROR,
        include_traceback: bool = False,
        **context: Any,
    ) -> None:
        """Логирование исключения с расширенным контекстом.

        Args:
            exc: Исключение.
            msg: Дополнительное сообщение (по умолчанию str(exc)).
            level: Уровень записи (ошибки парсинга хранилища пишутся как WARNING).
            include_traceback: Включить traceback в контекст.
            **context: Дополнительный контекст.
        """
        error_context = {
            "exception_type": type(exc).__name__,
            "exception_msg": str(exc),
            **context,
        }

        if include_traceback:
            error_context["traceback"] = traceback.format_exc()

        self._log(level, msg or str(exc), **error_context)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def level(self) -> int:
        """Эффективный уровень логгера."""
        return self._logger.getEffectiveLevel()
