"""Кастомные уровни логирования.

Функции:
    install_trace_level()
        Регистрирует уровень TRACE (5) и патчит Logger.

Константы:
    TRACE: int
        Значение уровня TRACE (5), ниже DEBUG (10).
"""

import logging
from typing import Any

# Уровень TRACE: для дампов ключей кэша, тел запросов и скоринга
TRACE: int = 5

_trace_installed: bool = False


def _trace_method(
    self: logging.Logger, message: str, *args: Any, **kwargs: Any
) -> None:
    """Логирование на уровне TRACE (5)."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


def install_trace_level() -> None:
    """Регистрирует уровень TRACE и добавляет метод trace() к Logger.

    Безопасно вызывать многократно — повторные вызовы игнорируются.
    """
    global _trace_installed

    if _trace_installed:
        return

    logging.addLevelName(TRACE, "TRACE")
    logging.TRACE = TRACE  # type: ignore[attr-defined]
    logging.Logger.trace = _trace_method  # type: ignore[attr-defined]

    _trace_installed = True


install_trace_level()
