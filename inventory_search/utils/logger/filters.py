"""Фильтры логирования для безопасности.

Классы:
    SensitiveDataFilter
        Фильтр для маскирования токенов и учётных данных в логах.
"""

import logging
import re
from typing import Pattern

# Эндпоинты и заголовки запросов попадают в логи координатора
SENSITIVE_PATTERNS: list[Pattern[str]] = [
    re.compile(r"(?i)bearer\s+[a-zA-Z0-9._~+/=-]{16,}"),  # Authorization: Bearer
    re.compile(r"(?<=://)[^/\s:@]+:[^/\s@]+(?=@)"),  # user:password@host
    re.compile(
        r"(?i)(?:(?<=[?&]token=)|(?<=[?&]api_key=)|(?<=[?&]apikey=)|(?<=[?&]key=))[^&\s]+"
    ),  # ?token=...
    re.compile(r"key-[0-9a-zA-Z]{32,}"),  # Generic API Key
]

REDACTED: str = "***REDACTED***"


class SensitiveDataFilter(logging.Filter):
    """Фильтр для маскирования секретных данных в логах.

    Заменяет найденные паттерны на ***REDACTED*** в record.msg
    и record.args. Запись никогда не отбрасывается.

    Attributes:
        patterns: Список скомпилированных regex-паттернов для поиска.
        redacted: Строка замены для найденных секретов.
    """

    def __init__(
        self,
        patterns: list[Pattern[str]] | None = None,
        redacted: str = REDACTED,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.patterns = patterns or SENSITIVE_PATTERNS
        self.redacted = redacted

    def _redact_string(self, text: str) -> str:
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self.redacted, result)
        return result

    def _redact_value(self, value: object) -> object:
        """Рекурсивно маскирует секреты в значении."""
        if isinstance(value, str):
            return self._redact_string(value)
        elif isinstance(value, dict):
            return {k: self._redact_value(v) for k, v in value.items()}
        elif isinstance(value, (list, tuple)):
            redacted_items = [self._redact_value(item) for item in value]
            return type(value)(redacted_items)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._redact_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        # Структурированный контекст SearchLogger лежит в атрибутах записи
        for key in ("endpoint", "url"):
            value = getattr(record, key, None)
            if isinstance(value, str):
                setattr(record, key, self._redact_string(value))

        return True
