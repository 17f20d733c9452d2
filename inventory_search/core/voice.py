"""Голосовой поиск.

Классы:
    VoiceSearchController
        Активация распознавателя и передача очищенного транскрипта в поиск.

Функции:
    strip_command_prefixes
        Удаляет из транскрипта ведущие командные фразы.
"""

import re
from typing import Callable, Optional

from inventory_search.interfaces.voice import BaseVoiceRecognizer
from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

COMMAND_PREFIXES: tuple[str, ...] = (
    "hey inventory",
    "inventory",
    "find",
    "search for",
    "look for",
    "show me",
)

_PREFIX_PATTERNS = [
    re.compile(rf"^{re.escape(prefix)}\b[\s,.!?:;-]*") for prefix in COMMAND_PREFIXES
]


def strip_command_prefixes(transcript: str) -> str:
    """Нормализует транскрипт в поисковый запрос.

    Текст приводится к нижнему регистру, затем фразы из COMMAND_PREFIXES
    снимаются по очереди (каждая не более одного раза, только целым словом
    в начале строки) вместе со следующими за ней пробелами и пунктуацией.

    Example:
        >>> strip_command_prefixes("Hey inventory, find oil filter")
        'oil filter'
    """
    query = transcript.strip().lower()
    for pattern in _PREFIX_PATTERNS:
        query = pattern.sub("", query, count=1)
    return query.strip()


class VoiceSearchController:
    """Связывает распознаватель речи с поиском.

    Attributes:
        recognizer: Внешний распознаватель.
    """

    def __init__(
        self,
        recognizer: BaseVoiceRecognizer,
        on_query: Callable[[str], None],
    ) -> None:
        self.recognizer = recognizer
        self._on_query = on_query
        self._active = False
        self.last_transcript: Optional[str] = None

    @property
    def is_supported(self) -> bool:
        return self.recognizer.is_supported

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> bool:
        """Начинает активацию; False если распознавание недоступно."""
        if not self.recognizer.is_supported:
            logger.warning("Voice recognition is not supported")
            return False
        if self._active:
            return True

        self._active = True
        logger.debug("Voice activation started")
        self.recognizer.start(self._handle_transcript)
        return True

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self.recognizer.stop()
        logger.debug("Voice activation stopped")

    def _handle_transcript(self, transcript: str) -> None:
        # одна активация: не более одного транскрипта
        if not self._active:
            return
        self._active = False
        self.last_transcript = transcript

        query = strip_command_prefixes(transcript)
        logger.info("Voice query recognized", query=query)
        if query:
            self._on_query(query)
