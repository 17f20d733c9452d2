"""Интерфейсы (контракты) для внешних коллабораторов.

Классы:
    BaseKeyValueStore
        Персистентное key-value хранилище (история, usage patterns).
    BaseTransport
        Сетевой транспорт к REST API инвентаря.
    BaseVoiceRecognizer
        Распознавание речи (один транскрипт на активацию).
"""

from inventory_search.interfaces.kv_store import BaseKeyValueStore
from inventory_search.interfaces.transport import BaseTransport
from inventory_search.interfaces.voice import BaseVoiceRecognizer, TranscriptCallback

__all__ = [
    "BaseKeyValueStore",
    "BaseTransport",
    "BaseVoiceRecognizer",
    "TranscriptCallback",
]
