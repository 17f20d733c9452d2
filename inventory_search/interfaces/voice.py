"""Интерфейс распознавания речи.

Классы:
    BaseVoiceRecognizer
        Внешний коллаборатор: одна активация — не более одного транскрипта.
"""

from abc import ABC, abstractmethod
from typing import Callable

TranscriptCallback = Callable[[str], None]


class BaseVoiceRecognizer(ABC):
    """Абстрактный распознаватель речи (черный ящик speech-to-text).

    После start() реализация вызывает on_transcript не более одного раза
    с финальным текстом и затем завершает активацию.
    """

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        """Доступно ли распознавание в текущем окружении."""
        raise NotImplementedError

    @abstractmethod
    def start(self, on_transcript: TranscriptCallback) -> None:
        """Начинает активацию.

        Args:
            on_transcript: Колбэк для финального транскрипта.
        """
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        """Прерывает активацию (колбэк может больше не вызываться)."""
        raise NotImplementedError


__all__ = ["BaseVoiceRecognizer", "TranscriptCallback"]
