"""Debounce как явная машина состояний.

Классы:
    Debouncer
        Откладывает фиксацию значения до тишины длиной delay_ms.
"""

import time
from typing import Callable, Generic, Optional, TypeVar

from inventory_search.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]


class Debouncer(Generic[T]):
    """Отложенная фиксация часто меняющегося значения.

    push() заменяет ожидающее значение и переносит дедлайн; tick()
    фиксирует значение, только если с последнего push() прошло не меньше
    delay_ms. Таймеров нет: время приходит через tick(now) или из clock,
    поэтому поведение детерминировано в тестах.

    Attributes:
        delay_ms: Длина окна тишины в миллисекундах.
        value: Последнее зафиксированное значение.

    Example:
        >>> d = Debouncer("", delay_ms=300, clock=lambda: 0.0)
        >>> d.push("fil", now=0.0)
        >>> d.tick(now=0.1)
        False
        >>> d.tick(now=0.3)
        True
        >>> d.value
        'fil'
    """

    def __init__(
        self,
        initial: T,
        delay_ms: int = 300,
        clock: Optional[Clock] = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        self.delay_ms = delay_ms
        self.value: T = initial
        self._clock: Clock = clock or time.monotonic
        self._pending: Optional[T] = None
        self._has_pending = False
        self._deadline = 0.0

    @property
    def pending(self) -> bool:
        """Есть ли значение, ожидающее фиксации."""
        return self._has_pending

    @property
    def deadline(self) -> Optional[float]:
        """Момент, начиная с которого tick() зафиксирует значение."""
        return self._deadline if self._has_pending else None

    def push(self, value: T, now: Optional[float] = None) -> None:
        """Планирует фиксацию value, отменяя ранее запланированную."""
        now = self._clock() if now is None else now
        self._pending = value
        self._has_pending = True
        self._deadline = now + self.delay_ms / 1000.0

    def tick(self, now: Optional[float] = None) -> bool:
        """Фиксирует ожидающее значение, если окно тишины истекло.

        Returns:
            True если зафиксированное значение изменилось.
        """
        if not self._has_pending:
            return False
        now = self._clock() if now is None else now
        if now < self._deadline:
            return False

        value = self._pending
        self._pending = None
        self._has_pending = False

        if value == self.value:
            return False
        self.value = value  # type: ignore[assignment]
        logger.trace("Debounced value committed", delay_ms=self.delay_ms)
        return True

    def flush(self) -> bool:
        """Немедленно фиксирует ожидающее значение (без ожидания)."""
        if not self._has_pending:
            return False
        return self.tick(now=self._deadline)

    def reset(self, value: T) -> None:
        """Фиксирует value сразу и отменяет ожидание."""
        self.value = value
        self._pending = None
        self._has_pending = False
