"""DTO кэша ответов и исходов запросов.

Классы:
    CacheEntry
        Закэшированный ответ с меткой времени.
    RequestOutcome
        Исходы запроса, не являющиеся данными (ABORTED).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Закэшированный JSON-ответ.

    Attributes:
        data: Десериализованный ответ.
        timestamp: Момент записи по часам кэша (секунды).
    """

    data: Any
    timestamp: float

    def is_expired(self, now: float, ttl: float) -> bool:
        """Запись протухла строго после ttl (ровно на границе ещё валидна)."""
        return now - self.timestamp > ttl


class RequestOutcome(Enum):
    """Исход запроса, не несущий данных.

    Attributes:
        ABORTED: Запрос вытеснен более новым и отменён.
    """

    ABORTED = "aborted"

    def __repr__(self) -> str:
        return f"<{self.name}>"


ABORTED = RequestOutcome.ABORTED
