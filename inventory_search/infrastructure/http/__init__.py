"""HTTP-адаптеры.

Классы:
    HttpxTransport
        Транспорт к REST API инвентаря на httpx.
"""

from inventory_search.infrastructure.http.transport import HttpxTransport

__all__ = ["HttpxTransport"]
