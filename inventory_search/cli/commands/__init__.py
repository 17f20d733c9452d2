"""CLI команды.

Модули:
    search: inventory-search search / suggest — поиск и подсказки.
    voice: inventory-search voice — поиск по голосовому транскрипту.
    history_cmd: inventory-search history — история поиска.
    patterns_cmd: inventory-search patterns — usage patterns.
    config_cmd: inventory-search config — конфигурация.
"""

from inventory_search.cli.commands import config_cmd
from inventory_search.cli.commands import history_cmd
from inventory_search.cli.commands import patterns_cmd
from inventory_search.cli.commands import search
from inventory_search.cli.commands import voice

__all__ = [
    "config_cmd",
    "history_cmd",
    "patterns_cmd",
    "search",
    "voice",
]
