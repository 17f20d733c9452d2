"""Команда voice — поиск по голосовому транскрипту.

Снимает командные фразы ("hey inventory", "find", "show me", ...) и
выполняет обычный поиск.

Usage:
    inventory-search -i parts.json voice "Hey inventory, find oil filter"
"""

import typer
from rich.markup import escape

from inventory_search.cli.commands.search import open_session, run_search
from inventory_search.cli.console import console, print_error
from inventory_search.core.voice import strip_command_prefixes


def voice(
    transcript: str = typer.Argument(
        ...,
        help="Распознанный текст голосовой команды",
    ),
    limit: int = typer.Option(
        10,
        "--limit",
        "-n",
        help="Максимальное количество результатов",
        min=1,
        max=1000,
    ),
) -> None:
    """Поиск по голосовому транскрипту."""
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    query = strip_command_prefixes(transcript)
    if not query:
        print_error("В транскрипте нет поискового запроса", title="🎙 Голосовой поиск")
        raise typer.Exit(1)

    if not cli_ctx.json_output:
        console.print(f"[dim]🎙 Запрос:[/dim] {escape(query)}", highlight=False)

    session = open_session(cli_ctx)
    run_search(cli_ctx, session, query, limit=limit)
