"""Команда patterns — обучение на выборе пользователя.

Подкоманды:
    record: Записать выбор элемента после запроса.
    show: Показать накопленные usage patterns.

Usage:
    inventory-search patterns record "oil filter" OF-100
    inventory-search patterns show
"""

import json

import typer
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from inventory_search.cli.console import console, print_error

app = typer.Typer(
    help="⭐ Usage patterns: какие элементы выбирают по запросу.",
    no_args_is_help=True,
)


@app.command("record")
def record(
    query: str = typer.Argument(..., help="Поисковый запрос"),
    identity: str = typer.Argument(..., help="Идентификатор выбранного элемента"),
) -> None:
    """Записать выбор элемента IDENTITY после запроса QUERY."""
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    config = cli_ctx.get_config()
    session = cli_ctx.get_session(with_items=False)

    # Элемент не обязан быть в коллекции: достаточно ключа идентичности
    item = {config.identity_field: identity}
    if not session.patterns.record(query, item):
        print_error("Пустой запрос или идентификатор — наблюдение не записано")
        raise typer.Exit(1)

    pattern = session.patterns.get(query)
    total = pattern.total_count if pattern else 0
    console.print(
        f"[green]✓[/green] {escape(query.lower())} → {escape(identity)} "
        f"(всего наблюдений: {total})",
        markup=True,
        highlight=False,
    )


@app.command("show")
def show(
    limit: int = typer.Option(
        5,
        "--limit",
        "-n",
        help="Сколько элементов показывать на запрос.",
        min=1,
    ),
) -> None:
    """Показать usage patterns."""
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    patterns = cli_ctx.get_session(with_items=False).patterns

    if cli_ctx.json_output:
        console.print_json(json.dumps(patterns.to_dict(), ensure_ascii=False))
        return

    if not len(patterns):
        console.print("[dim]Usage patterns пока нет[/dim]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Запрос")
    table.add_column("Всего", justify="right")
    table.add_column("Элементы")

    ranked = sorted(
        patterns.patterns.items(), key=lambda kv: kv[1].total_count, reverse=True
    )
    for query, pattern in ranked:
        top = ", ".join(
            f"{key}×{count}" for key, count in patterns.top_items(query, limit)
        )
        table.add_row(Text(query), str(pattern.total_count), Text(top))

    console.print(table)
