"""Команда history — история поисковых запросов.

Подкоманды:
    show: Показать историю (самые свежие первыми).
    clear: Очистить историю.

Usage:
    inventory-search history show
    inventory-search history clear --yes
"""

import json
from datetime import datetime

import typer
from rich.table import Table
from rich.text import Text

from inventory_search.cli.console import console

app = typer.Typer(
    help="🕘 Просмотр и очистка истории поиска.",
    no_args_is_help=True,
)


@app.command("show")
def show() -> None:
    """Показать историю поиска."""
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    entries = cli_ctx.get_session(with_items=False).history.entries

    if cli_ctx.json_output:
        console.print_json(
            json.dumps([e.to_dict() for e in entries], ensure_ascii=False)
        )
        return

    if not entries:
        console.print("[dim]История поиска пуста[/dim]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Запрос")
    table.add_column("Count", justify="right")
    table.add_column("Когда", style="dim")

    for i, entry in enumerate(entries, 1):
        when = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        table.add_row(str(i), Text(entry.term), str(entry.count), when)

    console.print(table)


@app.command("clear")
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Не спрашивать подтверждение.",
    ),
) -> None:
    """Очистить историю поиска."""
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    session = cli_ctx.get_session(with_items=False)
    count = len(session.history)

    if not yes and count and not typer.confirm(f"Удалить {count} запрос(ов) из истории?"):
        raise typer.Abort()

    session.clear_history()
    console.print(f"[green]✓[/green] История очищена ({count})")
