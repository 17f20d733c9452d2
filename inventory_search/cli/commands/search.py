"""Команды search и suggest для CLI.

Ранжированный поиск по коллекции и подсказки для запроса.

Usage:
    inventory-search -i parts.json search "oil filter"
    inventory-search -i parts.json search filter -f category=Filters -n 5
    inventory-search -i parts.json search filter --sort partNumber --desc
    inventory-search -i parts.json suggest fil
"""

import json
from typing import Any, Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from inventory_search.cli.console import console, print_error
from inventory_search.cli.context import CLIContext
from inventory_search.core.advanced_search import SortDirection
from inventory_search.domain import ScoredMatch, SuggestionType, resolve_field_path, stringify
from inventory_search.errors import TransportError
from inventory_search.session import SearchSession

SUGGESTION_ICONS = {
    SuggestionType.HISTORY: "🕘",
    SuggestionType.ITEM: "📦",
    SuggestionType.CATEGORY: "🗂",
    SuggestionType.PATTERN: "⭐",
}


def open_session(cli_ctx: CLIContext) -> SearchSession:
    """SearchSession с загруженной коллекцией или выход с кодом 1."""
    try:
        return cli_ctx.get_session()
    except (OSError, ValueError, TransportError) as e:
        print_error(f"Не удалось загрузить коллекцию: {e}")
        raise typer.Exit(1)


def parse_filter(raw: str) -> tuple[str, Any]:
    """"category=Filters" → ("category", "Filters"); "qty=5" → ("qty", 5)."""
    field_path, sep, value = raw.partition("=")
    if not sep or not field_path.strip():
        raise typer.BadParameter(f"Фильтр должен иметь вид field=value: {raw}")
    try:
        parsed: Any = json.loads(value)
    except ValueError:
        parsed = value
    return field_path.strip(), parsed


def search(
    query: str = typer.Argument(
        ...,
        help="Поисковый запрос",
    ),
    limit: int = typer.Option(
        10,
        "--limit",
        "-n",
        help="Максимальное количество результатов",
        min=1,
        max=1000,
    ),
    filters: Optional[list[str]] = typer.Option(
        None,
        "--field",
        "-f",
        help="Фильтр по полю: field=value (можно несколько)",
    ),
    sort_by: Optional[str] = typer.Option(
        None,
        "--sort",
        "-s",
        help="Сортировать по полю вместо релевантности",
    ),
    descending: bool = typer.Option(
        False,
        "--desc",
        help="Сортировка по убыванию",
    ),
    save: bool = typer.Option(
        True,
        "--save/--no-save",
        help="Записать запрос в историю",
    ),
) -> None:
    """Ранжированный поиск по коллекции.

    Примеры:
        inventory-search -i parts.json search "oil filter"
        inventory-search -i parts.json search belt -f shelf=A1
    """
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    parsed_filters = [parse_filter(raw) for raw in filters or []]
    session = open_session(cli_ctx)
    run_search(
        cli_ctx,
        session,
        query,
        limit=limit,
        filters=parsed_filters,
        sort_by=sort_by,
        descending=descending,
        save=save,
    )


def run_search(
    cli_ctx: CLIContext,
    session: SearchSession,
    query: str,
    *,
    limit: int = 10,
    filters: Optional[list[tuple[str, Any]]] = None,
    sort_by: Optional[str] = None,
    descending: bool = False,
    save: bool = True,
) -> None:
    """Выполняет поиск в сессии и выводит результаты."""
    session.set_query(query)
    session.flush()

    for field_path, value in filters or []:
        session.advanced.update_filter(field_path, value)
    if sort_by:
        session.advanced.sort_by = sort_by
        session.advanced.sort_direction = (
            SortDirection.DESC if descending else SortDirection.ASC
        )

    results = list(session.advanced.results)[:limit]
    matches = {id(m.item): m for m in session.search.matches}

    if save:
        session.history.add(query)

    if cli_ctx.json_output:
        _render_json(query, results, matches, session)
    else:
        _render_rich(query, results, matches, session)


def _render_rich(
    query: str,
    results: list,
    matches: dict[int, ScoredMatch],
    session: SearchSession,
) -> None:
    """Отображает результаты в Rich формате."""
    if not results:
        console.print(Panel(
            "[yellow]Ничего не найдено[/yellow]",
            title=f"🔍 Поиск: {escape(query)}",
        ))
        return

    console.print(Panel(
        f"[cyan]Найдено: {session.advanced.result_count} "
        f"из {session.advanced.total_count}[/cyan]",
        title=f"🔍 Поиск: [bold]{escape(query)}[/bold]",
    ))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Score", justify="right", width=6)
    for field_path in session.search.fields:
        table.add_column(field_path, overflow="fold")

    for i, item in enumerate(results, 1):
        match = matches.get(id(item))
        score_text = Text(str(match.score), style="green") if match else Text("—")
        cells = [_highlighted(session, item, path) for path in session.search.fields]
        table.add_row(str(i), score_text, *cells)

    console.print(table)


def _highlighted(session: SearchSession, item: Any, field_path: str) -> Text:
    value = stringify(resolve_field_path(item, field_path))
    text = Text(value)
    for start, end in session.search.highlight_spans(value):
        text.stylize("bold black on yellow", start, end)
    return text


def _render_json(
    query: str,
    results: list,
    matches: dict[int, ScoredMatch],
    session: SearchSession,
) -> None:
    """Отображает результаты в JSON формате."""
    output = {
        "query": query,
        "count": session.advanced.result_count,
        "total": session.advanced.total_count,
        "results": [
            {
                "rank": i,
                "score": matches[id(item)].score if id(item) in matches else None,
                "matched_fields": (
                    list(matches[id(item)].matched_fields) if id(item) in matches else []
                ),
                "item": item,
            }
            for i, item in enumerate(results, 1)
        ],
    }
    console.print_json(json.dumps(output, ensure_ascii=False, default=str))


def suggest(
    query: str = typer.Argument(
        "",
        help="Частичный запрос (пустой — недавние запросы из истории)",
    ),
) -> None:
    """Подсказки для частичного запроса.

    Примеры:
        inventory-search -i parts.json suggest fil
        inventory-search -i parts.json suggest
    """
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    session = open_session(cli_ctx)
    session.set_query(query)
    suggestions = session.suggestions

    if cli_ctx.json_output:
        data = [
            {"type": s.type.value, "text": s.text, "count": s.count}
            for s in suggestions
        ]
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    if not suggestions:
        console.print("[dim]Нет подсказок[/dim]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Тип")
    table.add_column("Подсказка")
    table.add_column("Count", justify="right")

    for i, entry in enumerate(suggestions, 1):
        table.add_row(
            str(i),
            f"{SUGGESTION_ICONS[entry.type]} {entry.type.value}",
            Text(entry.text),
            str(entry.count) if entry.count is not None else "",
        )

    console.print(table)
