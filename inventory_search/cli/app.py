"""Typer приложение — главный CLI.

Определяет глобальные опции и монтирует команды.

Attributes:
    app: Главное Typer приложение.
"""

from pathlib import Path
from typing import Optional

import typer

from inventory_search.cli.context import CLIContext

# Главное приложение
app = typer.Typer(
    name="inventory-search",
    help="🔎 Inventory Search — ранжированный поиск по инвентарю в терминале.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Хранение контекста между callback и командами
_cli_context: Optional[CLIContext] = None


def get_cli_context() -> CLIContext:
    """Получить текущий CLI контекст.

    Returns:
        CLIContext с настройками из глобальных опций (дефолтный, если
        команда вызвана напрямую).
    """
    if _cli_context is None:
        return CLIContext()
    return _cli_context


def version_callback(value: bool) -> None:
    """Показать версию и выйти."""
    if value:
        from inventory_search import __version__

        typer.echo(f"Inventory Search CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    items_path: Optional[Path] = typer.Option(
        None,
        "--items",
        "-i",
        help="JSON-файл с коллекцией (по умолчанию загрузка из API).",
        envvar="INVENTORY_ITEMS_FILE",
        exists=True,
        dir_okay=False,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Уровень логирования: TRACE, DEBUG, INFO, WARNING, ERROR.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Вывод в формате JSON (для скриптов).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Показать версию и выйти.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """🔎 Inventory Search — ранжированный поиск по инвентарю в терминале."""
    global _cli_context

    _cli_context = CLIContext(
        items_path=items_path,
        log_level=log_level,
        json_output=json_output,
    )

    # Сохраняем в typer context для доступа из команд
    ctx.obj = _cli_context


# === Монтирование команд ===

from inventory_search.cli.commands import (  # noqa: E402
    config_cmd,
    history_cmd,
    patterns_cmd,
    search,
    voice,
)

app.command("search")(search.search)
app.command("suggest")(search.suggest)
app.command("voice")(voice.voice)
app.add_typer(history_cmd.app, name="history")
app.add_typer(patterns_cmd.app, name="patterns")
app.add_typer(config_cmd.app, name="config")


__all__ = ["app", "get_cli_context"]
