"""Команда config — просмотр конфигурации.

Подкоманды:
    show: Показать текущую конфигурацию.

Usage:
    inventory-search config show
    inventory-search --json config show
"""

import json

import typer
from pydantic import ValidationError
from rich.table import Table

from inventory_search.cli.console import console, print_error
from inventory_search import config as inventory_config

app = typer.Typer(
    help="🔧 Просмотр конфигурации.",
    no_args_is_help=True,
)


@app.command("show")
def show() -> None:
    """Показать текущую конфигурацию."""
    from inventory_search.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
    except ValidationError as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
        raise typer.Exit(1)

    toml_path = inventory_config.find_config_file()
    document = config.to_toml_dict()

    if cli_ctx.json_output:
        data = {
            "source": str(toml_path) if toml_path else None,
            "config": document,
        }
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    source = f"{toml_path}" if toml_path else "[dim]defaults + environment[/dim]"
    console.print("\n[bold]⚙️  Текущая конфигурация[/bold]")
    console.print(f"[dim]Источник:[/dim] {source}\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Настройка", style="cyan")
    table.add_column("Значение")

    for section, values in document.items():
        for key, value in values.items():
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            table.add_row(f"{section}.{key}", str(value))

    console.print(table)
