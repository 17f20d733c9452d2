"""Rich Console singleton для CLI.

Предоставляет единый экземпляр Console для всех команд.

Attributes:
    console: Глобальный Rich Console.

Functions:
    get_console: Получить консоль с учётом настроек.
    print_error: Вывести ошибку в панели.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

# Глобальный Console, общий для всех команд
console = Console()


def get_console(force_terminal: bool = False, no_color: bool = False) -> Console:
    """Получить настроенную консоль.

    Args:
        force_terminal: Принудительно включить терминальный режим.
        no_color: Отключить цвета.

    Returns:
        Настроенный Rich Console.
    """
    if force_terminal or no_color:
        return Console(
            force_terminal=force_terminal,
            no_color=no_color,
        )
    return console


def print_error(message: str, title: str = "❌ Ошибка") -> None:
    console.print(Panel(f"[red]{escape(message)}[/red]", title=title))


__all__ = ["console", "get_console", "print_error"]
