from typing import Any, Callable, Dict, List, Optional, Sequence

from InquirerPy import inquirer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ZcfUI:
    """Console output (rich) and interactive prompts (InquirerPy)."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_title(self, title: str, subtitle: str = "") -> None:
        text = Text()
        text.append(title, style="bold cyan")
        if subtitle:
            text.append(f"\n{subtitle}", style="dim")
        self.console.print(Panel(text, box=box.ROUNDED, border_style="cyan"))

    def display_message(self, content: str, style: Optional[str] = None) -> None:
        """Display a message to the user."""
        self.console.print(content, style=style)

    def display_success(self, content: str) -> None:
        self.console.print(f"[bold green]✓[/] {content}")

    def display_error(self, content: str) -> None:
        self.console.print(f"[bold red]✗[/] {content}")

    def display_warning(self, content: str) -> None:
        self.console.print(f"[bold yellow]![/] {content}")

    def display_table(self, title: str, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold magenta")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        self.console.print(table)

    def select(self, message: str, choices: List[Dict[str, Any]], default: Any = None) -> Any:
        """Single choice; choices are {"name": label, "value": value} dicts."""
        return inquirer.select(
            message=message,
            choices=choices,
            default=default,
            pointer="❯",
            qmark="",
            amark="",
        ).execute()

    def checkbox(self, message: str, choices: List[Dict[str, Any]]) -> List[Any]:
        """Multiple choice; a choice with "enabled": True starts checked."""
        return inquirer.checkbox(
            message=message,
            choices=choices,
            pointer="❯",
            qmark="",
            amark="",
            instruction="(Space to select, Enter to confirm)",
        ).execute()

    def text(
        self,
        message: str,
        default: str = "",
        validate: Optional[Callable[[str], bool]] = None,
        invalid_message: str = "Invalid input",
    ) -> str:
        kwargs: Dict[str, Any] = {"message": message, "default": default, "qmark": "", "amark": ""}
        if validate:
            kwargs["validate"] = validate
            kwargs["invalid_message"] = invalid_message
        return inquirer.text(**kwargs).execute()

    def secret(
        self,
        message: str,
        validate: Optional[Callable[[str], bool]] = None,
        invalid_message: str = "Invalid input",
    ) -> str:
        kwargs: Dict[str, Any] = {"message": message, "qmark": "", "amark": ""}
        if validate:
            kwargs["validate"] = validate
            kwargs["invalid_message"] = invalid_message
        return inquirer.secret(**kwargs).execute()

    def confirm(self, message: str, default: bool = False) -> bool:
        return inquirer.confirm(message=message, default=default, qmark="", amark="").execute()
