"""Shared console helpers for resgen.

All human-facing output goes through one Rich ``Console``.  The generator
core never prints; the orchestrator and the CLI report through the helpers
below.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


PASS_COLORS: dict[str, str] = {
    "declaration": "bright_cyan",
    "implementation": "bright_green",
    "standalone": "bright_yellow",
}


def print_pass_header(mode: str, detail: str = "") -> None:
    """Print a prominent header for a generation pass.

    Args:
        mode: Pass name (``declaration``, ``implementation``, ``standalone``).
        detail: Optional suffix such as the target name.
    """
    color = PASS_COLORS.get(mode, "white")
    title = f"{mode.upper()} {detail}".strip()
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(rows: list[tuple[str, ...]], columns: list[str], title: str = "Summary") -> None:
    """Print a table with one row per entry.

    Args:
        rows: Row values, one tuple per row, matching *columns*.
        columns: Column headers; the first column is dimmed.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for index, column in enumerate(columns):
        table.add_column(column, style="dim" if index == 0 else None, no_wrap=index == 0)

    for row in rows:
        table.add_row(*(str(value) for value in row))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()
