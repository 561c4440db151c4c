"""Shared utility functions for the Bushido toolkit.

Provides JSON I/O, file-system helpers and Rich-based console reporting.  All
user-facing output goes through the module-level ``console`` so tests can
capture or silence it in one place.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def dump_json(data: Any) -> str:
    """Serialise *data* the canonical way: 2-space indent, UTF-8, trailing newline.

    Key order is preserved, so the same input always yields the same text.
    """
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as canonical JSON.

    Parent directories are created automatically.  The write itself is
    performed in a worker thread to avoid blocking the event loop.

    Returns:
        The written path.
    """
    file_path = Path(path)
    await asyncio.to_thread(write_text, file_path, dump_json(data))
    return file_path


def write_text(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write UTF-8 content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_percent(part: int, total: int) -> str:
    """Format ``part / total`` as a percentage with two decimals.

    Examples::

        format_percent(40, 1600)  -> "2.50%"
        format_percent(0, 0)      -> "0.00%"
    """
    if total <= 0:
        return "0.00%"
    return f"{part * 100 / total:.2f}%"


def format_ether(wei: int) -> str:
    """Render a wei amount in ether, trimming trailing zeros.

    Examples::

        format_ether(30_000_000_000_000_000) -> "0.03 ETH"
        format_ether(0)                      -> "0 ETH"
    """
    whole, frac = divmod(wei, 10**18)
    if frac == 0:
        return f"{whole} ETH"
    frac_str = f"{frac:018d}".rstrip("0")
    return f"{whole}.{frac_str} ETH"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str, color: str = "bright_cyan") -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

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


def create_progress() -> Progress:
    """Create a Rich progress bar for batch generation.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )
