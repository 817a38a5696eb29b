"""Shared utility functions for create-valet-app.

Provides JSON helpers matching the formatting of generated manifests,
file-system helpers, package-name normalisation, and Rich-based output
helpers used by the CLI.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

console = Console()

DEFAULT_PACKAGE_NAME = "valet-app"


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def normalize_package_name(target: str | Path) -> str:
    """Derive an npm package name from a target directory.

    * Uses only the basename of *target*.
    * Lowercases it.
    * Replaces every character outside ``[a-z0-9-_.]`` with a hyphen.
    * Falls back to ``valet-app`` when no letter or digit is left.

    Examples::

        normalize_package_name("My Cool App!") -> "my-cool-app-"
        normalize_package_name("apps/Dash.Board") -> "dash.board"
        normalize_package_name("!!!") -> "valet-app"
    """
    base = Path(str(target)).name.lower()
    name = re.sub(r"[^a-z0-9\-_.]", "-", base)
    if not re.search(r"[a-z0-9]", name):
        return DEFAULT_PACKAGE_NAME
    return name


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse *raw* and require a top-level JSON object.

    Raises:
        json.JSONDecodeError: If *raw* is not valid JSON.
        TypeError: If the top-level value is not an object.
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* with two-space indentation and a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create *path* and any missing parents; return it resolved."""
    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target.resolve()


def is_empty_or_missing(path: str | Path) -> bool:
    """Return ``True`` if *path* does not exist or is an empty directory."""
    target = Path(path)
    if not target.exists():
        return True
    return target.is_dir() and next(target.iterdir(), None) is None


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def _styled(message: str, style: str) -> None:
    console.print(f"[{style}]{message}[/{style}]")


def print_success(message: str) -> None:
    _styled(message, "bold green")


def print_error(message: str) -> None:
    _styled(message, "bold red")


def print_warning(message: str) -> None:
    _styled(message, "bold yellow")


def print_summary_table(rows: dict[str, str], title: str = "Summary") -> None:
    """Print the resolved generation settings as a two-column table."""
    table = Table(title=title, title_style="bold", header_style="bold cyan", show_edge=False)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for name, value in rows.items():
        table.add_row(name, value)
    console.print(table)


def create_progress() -> Progress:
    """Spinner shown while the scaffold runs; cleared when done."""
    return Progress(
        SpinnerColumn(style="cyan"),
        TextColumn("{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
