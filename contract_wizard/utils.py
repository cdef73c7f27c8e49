"""Shared console and file helpers for the Contract Wizard.

All user-facing output goes through the module-level Rich ``console`` so the
CLI, the catalog fetcher and the build client print consistently and tests
can capture everything in one place.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from contract_wizard.analyzer.models import ContractSignature, EventSite

console = Console()


class WizardError(Exception):
    """A user-facing failure; the CLI prints the message and exits 1."""


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_text(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories.

    Returns:
        The resolved ``Path`` that was written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return file_path.resolve()


def read_text(path: str | Path) -> str:
    """Read a UTF-8 source file.

    Raises:
        WizardError: If the file does not exist or cannot be read.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise WizardError(f"No such file: {file_path}")
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise WizardError(f"Could not read {file_path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_signature_table(
    signatures: list[ContractSignature],
    events: list[EventSite],
    title: str = "Contract analysis",
) -> None:
    """Print the entry points and event sites found in a source file."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Line", justify="right", style="dim", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Parameters")
    table.add_column("Returns")

    rows: list[tuple[int, str, str, str, str]] = []
    for sig in signatures:
        params = ", ".join(f"{p.name}: {p.declared_type}" for p in sig.parameters)
        returns = sig.return_type
        rows.append((sig.line_number, "fn", sig.name, params, returns))
    for event in events:
        rows.append((event.line_number, "event", event.label, "", ""))

    for line_number, kind, name, params, returns in sorted(rows, key=lambda r: r[0]):
        table.add_row(str(line_number), kind, name, params, returns)

    console.print(table)
    console.print()


def print_source(source: str, language: str = "rust") -> None:
    """Pretty-print contract source with line numbers."""
    console.print(Syntax(source, language, line_numbers=True, word_wrap=False))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
