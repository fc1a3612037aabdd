"""Rich rendering for the exprcalc CLI.

Tables for batch checks, session history and the error taxonomy, plus the
error report with a caret under the failing offset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exprcalc.engine import classify
from exprcalc.models import CalcError, ErrorKind, Evaluation

# Display color per error kind.
_KIND_STYLES = {
    ErrorKind.TOO_LONG: "yellow",
    ErrorKind.DIVIDE_BY_ZERO: "magenta",
    ErrorKind.INVALID_NUMBER: "yellow",
    ErrorKind.NOT_FINITE: "yellow",
}

# Expressions longer than this are elided in tables.
_MAX_CELL = 48


@dataclass
class CheckRow:
    """Outcome of evaluating one expression for `exprcalc check`."""

    expression: str
    evaluation: Optional[Evaluation] = None
    error: Optional[CalcError] = None

    @property
    def ok(self) -> bool:
        return self.evaluation is not None


def _fmt_expression(text: str) -> str:
    """Escape and elide an expression for a table cell."""
    if len(text) > _MAX_CELL:
        text = text[: _MAX_CELL - 3] + "..."
    return escape(text)


def _fmt_position(position: Optional[int]) -> str:
    if position is None:
        return "--"
    return str(position)


def _styled_message(kind: ErrorKind) -> str:
    color = _KIND_STYLES.get(kind, "red")
    return f"[{color}]{kind.message}[/{color}]"


def render_error(expression: str, error: CalcError, console: Console) -> None:
    """Print the user-facing message and, when known, where it failed."""
    console.print(f"[red]{error.message}[/red] [dim]({error.kind.value})[/dim]")
    if error.position is not None and len(expression) <= 120:
        console.print(f"  [dim]{escape(expression)}[/dim]")
        console.print("  " + " " * error.position + "[red]^[/red]")


def render_checks(rows: list[CheckRow], console: Console) -> None:
    """Render a table of evaluation outcomes."""
    if not rows:
        console.print("[yellow]No expressions given.[/yellow]")
        return

    table = Table(title="Expression check", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Expression", min_width=16)
    table.add_column("Status", justify="center")
    table.add_column("Result", justify="right", min_width=10)
    table.add_column("Kind", style="dim")
    table.add_column("Offset", justify="right")

    for i, row in enumerate(rows, 1):
        if row.ok:
            table.add_row(
                str(i),
                _fmt_expression(row.evaluation.expression),
                "[green]ok[/green]",
                row.evaluation.result,
                "--",
                "--",
            )
            continue
        kind = classify(row.error)
        table.add_row(
            str(i),
            _fmt_expression(row.expression),
            "[red]error[/red]",
            _styled_message(kind),
            kind.value,
            _fmt_position(row.error.position),
        )

    console.print()
    console.print(table)
    console.print()


def render_history(history: list[Evaluation], console: Console) -> None:
    """Render session history, newest first."""
    if not history:
        console.print("[dim]No calculations yet[/dim]")
        return

    table = Table(title="History", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Expression", min_width=16)
    table.add_column("Result", style="green", justify="right")

    for i, entry in enumerate(history):
        table.add_row(str(i), _fmt_expression(entry.expression), entry.result)

    console.print(table)


def render_kinds(console: Console) -> None:
    """Render the error taxonomy."""
    table = Table(title="Error kinds", show_header=True, header_style="bold")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Message")

    for kind in ErrorKind:
        table.add_row(kind.value, _styled_message(kind))

    console.print()
    console.print(table)
    console.print()
