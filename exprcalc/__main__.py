"""CLI for the exprcalc expression evaluator.

Usage:
    python -m exprcalc eval "2 + 3 * 4"          # Print the formatted result
    python -m exprcalc eval "1/0" --json         # Machine-readable outcome
    python -m exprcalc check "1+1" "(2+3" "4/0"  # Table of outcomes
    python -m exprcalc format 1234.5             # Canonical rendering of a number
    python -m exprcalc kinds                     # Show the error taxonomy
    python -m exprcalc repl                      # Interactive session with history
"""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console

from exprcalc.config import EvaluatorConfig
from exprcalc.engine import calculate, format_result
from exprcalc.models import CalcError
from exprcalc.render import CheckRow, render_checks, render_error, render_history, render_kinds
from exprcalc.session import CalcSession

app = typer.Typer(
    name="exprcalc",
    help="Arithmetic expression evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_MAX_LENGTH_HELP = "Maximum expression length (overrides EXPRCALC_MAX_LENGTH)"
_MAX_DEPTH_HELP = "Maximum parenthesis nesting (overrides EXPRCALC_MAX_DEPTH)"


def _load_config(max_length: Optional[int], max_depth: Optional[int]) -> EvaluatorConfig:
    """Environment config with CLI overrides applied; bad values exit 1."""
    try:
        return EvaluatorConfig.from_env().with_overrides(max_length=max_length, max_depth=max_depth)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression to evaluate (e.g., '2 + 3 * 4')"),
    max_length: Optional[int] = typer.Option(None, "--max-length", help=_MAX_LENGTH_HELP),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help=_MAX_DEPTH_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON"),
) -> None:
    """Evaluate one expression and print the result."""
    config = _load_config(max_length, max_depth)
    try:
        evaluation = calculate(expression, config)
    except CalcError as e:
        if as_json:
            typer.echo(json.dumps({
                "expression": expression.strip(),
                "error": e.kind.value,
                "message": e.message,
                "position": e.position,
            }))
        else:
            render_error(expression.strip(), e, console)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(evaluation.to_dict()))
    else:
        typer.echo(evaluation.result)


@app.command("check")
def cmd_check(
    expressions: list[str] = typer.Argument(help="Expressions to evaluate"),
    max_length: Optional[int] = typer.Option(None, "--max-length", help=_MAX_LENGTH_HELP),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help=_MAX_DEPTH_HELP),
) -> None:
    """Evaluate several expressions and show a table of outcomes."""
    config = _load_config(max_length, max_depth)
    rows: list[CheckRow] = []
    for expression in expressions:
        try:
            rows.append(CheckRow(expression=expression, evaluation=calculate(expression, config)))
        except CalcError as e:
            rows.append(CheckRow(expression=expression, error=e))

    render_checks(rows, console)
    failed = sum(1 for r in rows if not r.ok)
    if failed:
        console.print(f"[red]{failed} of {len(rows)} expression(s) failed[/red]")
        raise typer.Exit(1)


@app.command("format")
def cmd_format(
    value: float = typer.Argument(help="Number to render (use -- before negative values)"),
) -> None:
    """Print the canonical rendering of a number."""
    try:
        typer.echo(format_result(value))
    except CalcError as e:
        console.print(f"[red]{e.message}[/red] [dim]({value})[/dim]")
        raise typer.Exit(1)


@app.command("kinds")
def cmd_kinds() -> None:
    """Show the error kinds and their messages."""
    render_kinds(console)


@app.command("repl")
def cmd_repl(
    max_length: Optional[int] = typer.Option(None, "--max-length", help=_MAX_LENGTH_HELP),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help=_MAX_DEPTH_HELP),
) -> None:
    """Interactive calculator.

    Commands: :history, :recall N, :clear, :quit
    """
    session = CalcSession(config=_load_config(max_length, max_depth))
    console.print("[dim]Type an expression and press Enter. :history, :recall N, :clear, :quit[/dim]")

    while True:
        try:
            line = console.input("[bold cyan]>[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            break

        text = line.strip()
        if not text:
            continue
        if text in (":quit", ":q", ":exit"):
            break
        if text == ":history":
            render_history(session.history, console)
            continue
        if text == ":clear":
            session.clear_history()
            console.print("[dim]history cleared[/dim]")
            continue
        if text.startswith(":recall"):
            arg = text[len(":recall"):].strip() or "0"
            try:
                entry = session.recall(int(arg))
            except (ValueError, IndexError):
                console.print(f"[yellow]No history entry: {arg}[/yellow]")
                continue
            console.print(f"[dim]{entry.expression}[/dim]")
        elif text.startswith(":"):
            console.print(f"[yellow]Unknown command: {text}[/yellow]")
            continue
        else:
            session.set_expression(text)

        evaluation = session.submit()
        if evaluation:
            typer.echo(evaluation.result)
        else:
            console.print(f"[red]{session.state.error}[/red]")


if __name__ == "__main__":
    app()
