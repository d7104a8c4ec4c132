"""CLI for the reckon expression evaluator.

Usage:
    python -m reckon eval "2 * (3 + 4)"          # Evaluate one expression
    python -m reckon eval -- "-5 + 3"            # Leading '-' needs '--'
    python -m reckon tokens "2+3*4"              # Show how input is tokenized
    python -m reckon batch exprs.txt             # Evaluate a file, one per line
    python -m reckon batch exprs.txt --json out.json

Environment:
    RECKON_STRICT_TOKENS   reject unknown characters while tokenizing
    RECKON_DIGITS          significant digits for displayed results
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from reckon.config import Settings, load_settings
from reckon.models import CalcError
from reckon.report import render_batch, render_result, render_tokens, run_batch
from reckon.service import CalculatorService

app = typer.Typer(
    name="reckon",
    help="Evaluate arithmetic expressions (+ - * / and parentheses)",
    no_args_is_help=True,
)
console = Console(stderr=True)


def _settings(strict: Optional[bool], digits: Optional[int]) -> Settings:
    """Environment settings with command-line overrides applied."""
    try:
        env = load_settings()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(2)
    return Settings(
        strict_tokens=env.strict_tokens if strict is None else strict,
        digits=env.digits if digits is None else digits,
    )


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '(2 + 3) * 4'"),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Reject unknown characters while tokenizing"),
    digits: Optional[int] = typer.Option(None, "--digits", "-d", min=1, help="Significant digits to display"),
) -> None:
    """Evaluate a single expression."""
    settings = _settings(strict, digits)
    service = CalculatorService.create(strict=settings.strict_tokens)
    result = service.calculate_expression(expression)
    if not result.ok:
        render_result(result, console)
        raise typer.Exit(1)
    render_result(result, Console(), settings.digits)


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to tokenize"),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Reject unknown characters while tokenizing"),
) -> None:
    """Show the token sequence an expression produces."""
    settings = _settings(strict, None)
    service = CalculatorService.create(strict=settings.strict_tokens)
    try:
        tokens = service.tokenize(expression)
    except CalcError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    render_tokens(tokens, Console())


@app.command("batch")
def cmd_batch(
    path: Path = typer.Argument(help="File with one expression per line ('#' starts a comment)"),
    json_out: Optional[Path] = typer.Option(None, "--json", "-j", help="Also write results as JSON"),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Reject unknown characters while tokenizing"),
    digits: Optional[int] = typer.Option(None, "--digits", "-d", min=1, help="Significant digits to display"),
) -> None:
    """Evaluate every expression in a file."""
    settings = _settings(strict, digits)
    if not path.is_file():
        console.print(f"[red]Error:[/red] No such file: {escape(str(path))}")
        raise typer.Exit(2)

    service = CalculatorService.create(strict=settings.strict_tokens)
    try:
        report = run_batch(path, service)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(2)
    render_batch(report, Console(), settings.digits)

    if json_out:
        report.save(json_out)
        console.print(f"Results written to {escape(str(json_out))}")

    if report.failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
