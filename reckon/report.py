"""reckon report — number formatting, Rich tables, and batch evaluation.

Batch files hold one expression per line. Blank lines and `#` comments are
skipped; line numbers are kept so failures point back at the source.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from reckon.models import BatchEntry, BatchReport, CalcResult
from reckon.service import CalculatorService
from reckon.tokenizer import classify

_KIND_STYLES = {
    "number": "cyan",
    "operator": "yellow",
    "paren": "magenta",
    "unknown": "red",
}


def format_number(value: float, digits: Optional[int] = None) -> str:
    """Format a result for display.

    Integral values drop the trailing '.0' ('5', not '5.0'); negative zero
    keeps its sign. With digits set, uses that many significant digits.
    """
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if digits is not None:
        return f"{value:.{digits}g}"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def render_result(result: CalcResult, console: Console, digits: Optional[int] = None) -> None:
    """Print a single result: the value in green or the error in red."""
    if result.ok:
        console.print(f"[green]{format_number(result.result, digits)}[/green]")
    else:
        console.print(f"[red]Error:[/red] {escape(result.error)}")


def render_tokens(tokens: list[str], console: Console) -> None:
    """Render a token list as an index / token / kind table."""
    if not tokens:
        console.print("[yellow]No tokens.[/yellow]")
        return

    table = Table(title="Tokens", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Token", min_width=8)
    table.add_column("Kind")

    for i, token in enumerate(tokens):
        kind = classify(token)
        style = _KIND_STYLES[kind]
        table.add_row(str(i), escape(token), f"[{style}]{kind}[/{style}]")

    console.print()
    console.print(table)
    console.print()


def render_batch(report: BatchReport, console: Console, digits: Optional[int] = None) -> None:
    """Render a batch report table plus a pass/fail summary line."""
    if not report.entries:
        console.print(f"[yellow]No expressions found in {escape(report.source)}[/yellow]")
        return

    table = Table(title=f"Batch: {escape(report.source)}", show_header=True, header_style="bold")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Expression", min_width=20)
    table.add_column("Outcome", justify="right", min_width=12)

    for entry in report.entries:
        r = entry.result
        if r.ok:
            outcome = f"[green]{format_number(r.result, digits)}[/green]"
        else:
            outcome = f"[red]{escape(r.error)}[/red]"
        table.add_row(str(entry.line_no), escape(entry.expression), outcome)

    console.print()
    console.print(table)
    color = "green" if report.failed == 0 else "yellow"
    console.print(f"[{color}]{report.passed}/{report.total} evaluated[/{color}], {report.failed} failed")
    console.print()


def load_expressions(path: Path) -> list[tuple[int, str]]:
    """Read (line_no, expression) pairs from a batch file.

    Lines are stripped first, so blank lines and lines whose first
    non-whitespace character is `#` are both skipped.

    Raises:
        OSError: The file can't be read.
        UnicodeDecodeError: The file isn't valid UTF-8.
    """
    items: list[tuple[int, str]] = []
    for line_no, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        items.append((line_no, line))
    return items


def run_batch(path: Path, service: CalculatorService) -> BatchReport:
    """Evaluate every expression in a batch file.

    Raises:
        OSError, UnicodeDecodeError: As load_expressions().
    """
    report = BatchReport(
        source=str(path),
        timestamp=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
    )
    for line_no, expression in load_expressions(path):
        report.entries.append(
            BatchEntry(
                line_no=line_no,
                expression=expression,
                result=service.calculate_expression(expression),
            )
        )
    return report
