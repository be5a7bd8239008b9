from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from covgate.core.model.metrics import format_pct

if TYPE_CHECKING:
    from covgate.core.model.thresholds import EvaluationResult


def _style_percent(value: float, minimum: float) -> str:
    text = format_pct(value)
    return f"[green]{text}[/green]" if value >= minimum else f"[red]{text}[/red]"


def render_tty_summary(result: EvaluationResult, *, color: bool = True, width: int | None = None) -> str:
    """Render a Rich table of every measured file plus the overall row.

    Files are listed in encounter order; those below the per-file minimum are
    highlighted in red.
    """
    table = Table(title="Coverage Report", box=box.SIMPLE_HEAVY, header_style="bold", expand=True)

    table.add_column("File", overflow="fold")
    table.add_column("Lines", justify="right")
    table.add_column("Hit", justify="right")
    table.add_column("Miss", justify="right")
    table.add_column("Cov.", justify="right")

    for stats in result.totals.files:
        table.add_row(
            escape(stats.name),
            str(stats.executable_lines),
            str(stats.covered_lines),
            str(stats.executable_lines - stats.covered_lines),
            _style_percent(stats.coverage_percent, result.minimum_file_coverage),
        )

    table.add_section()

    totals = result.totals
    table.add_row(
        "[bold]Overall[/bold]",
        f"[bold]{totals.executable_lines}[/bold]",
        f"[bold]{totals.covered_lines}[/bold]",
        f"[bold]{totals.executable_lines - totals.covered_lines}[/bold]",
        f"[bold]{_style_percent(result.total_coverage, result.minimum_suite_coverage)}[/bold]",
    )

    buf = StringIO()
    console = Console(file=buf, force_terminal=color, no_color=not color, width=width)
    console.print()
    console.print(table)
    console.print()
    return buf.getvalue().rstrip()


__all__ = ["render_tty_summary"]
