"""Helpers for rendering aligned Markdown tables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence


def _compute_col_widths(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> list[int]:
    widths: list[int] = []
    for col, header in enumerate(headers):
        col_texts = [str(r[col]) for r in rows]
        col_texts.append(header)
        # A separator cell needs at least three dashes.
        widths.append(max(3, *(len(text) for text in col_texts)))
    return widths


def format_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """Render a Markdown table; the first column is left-aligned, the rest right-aligned."""
    if not headers or not rows:
        return ""
    col_widths = _compute_col_widths(headers, rows)

    def _cells(values: Sequence[Any]) -> str:
        cells = [
            str(val).ljust(width) if idx == 0 else str(val).rjust(width)
            for idx, (val, width) in enumerate(zip(values, col_widths, strict=False))
        ]
        return "| " + " | ".join(cells) + " |"

    sep_parts = ["-" * width for width in col_widths]
    sep_line = "| " + " | ".join(sep_parts) + " |"

    return "\n".join([_cells(headers), sep_line, *(_cells(row) for row in rows)])


__all__ = ["format_table"]
