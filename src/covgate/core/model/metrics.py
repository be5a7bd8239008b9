from __future__ import annotations

from covgate.core.config import FULL_COVERAGE


def pct(covered: int, total: int, *, empty: float = 0.0) -> float:
    """Return the coverage percentage, defaulting to `empty` when no total exists."""
    return empty if total == 0 else (covered / total) * float(FULL_COVERAGE)


def display_pct(value: float) -> float:
    """Round a percentage for display; comparisons always use the raw value."""
    return round(float(value), 2)


def format_pct(value: float) -> str:
    return f"{display_pct(value)}%"


__all__ = ["display_pct", "format_pct", "pct"]
