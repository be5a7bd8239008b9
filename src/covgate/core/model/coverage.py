"""Typed model of a SimpleCov results file and the figures derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from covgate.core.model.metrics import pct

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Per-line hit counts for one source file.

    ``None`` marks a line that is not executable; ``0`` an uncovered line and
    any positive value the number of times the line ran.
    """

    lines: tuple[int | None, ...]

    @property
    def executable_line_count(self) -> int:
        return sum(1 for hits in self.lines if hits is not None)

    @property
    def covered_line_count(self) -> int:
        return sum(1 for hits in self.lines if hits is not None and hits > 0)


@dataclass(frozen=True, slots=True)
class RunResult:
    """One coverage-collection session.

    ``files`` maps each path to its line data, or to ``None`` when the entry
    was present but malformed (and must therefore be skipped).
    """

    files: Mapping[str, FileCoverage | None]


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """The runs recorded in the results file and the one selected for gating."""

    run_keys: tuple[str, ...]
    selected_key: str
    selected: RunResult


@dataclass(frozen=True, slots=True)
class FileStats:
    name: str
    executable_lines: int
    covered_lines: int

    @property
    def coverage_percent(self) -> float:
        return pct(self.covered_lines, self.executable_lines)


@dataclass(frozen=True, slots=True)
class CoverageTotals:
    """Per-file statistics (encounter order) and their sums."""

    files: tuple[FileStats, ...] = field(default_factory=tuple)
    executable_lines: int = 0
    covered_lines: int = 0

    @property
    def coverage_percent(self) -> float:
        # No executable lines anywhere is reported as 0%, never undefined.
        return pct(self.covered_lines, self.executable_lines)


__all__ = ["CoverageReport", "CoverageTotals", "FileCoverage", "FileStats", "RunResult"]
