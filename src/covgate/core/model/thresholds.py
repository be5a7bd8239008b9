from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from covgate.core.model.metrics import display_pct

if TYPE_CHECKING:
    from covgate.core.model.coverage import CoverageTotals, FileStats
    from covgate.core.settings import Settings


@dataclass(frozen=True, slots=True)
class FailingUnit:
    """A file whose line coverage is below the per-file minimum."""

    name: str
    coverage_percent: float
    executable_lines: int
    covered_lines: int
    deficit: float

    @classmethod
    def from_stats(cls, stats: FileStats, *, minimum: float) -> FailingUnit:
        coverage = stats.coverage_percent
        return cls(
            name=stats.name,
            coverage_percent=coverage,
            executable_lines=stats.executable_lines,
            covered_lines=stats.covered_lines,
            deficit=max(0.0, display_pct(minimum - coverage)),
        )


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of gating a run against the configured minimums.

    Percentages are unrounded; renderers round them for display.
    """

    totals: CoverageTotals
    total_coverage: float
    minimum_suite_coverage: float
    minimum_file_coverage: float
    failing_files: tuple[FailingUnit, ...]

    @property
    def suite_passed(self) -> bool:
        return self.total_coverage >= self.minimum_suite_coverage

    @property
    def passed(self) -> bool:
        return self.suite_passed and not self.failing_files


def evaluate(totals: CoverageTotals, settings: Settings) -> EvaluationResult:
    """Evaluate aggregated figures against *settings*.

    A file fails when its coverage is strictly below the per-file minimum, so
    exactly meeting the threshold passes. Failing files are ordered worst
    first; ties keep encounter order.
    """
    minimum = settings.minimum_file_coverage
    failing = [
        FailingUnit.from_stats(stats, minimum=minimum) for stats in totals.files if stats.coverage_percent < minimum
    ]
    failing.sort(key=lambda unit: unit.coverage_percent)

    return EvaluationResult(
        totals=totals,
        total_coverage=totals.coverage_percent,
        minimum_suite_coverage=settings.minimum_suite_coverage,
        minimum_file_coverage=minimum,
        failing_files=tuple(failing),
    )


__all__ = ["EvaluationResult", "FailingUnit", "evaluate"]
