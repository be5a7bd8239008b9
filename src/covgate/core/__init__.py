"""Coverage aggregation, threshold evaluation and the gate pipeline."""

from covgate.core.aggregate import aggregate
from covgate.core.model.coverage import CoverageReport, CoverageTotals, FileCoverage, FileStats, RunResult
from covgate.core.model.thresholds import EvaluationResult, FailingUnit, evaluate
from covgate.core.settings import OnFailStatus, Settings, parse_settings

__all__ = [
    "CoverageReport",
    "CoverageTotals",
    "EvaluationResult",
    "FailingUnit",
    "FileCoverage",
    "FileStats",
    "OnFailStatus",
    "RunResult",
    "Settings",
    "aggregate",
    "evaluate",
    "parse_settings",
]
