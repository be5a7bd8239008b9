from __future__ import annotations

import pytest

from covgate.core.aggregate import aggregate
from covgate.core.model.coverage import CoverageTotals, FileCoverage, FileStats, RunResult
from covgate.core.model.thresholds import FailingUnit, evaluate
from covgate.core.settings import Settings


def _totals(*files: tuple[str, int, int]) -> CoverageTotals:
    stats = tuple(FileStats(name=name, executable_lines=total, covered_lines=hit) for name, total, hit in files)
    return CoverageTotals(
        files=stats,
        executable_lines=sum(s.executable_lines for s in stats),
        covered_lines=sum(s.covered_lines for s in stats),
    )


def _scenario_totals() -> CoverageTotals:
    return aggregate(RunResult(files={"a.rb": FileCoverage((1, 1, 0, None))}))


def test_scenario_passes_at_fifty_percent() -> None:
    result = evaluate(_scenario_totals(), Settings(minimum_suite_coverage=50, minimum_file_coverage=50))
    assert result.total_coverage == pytest.approx(66.6667, abs=1e-4)
    assert result.suite_passed
    assert result.failing_files == ()
    assert result.passed


def test_scenario_file_threshold_fails_suite() -> None:
    result = evaluate(_scenario_totals(), Settings(minimum_suite_coverage=50, minimum_file_coverage=90))
    assert result.suite_passed
    assert not result.passed
    (unit,) = result.failing_files
    assert unit.name == "a.rb"
    assert unit.deficit == 23.33
    assert (unit.executable_lines, unit.covered_lines) == (3, 2)


def test_exact_threshold_passes() -> None:
    totals = _totals(("half.rb", 4, 2))
    result = evaluate(totals, Settings(minimum_suite_coverage=50, minimum_file_coverage=50))
    assert result.passed


def test_comparison_uses_unrounded_coverage() -> None:
    # 66.666...% displays as 66.67% but is still below 66.67.
    result = evaluate(_scenario_totals(), Settings(minimum_suite_coverage=66.67, minimum_file_coverage=66.67))
    assert not result.suite_passed
    assert [u.name for u in result.failing_files] == ["a.rb"]
    assert result.failing_files[0].deficit == 0.0


def test_suite_minimum_alone_fails() -> None:
    totals = _totals(("a.rb", 10, 5))
    result = evaluate(totals, Settings(minimum_suite_coverage=60, minimum_file_coverage=0))
    assert result.failing_files == ()
    assert not result.suite_passed
    assert not result.passed


def test_no_executable_lines_reports_zero() -> None:
    result = evaluate(CoverageTotals(), Settings())
    assert result.total_coverage == 0.0
    assert result.passed

    strict = evaluate(CoverageTotals(), Settings(minimum_suite_coverage=1))
    assert not strict.passed


def test_failing_files_sorted_worst_first_with_stable_ties() -> None:
    totals = _totals(("b.rb", 4, 2), ("c.rb", 10, 1), ("a.rb", 2, 1), ("ok.rb", 1, 1))
    result = evaluate(totals, Settings(minimum_file_coverage=80))
    assert [u.name for u in result.failing_files] == ["c.rb", "b.rb", "a.rb"]
    assert [u.deficit for u in result.failing_files] == [70.0, 30.0, 30.0]


def test_evaluate_is_idempotent() -> None:
    totals = _totals(("a.rb", 3, 1), ("b.rb", 5, 5))
    settings = Settings(minimum_suite_coverage=70, minimum_file_coverage=50)
    assert evaluate(totals, settings) == evaluate(totals, settings)


@pytest.mark.parametrize("minimum", [0, 10, 33.33, 50, 75, 99.99, 100])
def test_raising_file_minimum_never_shrinks_failures(minimum: float) -> None:
    totals = _totals(("a.rb", 3, 1), ("b.rb", 4, 3), ("c.rb", 5, 5), ("d.rb", 9, 0))
    lower = {u.name for u in evaluate(totals, Settings(minimum_file_coverage=minimum)).failing_files}
    higher = {u.name for u in evaluate(totals, Settings(minimum_file_coverage=min(100, minimum + 10))).failing_files}
    assert lower <= higher


@pytest.mark.parametrize("minimum", [0, 40, 55, 60, 90])
def test_raising_suite_minimum_never_fixes_a_failure(minimum: float) -> None:
    totals = _totals(("a.rb", 10, 6))
    before = evaluate(totals, Settings(minimum_suite_coverage=minimum))
    after = evaluate(totals, Settings(minimum_suite_coverage=min(100, minimum + 5)))
    assert before.passed or not after.passed


def test_failing_unit_from_stats() -> None:
    unit = FailingUnit.from_stats(FileStats("x.rb", 3, 1), minimum=50)
    assert unit.coverage_percent == pytest.approx(33.3333, abs=1e-4)
    assert unit.deficit == 16.67
