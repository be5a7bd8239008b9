from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covgate.core.pipeline import PipelineResult

EXIT_OK = 0  # Gate passed, or failed with on_fail_status=warn
EXIT_FAILURE = 1  # Gate failed, or a fatal input/configuration error


def exit_code_for(result: PipelineResult) -> int:
    return EXIT_FAILURE if result.failed else EXIT_OK


__all__ = ["EXIT_FAILURE", "EXIT_OK", "exit_code_for"]
