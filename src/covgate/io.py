from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


def write_output(text: str, destination: Path | None) -> None:
    """Write output to stdout or a file (PATH or '-' for stdout)."""
    if destination is None or destination == Path("-"):
        print(text)
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(text, encoding="utf-8")


def write_step_summary(text: str, environ: Mapping[str, str]) -> Path | None:
    """Overwrite the job step summary with *text*; a no-op outside GitHub Actions."""
    target = environ.get("GITHUB_STEP_SUMMARY")
    if not target:
        return None
    path = Path(target)
    path.write_text(text, encoding="utf-8")
    return path


__all__ = ["write_output", "write_step_summary"]
