"""GitHub Actions workflow commands (``::error file=a.rb,line=1::message``)."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class Severity(StrEnum):
    DEBUG = "debug"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(
    severity: Severity,
    message: str,
    properties: Mapping[str, str | int] | None = None,
) -> str:
    """Return a single workflow command line."""
    props = ""
    if properties:
        props = " " + ",".join(f"{key}={escape_property(str(value))}" for key, value in properties.items())
    return f"::{severity.value}{props}::{escape_data(message)}"


class Annotator:
    """Writes workflow commands and plain log lines through *write*.

    Debug commands are dropped unless *debug* is set, mirroring how the
    runner hides them unless step debugging is on.
    """

    def __init__(self, write: Callable[[str], None], *, debug: bool = False) -> None:
        self._write = write
        self.debug_enabled = debug

    def line(self, text: str = "") -> None:
        self._write(text)

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self._write(format_command(Severity.DEBUG, message))

    def notice(self, message: str) -> None:
        self._write(format_command(Severity.NOTICE, message))

    def warning(self, message: str) -> None:
        self._write(format_command(Severity.WARNING, message))

    def error(self, message: str, *, file: str | None = None, line: int = 1) -> None:
        properties = {"file": file, "line": line} if file is not None else None
        self._write(format_command(Severity.ERROR, message, properties))


__all__ = ["Annotator", "Severity", "escape_data", "escape_property", "format_command"]
