"""Command line interface for covgate."""

from covgate.cli.exit_codes import EXIT_FAILURE, EXIT_OK, exit_code_for
from covgate.cli.root import cli, create_app, main

__all__ = ["EXIT_FAILURE", "EXIT_OK", "cli", "create_app", "exit_code_for", "main"]
