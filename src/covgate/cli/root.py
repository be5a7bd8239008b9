from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from covgate import __version__
from covgate.cli import check


def create_app() -> typer.Typer:
    app = typer.Typer(help="Gate a build on SimpleCov line coverage.")

    @app.callback(invoke_without_command=True)
    def _root(
        ctx: typer.Context,
        *,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit"),
        ] = False,
    ) -> None:
        if version:
            typer.echo(f"covgate {__version__}")
            raise typer.Exit
        if ctx.invoked_subcommand is None:
            # Bare `covgate` (the action entrypoint) behaves like `covgate check`.
            check.check_cmd()

    check.register(app)

    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
