"""Typer CLI application."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

import rawedit
from rawedit.cli.core.log import configure_logging

LogFileOption = Annotated[
    Optional[Path],
    typer.Option(
        "--log-file",
        "-l",
        envvar="RAWEDIT_LOG_FILE",
        help="Write debug logs to this file",
        dir_okay=False,
    ),
]


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="rawedit",
        help="Minimal raw-mode terminal screen editor.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    def show_version(value: bool) -> None:
        if value:
            console.print(f"rawedit {rawedit.__version__}")
            raise typer.Exit()

    @app.callback()
    def root(
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=show_version,
                is_eager=True,
                help="Show the version and exit",
            ),
        ] = False,
    ) -> None:
        """Minimal raw-mode terminal screen editor."""

    @app.command()
    def edit(log_file: LogFileOption = None) -> None:
        """Open the editor. Press [bold]Ctrl-Q[/] to quit."""
        from rawedit.cli.studio.editor import run_editor

        configure_logging(log_file)
        code = run_editor()
        if code:
            raise typer.Exit(code)

    @app.command()
    def keys(log_file: LogFileOption = None) -> None:
        """Print the byte value of each key pressed. Press [bold]q[/] to quit."""
        from rawedit.cli.studio.keys import run_key_probe

        configure_logging(log_file)
        code = run_key_probe()
        if code:
            raise typer.Exit(code)

    return app
