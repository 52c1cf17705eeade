"""Main Typer application for the teamgate CLI."""

from __future__ import annotations

import typer

from teamgate._version import __version__
from teamgate_cli.commands.check import check
from teamgate_cli.commands.route import route

app = typer.Typer(
    name="teamgate",
    help="Teamgate -- team route controller diagnostics.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"teamgate {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Teamgate -- team route controller diagnostics."""


app.command(name="check")(check)
app.command(name="route")(route)
