"""``teamgate route`` -- Show which view slot a team path dispatches to."""

from __future__ import annotations

import typer
from rich.console import Console

from teamgate.config import get_config
from teamgate.routes import PluginRoute, RouteSlotRegistry
from teamgate_cli.ui.panels import status_table


def _parse_plugin(spec: str) -> PluginRoute:
    plugin_id, sep, route = spec.partition("=")
    if not sep or not plugin_id or not route:
        raise typer.BadParameter(f"Expected ID=ROUTE, got '{spec}'")
    return PluginRoute(id=plugin_id, route=route)


def route(
    path: str = typer.Argument(..., help="Path such as /my-team/integrations."),  # noqa: B008
    plugin: list[str] = typer.Option(  # noqa: B008
        [],
        "--plugin",
        "-p",
        help="Plugin route as ID=ROUTE. Repeatable.",
    ),
) -> None:
    """Resolve PATH against the built-in and plugin view slots."""
    console = Console()
    registry = RouteSlotRegistry([_parse_plugin(p) for p in plugin])
    match = registry.match(path)
    reserved = get_config().is_reserved(match.team_slug)

    rows = [
        ("team", "[yellow]reserved[/yellow]" if reserved else "", match.team_slug),
        ("slot", "", match.slot_id),
    ]
    if match.plugin_id:
        rows.append(("plugin", "", match.plugin_id))
    status_table("Route", rows, columns=("Field", "Note", "Value"), console=console)
