"""``teamgate check`` -- Show the effective configuration and dependencies."""

from __future__ import annotations

import importlib
from pathlib import Path

import typer
from rich.console import Console

from teamgate.config import TeamgateConfig, get_config, load_config
from teamgate.exceptions import ConfigError
from teamgate_cli.ui.panels import ACCENT, status_table

_PASS = "[green]PASS[/green]"
_SKIP = "[yellow]SKIP[/yellow]"
_SET = "[cyan]SET[/cyan]"


def _check_module(module_name: str, label: str) -> tuple[str, str, str]:
    try:
        mod = importlib.import_module(module_name)
        version = getattr(mod, "__version__", "installed")
        return (label, _PASS, str(version))
    except ImportError:
        return (label, _SKIP, "not installed")


def _config_rows(config: TeamgateConfig) -> list[tuple[str, str, str]]:
    return [
        ("wakeup_check_interval", _SET, f"{config.wakeup_check_interval:g}s"),
        ("wakeup_threshold", _SET, f"{config.wakeup_threshold:g}s"),
        ("unread_check_seconds", _SET, f"{config.unread_check_seconds:g}s"),
        ("group_page_size", _SET, str(config.group_page_size)),
        ("reserved_team_names", _SET, ", ".join(config.reserved_team_names)),
        ("state_dir", _SET, config.state_dir),
        ("discard_stale_channel_results", _SET, str(config.discard_stale_channel_results)),
    ]


def check(
    config_file: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="YAML or JSON config file to load instead of the environment.",
    ),
) -> None:
    """Check the environment and print the effective configuration."""
    console = Console()
    try:
        config = load_config(config_file) if config_file else get_config()
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    rows: list[tuple[str, str, str]] = [
        _check_module("teamgate", "teamgate"),
        _check_module("pydantic", "pydantic"),
        _check_module("pydantic_settings", "pydantic-settings"),
        _check_module("yaml", "pyyaml"),
    ]
    rows.extend(_config_rows(config))

    console.print()
    status_table("Environment Check", rows, console=console)
    pass_count = sum(1 for _, s, _ in rows if "PASS" in s)
    console.print(f"  [{ACCENT}]{pass_count}[/{ACCENT}] dependencies found.\n")
