"""teamgate -- keeps a chat client's current team in step with navigation.

When the route names a team, the controller resolves it against the
user's memberships, joins it if needed, and issues the ordered prefetch
that must land before the team's channels can render. Two independent
monitors detect process suspension and keep read state in step with
window focus.

Quick start::

    from teamgate import RouteTeamController, TeamDirectory

    controller = RouteTeamController(actions, session, TeamDirectory(teams), navigator, transport)
    await controller.start("my-team")
"""

from teamgate._version import __version__
from teamgate.config import TeamgateConfig, get_config, load_config, reset_config
from teamgate.controller import RouteTeamController
from teamgate.exceptions import (
    ConfigError,
    MembershipRejectedError,
    TeamError,
    TeamgateError,
    TeamNotFoundError,
)
from teamgate.models import (
    ActionResult,
    ClientSession,
    ControllerState,
    JoinResult,
    License,
    Team,
    TeamMembership,
    UserProfile,
)
from teamgate.monitors import FocusReadSync, IdleWakeMonitor
from teamgate.routes import PluginRoute, RouteSlotRegistry, SlotMatch, team_slug_from_path
from teamgate.shortcuts import KeyEvent, ShortcutDispatcher
from teamgate.teams import JoinedOnLoadStore, MembershipJoiner, TeamDirectory, TeamInitializer, select_group_fetches
from teamgate.types import ControllerPhase, ErrorReason, FetchKind, JoinOutcome
from teamgate.window import WindowActivity, WindowEvents, window_activity

__all__ = [
    "__version__",
    "ActionResult",
    "ClientSession",
    "ConfigError",
    "ControllerPhase",
    "ControllerState",
    "ErrorReason",
    "FetchKind",
    "FocusReadSync",
    "IdleWakeMonitor",
    "JoinOutcome",
    "JoinResult",
    "JoinedOnLoadStore",
    "KeyEvent",
    "License",
    "MembershipJoiner",
    "MembershipRejectedError",
    "PluginRoute",
    "RouteSlotRegistry",
    "RouteTeamController",
    "ShortcutDispatcher",
    "SlotMatch",
    "Team",
    "TeamDirectory",
    "TeamError",
    "TeamInitializer",
    "TeamMembership",
    "TeamNotFoundError",
    "TeamgateConfig",
    "TeamgateError",
    "UserProfile",
    "WindowActivity",
    "WindowEvents",
    "get_config",
    "load_config",
    "reset_config",
    "select_group_fetches",
    "team_slug_from_path",
    "window_activity",
]
