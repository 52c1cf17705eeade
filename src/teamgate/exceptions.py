"""Exception hierarchy for teamgate."""

from __future__ import annotations


class TeamgateError(Exception):
    """Base class for all teamgate errors."""


class ConfigError(TeamgateError):
    """Configuration could not be loaded or validated."""


class TeamError(TeamgateError):
    """Base class for team resolution and membership errors."""


class TeamNotFoundError(TeamError):
    """No active team matches the requested name."""


class MembershipRejectedError(TeamError):
    """The server refused to add the current user to the team."""
