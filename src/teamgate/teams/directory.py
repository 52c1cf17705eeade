"""TeamDirectory -- the teams the current user is known to belong to."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from teamgate.exceptions import TeamNotFoundError
from teamgate.models import Team


def resolve_team(slug: str, teams: Iterable[Team]) -> Team | None:
    """Return the team whose name is *slug*, or ``None``."""
    for team in teams:
        if team.name == slug:
            return team
    return None


class TeamDirectory:
    """Thread-safe view of the user's team memberships, keyed by team name.

    Read-only to the controller; collaborators refresh it with
    :meth:`replace` or :meth:`add`.
    """

    def __init__(self, teams: Iterable[Team] = ()) -> None:
        self._teams: dict[str, Team] = {}
        self._lock = threading.Lock()
        self.replace(teams)

    def replace(self, teams: Iterable[Team]) -> None:
        """Swap the whole membership list for *teams*."""
        with self._lock:
            self._teams = {team.name: team for team in teams}

    def add(self, team: Team) -> None:
        with self._lock:
            self._teams[team.name] = team

    def get(self, name: str) -> Team:
        """Return the team called *name*, or raise :class:`TeamNotFoundError`."""
        with self._lock:
            if name not in self._teams:
                raise TeamNotFoundError(f"Team '{name}' not in directory")
            return self._teams[name]

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._teams

    def teams(self) -> list[Team]:
        with self._lock:
            return list(self._teams.values())

    def resolve(self, slug: str) -> Team | None:
        return resolve_team(slug, self.teams())

    def clear(self) -> None:
        with self._lock:
            self._teams.clear()
