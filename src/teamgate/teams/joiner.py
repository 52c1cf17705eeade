"""MembershipJoiner -- join a team the user is not yet a member of."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from teamgate.config import TeamgateConfig, get_config
from teamgate.models import ClientSession, JoinResult, Team
from teamgate.teams.marker import JoinedOnLoadStore
from teamgate.types import JoinOutcome, TeamActions

logger = logging.getLogger(__name__)


def _as_team(data: object) -> Team | None:
    if isinstance(data, Team):
        return data
    if isinstance(data, Mapping):
        return Team.model_validate(data)
    return None


class MembershipJoiner:
    """Resolves a team by name and adds the current user to it.

    Parameters:
        actions: Server-side operations.
        session: Live client session; ``current_user`` supplies the user id.
        marker: Store recording the team joined on first load.
        config: Settings; only ``reserved_team_names`` is consulted.
    """

    def __init__(
        self,
        actions: TeamActions,
        session: ClientSession,
        marker: JoinedOnLoadStore,
        *,
        config: TeamgateConfig | None = None,
    ) -> None:
        self._actions = actions
        self._session = session
        self._marker = marker
        self._config = config or get_config()

    async def join(self, slug: str, *, first_load: bool = False) -> JoinResult:
        if self._config.is_reserved(slug):
            logger.debug("Skipping join for reserved team name '%s'", slug)
            return JoinResult(outcome=JoinOutcome.SKIPPED)

        try:
            lookup = await self._actions.resolve_team_by_name(slug)
            team = _as_team(lookup.data)
        except Exception as exc:
            logger.warning("Looking up team '%s' failed", slug, exc_info=True)
            return JoinResult(outcome=JoinOutcome.TEAM_NOT_FOUND, error=str(exc) or type(exc).__name__)
        if lookup.error or team is None or not team.is_active:
            logger.warning("Team '%s' not found or deleted: %s", slug, lookup.error)
            return JoinResult(outcome=JoinOutcome.TEAM_NOT_FOUND, error=lookup.error)

        user = self._session.current_user
        try:
            added = await self._actions.add_user_to_team(team.id, user.id if user else None)
        except Exception as exc:
            logger.warning("Adding user to team '%s' failed", slug, exc_info=True)
            return JoinResult(
                outcome=JoinOutcome.MEMBERSHIP_REJECTED,
                team=team,
                error=str(exc) or type(exc).__name__,
            )
        if added.error:
            logger.warning("Could not join team '%s': %s", slug, added.error)
            return JoinResult(outcome=JoinOutcome.MEMBERSHIP_REJECTED, team=team, error=added.error)

        if first_load:
            self._marker.set(team.id)
        logger.info("Joined team '%s' (%s)", team.name, team.id)
        return JoinResult(outcome=JoinOutcome.JOINED, team=team)
