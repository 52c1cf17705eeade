"""TeamInitializer -- the ordered prefetch issued when a team becomes current.

All operations are fire-and-forget ``asyncio`` tasks created in a fixed
order, so a collaborator sees ``select_team`` before the channel fetch.
Nothing is cancelled when a newer team supersedes this one: a slow fetch
from a previous call may still land after the new team is selected
(last write wins). Set ``discard_stale_channel_results`` to drop the
channel-readiness signal of superseded calls.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from teamgate.config import TeamgateConfig, get_config
from teamgate.models import ActionResult, ClientSession, Team
from teamgate.types import FetchKind, TeamActions

logger = logging.getLogger(__name__)

ChannelsReadyCallback = Callable[[Team, bool], None]


def select_group_fetches(
    licensed: bool,
    ldap_groups_enabled: bool,
    custom_groups_enabled: bool,
    group_constrained: bool,
    *,
    has_user: bool = True,
) -> tuple[FetchKind, ...]:
    """Return the group fetches to issue, in issue order.

    Team-scoped groups and the general group list are alternatives:
    exactly one of them is chosen whenever any group fetch happens.
    """
    if not licensed or not (ldap_groups_enabled or custom_groups_enabled):
        return ()
    kinds: list[FetchKind] = []
    if has_user:
        kinds.append(FetchKind.USER_GROUPS)
    if ldap_groups_enabled:
        kinds.append(FetchKind.TEAM_CHANNEL_GROUPS)
    if group_constrained and ldap_groups_enabled:
        kinds.append(FetchKind.TEAM_GROUPS)
    else:
        kinds.append(FetchKind.GENERAL_GROUPS)
    return tuple(kinds)


class InitializationHandle:
    """The tasks issued by one :meth:`TeamInitializer.initialize` call."""

    def __init__(self, team: Team, generation: int) -> None:
        self.team = team
        self.generation = generation
        self._tasks: dict[FetchKind, asyncio.Task[ActionResult]] = {}

    @property
    def issued(self) -> list[FetchKind]:
        return list(self._tasks)

    def task(self, kind: FetchKind) -> asyncio.Task[ActionResult] | None:
        return self._tasks.get(kind)

    async def wait(self) -> dict[FetchKind, ActionResult]:
        """Wait for every issued operation and return the results by kind."""
        results = await asyncio.gather(*self._tasks.values())
        return dict(zip(self._tasks, results, strict=True))


class TeamInitializer:
    """Issues the prefetch sequence for a resolved team.

    ``initialize`` must be called from inside a running event loop. Only
    the channel fetch reports readiness, through *on_channels_ready*.
    """

    def __init__(
        self,
        actions: TeamActions,
        session: ClientSession,
        *,
        on_channels_ready: ChannelsReadyCallback | None = None,
        config: TeamgateConfig | None = None,
    ) -> None:
        self._actions = actions
        self._session = session
        self._on_channels_ready = on_channels_ready
        self._config = config or get_config()
        self._generation = 0
        self._background: set[asyncio.Task[ActionResult]] = set()

    @property
    def generation(self) -> int:
        return self._generation

    def initialize(self, team: Team) -> InitializationHandle:
        self._generation += 1
        handle = InitializationHandle(team, self._generation)
        session = self._session
        actions = self._actions
        user = session.current_user

        if team.id != session.previous_team_id:
            self._issue(handle, FetchKind.CLOSE_RIGHT_HAND_SIDE, actions.close_right_hand_side())

        self._issue(handle, FetchKind.TEAM_UNREADS, actions.fetch_team_unreads(session.collapsed_threads))
        self._issue(handle, FetchKind.SELECT_TEAM, actions.select_team(team))
        self._issue(handle, FetchKind.PREVIOUS_TEAM, actions.set_previous_team_id(team.id))

        if user is not None and user.is_guest:
            self._notify_channels_ready(handle, False)
        self._issue(handle, FetchKind.CHANNELS_AND_MEMBERS, self._fetch_channels(handle))
        self._issue(handle, FetchKind.PRESENCE, actions.load_presence_for_sidebar())

        license_ = session.license
        group_kinds = select_group_fetches(
            license_.is_licensed,
            license_.ldap_groups,
            session.custom_groups_enabled,
            team.group_constrained,
            has_user=user is not None,
        )
        for kind in group_kinds:
            self._issue(handle, kind, self._group_call(kind, team))

        logger.info("Initializing team '%s' (generation %d): %s", team.name, handle.generation, handle.issued)
        return handle

    # -- Internal helpers -----------------------------------------------------

    def _group_call(self, kind: FetchKind, team: Team) -> Awaitable[ActionResult]:
        per_page = self._config.group_page_size
        if kind == FetchKind.USER_GROUPS:
            user_id = self._session.current_user.id  # type: ignore[union-attr]
            return self._actions.fetch_groups_for_user(user_id, False, 0, per_page, True)
        if kind == FetchKind.TEAM_CHANNEL_GROUPS:
            return self._actions.fetch_groups_for_team_channels(team.id, True)
        if kind == FetchKind.TEAM_GROUPS:
            return self._actions.fetch_groups_for_team(team.id, True)
        return self._actions.fetch_groups(False, 0, per_page)

    async def _fetch_channels(self, handle: InitializationHandle) -> ActionResult:
        result = await self._guard(
            FetchKind.CHANNELS_AND_MEMBERS,
            handle.team,
            self._actions.fetch_channels_and_members(handle.team.id),
        )
        self._notify_channels_ready(handle, True)
        return result

    def _notify_channels_ready(self, handle: InitializationHandle, ready: bool) -> None:
        if self._config.discard_stale_channel_results and handle.generation != self._generation:
            logger.debug(
                "Dropping channels_ready=%s for superseded team '%s' (generation %d < %d)",
                ready,
                handle.team.name,
                handle.generation,
                self._generation,
            )
            return
        if self._on_channels_ready is not None:
            self._on_channels_ready(handle.team, ready)

    def _issue(self, handle: InitializationHandle, kind: FetchKind, operation: Awaitable[Any]) -> None:
        if kind == FetchKind.CHANNELS_AND_MEMBERS:
            coro = operation
        else:
            coro = self._guard(kind, handle.team, operation)
        task = asyncio.ensure_future(coro)
        handle._tasks[kind] = task
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    @staticmethod
    async def _guard(kind: FetchKind, team: Team, operation: Awaitable[Any]) -> ActionResult:
        try:
            result = await operation
        except Exception as exc:
            logger.warning("Prefetch %s for team '%s' failed", kind, team.name, exc_info=True)
            return ActionResult(error=str(exc) or type(exc).__name__)
        if not isinstance(result, ActionResult):
            result = ActionResult(data=result)
        if result.error:
            logger.debug("Prefetch %s for team '%s' returned error: %s", kind, team.name, result.error)
        return result
