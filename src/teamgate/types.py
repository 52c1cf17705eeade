from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from teamgate.models import ActionResult, Team


class ControllerPhase(StrEnum):
    RESOLVING = "resolving"
    JOINING = "joining"
    INITIALIZING = "initializing"
    READY = "ready"
    ERROR = "error"


class JoinOutcome(StrEnum):
    JOINED = "joined"
    SKIPPED = "skipped"
    TEAM_NOT_FOUND = "team_not_found"
    MEMBERSHIP_REJECTED = "membership_rejected"


class FetchKind(StrEnum):
    CLOSE_RIGHT_HAND_SIDE = "close_right_hand_side"
    TEAM_UNREADS = "team_unreads"
    SELECT_TEAM = "select_team"
    PREVIOUS_TEAM = "previous_team"
    CHANNELS_AND_MEMBERS = "channels_and_members"
    PRESENCE = "presence"
    USER_GROUPS = "user_groups"
    TEAM_CHANNEL_GROUPS = "team_channel_groups"
    TEAM_GROUPS = "team_groups"
    GENERAL_GROUPS = "general_groups"


class ErrorReason(StrEnum):
    RESERVED_SLUG = "reserved_slug"
    TEAM_NOT_FOUND = "team_not_found"


@runtime_checkable
class TeamActions(Protocol):
    """Asynchronous server-side operations the controller depends on.

    Every call resolves to an :class:`~teamgate.models.ActionResult`;
    failures are reported through its ``error`` field.
    """

    async def resolve_team_by_name(self, name: str) -> ActionResult: ...

    async def add_user_to_team(self, team_id: str, user_id: str | None) -> ActionResult: ...

    async def select_team(self, team: Team) -> ActionResult: ...

    async def set_previous_team_id(self, team_id: str) -> ActionResult: ...

    async def close_right_hand_side(self) -> ActionResult: ...

    async def fetch_team_unreads(self, collapsed_threads: bool) -> ActionResult: ...

    async def fetch_channels_and_members(self, team_id: str) -> ActionResult: ...

    async def fetch_all_teams_channels_and_members(self) -> ActionResult: ...

    async def load_presence_for_sidebar(self) -> ActionResult: ...

    async def fetch_groups_for_user(
        self,
        user_id: str,
        filter_allow_reference: bool,
        page: int,
        per_page: int,
        include_member_count: bool,
    ) -> ActionResult: ...

    async def fetch_groups_for_team_channels(self, team_id: str, filter_allow_reference: bool) -> ActionResult: ...

    async def fetch_groups_for_team(self, team_id: str, filter_allow_reference: bool) -> ActionResult: ...

    async def fetch_groups(self, filter_allow_reference: bool, page: int, per_page: int) -> ActionResult: ...

    async def mark_channel_read_on_focus(self, channel_id: str) -> ActionResult: ...

    async def set_viewed_channel(self, channel_id: str) -> ActionResult: ...

    async def start_periodic_status_updates(self) -> ActionResult: ...

    async def stop_periodic_status_updates(self) -> ActionResult: ...


@runtime_checkable
class RealtimeTransport(Protocol):
    async def reconnect(self, forced: bool = False) -> Any: ...


@runtime_checkable
class Navigator(Protocol):
    def push(self, path: str) -> None: ...


@runtime_checkable
class ViewSurface(Protocol):
    def element_classes(self, element_id: str) -> str | None: ...

    def focus(self, element_id: str) -> bool: ...

