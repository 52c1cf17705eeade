"""Data models shared by the controller, joiner, initializer and monitors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from teamgate.exceptions import MembershipRejectedError, TeamNotFoundError
from teamgate.types import ControllerPhase, ErrorReason, JoinOutcome

GUEST_ROLE = "system_guest"

# ---------------------------------------------------------------------------
# Server entities
# ---------------------------------------------------------------------------


class Team(BaseModel):
    """A team as fetched from the server.

    Immutable; a re-fetch replaces the whole record.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str  # route slug, unique
    display_name: str = ""
    delete_at: int = 0  # 0 means active
    group_constrained: bool = False

    @property
    def is_active(self) -> bool:
        return self.delete_at == 0


class TeamMembership(BaseModel):
    model_config = ConfigDict(frozen=True)

    team_id: str
    user_id: str


class UserProfile(BaseModel):
    id: str
    username: str = ""
    roles: str = ""  # space separated

    @property
    def is_guest(self) -> bool:
        return GUEST_ROLE in self.roles.split()


class License(BaseModel):
    is_licensed: bool = False
    ldap_groups: bool = False

    @classmethod
    def from_client_license(cls, data: Mapping[str, Any] | None) -> License:
        """Build from the server's client-license map, whose flags are the strings ``"true"``/``"false"``."""
        if not data:
            return cls()
        return cls(
            is_licensed=data.get("IsLicensed") == "true",
            ldap_groups=data.get("LDAPGroups") == "true",
        )


# ---------------------------------------------------------------------------
# Client session -- kept current by the host application
# ---------------------------------------------------------------------------


class ClientSession(BaseModel):
    """Live client-side facts read by the controller at event time."""

    current_user: UserProfile | None = None
    license: License = Field(default_factory=License)
    collapsed_threads: bool = False
    custom_groups_enabled: bool = False
    previous_team_id: str | None = None
    current_team_id: str | None = None
    current_channel_id: str | None = None
    selected_thread_id: str | None = None
    mfa_required: bool = False


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------


class ActionResult(BaseModel):
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class JoinResult(BaseModel):
    outcome: JoinOutcome
    team: Team | None = None
    error: str | None = None

    @property
    def joined(self) -> bool:
        return self.outcome == JoinOutcome.JOINED

    def raise_for_outcome(self) -> Team | None:
        """Return the joined team, or raise for a failed join. Skipped joins return ``None``."""
        if self.outcome == JoinOutcome.TEAM_NOT_FOUND:
            raise TeamNotFoundError(self.error or "team not found")
        if self.outcome == JoinOutcome.MEMBERSHIP_REJECTED:
            raise MembershipRejectedError(self.error or "membership rejected")
        return self.team


# ---------------------------------------------------------------------------
# Component-owned state
# ---------------------------------------------------------------------------


class ControllerState(BaseModel):
    """Snapshot exposed to the view layer. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    phase: ControllerPhase = ControllerPhase.RESOLVING
    current_team: Team | None = None
    channels_ready: bool = False
    last_route_slug: str = ""
    error_reason: ErrorReason | None = None


class IdleWakeState(BaseModel):
    last_tick_timestamp: float = 0.0


class FocusState(BaseModel):
    blurred_at_timestamp: float = 0.0
    window_active: bool = True
