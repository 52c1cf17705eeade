"""Shared test fixtures for teamgate tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from teamgate.config import TeamgateConfig
from teamgate.models import ActionResult, ClientSession, License, UserProfile
from teamgate.teams.marker import JoinedOnLoadStore
from teamgate.window import WindowActivity

ACTION_NAMES = (
    "resolve_team_by_name",
    "add_user_to_team",
    "select_team",
    "set_previous_team_id",
    "close_right_hand_side",
    "fetch_team_unreads",
    "fetch_channels_and_members",
    "fetch_all_teams_channels_and_members",
    "load_presence_for_sidebar",
    "fetch_groups_for_user",
    "fetch_groups_for_team_channels",
    "fetch_groups_for_team",
    "fetch_groups",
    "mark_channel_read_on_focus",
    "set_viewed_channel",
    "start_periodic_status_updates",
    "stop_periodic_status_updates",
)


def make_actions() -> MagicMock:
    """A TeamActions double whose every operation succeeds with empty data."""
    actions = MagicMock()
    for name in ACTION_NAMES:
        setattr(actions, name, AsyncMock(return_value=ActionResult()))
    return actions


@pytest.fixture
def actions() -> MagicMock:
    return make_actions()


@pytest.fixture
def user() -> UserProfile:
    return UserProfile(id="user-1", username="sam", roles="system_user")


@pytest.fixture
def session(user: UserProfile) -> ClientSession:
    return ClientSession(current_user=user, license=License())


@pytest.fixture
def config(tmp_path) -> TeamgateConfig:
    return TeamgateConfig(state_dir=str(tmp_path / "state"))


@pytest.fixture
def marker(config: TeamgateConfig) -> JoinedOnLoadStore:
    return JoinedOnLoadStore(config.state_dir)


@pytest.fixture
def activity() -> WindowActivity:
    return WindowActivity()


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_000.0)
