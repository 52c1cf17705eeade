from __future__ import annotations

import pytest
from pydantic import ValidationError

from teamgate.models import ActionResult, ControllerState, License, Team, UserProfile
from teamgate.types import ControllerPhase


class TestTeam:
    def test_active(self):
        assert Team(id="t", name="alpha").is_active
        assert not Team(id="t", name="alpha", delete_at=1).is_active

    def test_frozen(self):
        team = Team(id="t", name="alpha")
        with pytest.raises(ValidationError):
            team.name = "beta"


class TestUserProfile:
    def test_guest_role(self):
        assert UserProfile(id="u", roles="system_guest").is_guest
        assert UserProfile(id="u", roles="system_user system_guest").is_guest
        assert not UserProfile(id="u", roles="system_user").is_guest
        assert not UserProfile(id="u", roles="system_guest_admin").is_guest


class TestLicense:
    def test_from_client_license(self):
        license_ = License.from_client_license({"IsLicensed": "true", "LDAPGroups": "false"})
        assert license_.is_licensed
        assert not license_.ldap_groups

    def test_missing_license(self):
        assert License.from_client_license(None) == License()
        assert License.from_client_license({}) == License()


class TestActionResult:
    def test_ok(self):
        assert ActionResult(data=[1]).ok
        assert not ActionResult(error="nope").ok


class TestControllerState:
    def test_defaults(self):
        state = ControllerState()
        assert state.phase == ControllerPhase.RESOLVING
        assert state.current_team is None
        assert state.channels_ready is False

    def test_copy_replaces(self):
        state = ControllerState(last_route_slug="alpha")
        ready = state.model_copy(update={"channels_ready": True})
        assert ready is not state
        assert state.channels_ready is False
        assert ready.last_route_slug == "alpha"
