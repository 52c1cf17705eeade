"""Team switching example -- drive the controller with an in-memory backend.

Shows the route -> join -> prefetch flow without a server: the user is
a member of "alpha", navigates to "beta" (joined on the fly), then to a
team that does not exist.
"""

import asyncio
import logging

from teamgate import (
    ActionResult,
    ClientSession,
    RouteTeamController,
    Team,
    TeamDirectory,
    TeamgateConfig,
    UserProfile,
)

SERVER_TEAMS = {
    "alpha": Team(id="t-alpha", name="alpha", display_name="Alpha"),
    "beta": Team(id="t-beta", name="beta", display_name="Beta"),
}


class InMemoryActions:
    """Every operation succeeds after a short simulated latency."""

    async def _ok(self, label, data=None):
        await asyncio.sleep(0.01)
        print(f"  -> {label}")
        return ActionResult(data=data)

    async def resolve_team_by_name(self, name):
        team = SERVER_TEAMS.get(name)
        return ActionResult(data=team) if team else ActionResult(error="404")

    async def add_user_to_team(self, team_id, user_id):
        return await self._ok(f"add {user_id} to {team_id}")

    async def select_team(self, team):
        return await self._ok(f"select {team.name}")

    async def set_previous_team_id(self, team_id):
        return await self._ok(f"previous team = {team_id}")

    async def close_right_hand_side(self):
        return await self._ok("close right-hand side")

    async def fetch_team_unreads(self, collapsed_threads):
        return await self._ok("team unreads")

    async def fetch_channels_and_members(self, team_id):
        return await self._ok(f"channels for {team_id}")

    async def fetch_all_teams_channels_and_members(self):
        return await self._ok("channels for all teams")

    async def load_presence_for_sidebar(self):
        return await self._ok("presence")

    async def fetch_groups_for_user(self, user_id, filter_allow_reference, page, per_page, include_member_count):
        return await self._ok("user groups")

    async def fetch_groups_for_team_channels(self, team_id, filter_allow_reference):
        return await self._ok("team channel groups")

    async def fetch_groups_for_team(self, team_id, filter_allow_reference):
        return await self._ok("team groups")

    async def fetch_groups(self, filter_allow_reference, page, per_page):
        return await self._ok("groups")

    async def mark_channel_read_on_focus(self, channel_id):
        return await self._ok(f"mark {channel_id} read")

    async def set_viewed_channel(self, channel_id):
        return await self._ok("viewed channel cleared")

    async def start_periodic_status_updates(self):
        return await self._ok("status updates on")

    async def stop_periodic_status_updates(self):
        return await self._ok("status updates off")


class PrintNavigator:
    def push(self, path):
        print(f"  navigate -> {path}")


class NoopTransport:
    async def reconnect(self, forced=False):
        print("  reconnect")


async def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    session = ClientSession(current_user=UserProfile(id="u-1", username="sam"))
    controller = RouteTeamController(
        InMemoryActions(),
        session,
        TeamDirectory([SERVER_TEAMS["alpha"]]),
        PrintNavigator(),
        NoopTransport(),
        config=TeamgateConfig(state_dir=".teamgate-example"),
    )
    controller.subscribe(lambda s: print(f"[{s.phase}] team={s.current_team and s.current_team.name} ready={s.channels_ready}"))

    async with controller.mounted("alpha"):
        await controller.initialization.wait()
        await controller.on_route_changed("beta")
        await controller.initialization.wait()
        await controller.on_route_changed("nowhere")


if __name__ == "__main__":
    asyncio.run(main())
