"""Route-to-slot dispatch for the team view.

The controller does not render; it tells the view layer which named slot
a path under ``/<team>/`` belongs to. Built-in backstage routes come
first, then plugin routes in registration order, then the channel view.
"""

from __future__ import annotations

from pydantic import BaseModel

from teamgate.models import ControllerState

BACKSTAGE_SLOT = "backstage"
PLUGIN_SLOT = "plugin"
CHANNEL_SLOT = "channel"

_BUILTIN_ROUTES = (("integrations", BACKSTAGE_SLOT), ("emoji", BACKSTAGE_SLOT))


class PluginRoute(BaseModel):
    id: str
    route: str


class ViewSlot(BaseModel):
    route_suffix: str
    slot_id: str
    plugin_id: str | None = None


class SlotMatch(BaseModel):
    team_slug: str
    slot_id: str
    plugin_id: str | None = None
    fetching_channels: bool = False


def team_slug_from_path(path: str) -> str:
    """Return the first path segment, which names the team."""
    return path.strip("/").split("/", 1)[0]


def _suffix_matches(rest: str, suffix: str) -> bool:
    suffix = suffix.strip("/")
    if not suffix:
        return False
    return rest == suffix or rest.startswith(suffix + "/")


class RouteSlotRegistry:
    def __init__(self, plugins: list[PluginRoute] | None = None) -> None:
        self._slots: list[ViewSlot] = [ViewSlot(route_suffix=s, slot_id=slot) for s, slot in _BUILTIN_ROUTES]
        for plugin in plugins or []:
            self.register_plugin(plugin)

    @property
    def slots(self) -> list[ViewSlot]:
        return list(self._slots)

    def register_plugin(self, plugin: PluginRoute) -> None:
        self._slots.append(ViewSlot(route_suffix=plugin.route, slot_id=PLUGIN_SLOT, plugin_id=plugin.id))

    def unregister_plugin(self, plugin_id: str) -> None:
        self._slots = [s for s in self._slots if s.plugin_id != plugin_id]

    def match(self, path: str, state: ControllerState | None = None) -> SlotMatch | None:
        """Return the slot for *path*, or ``None`` while no team is resolved."""
        if state is not None and state.current_team is None:
            return None
        team_slug, _, rest = path.strip("/").partition("/")
        fetching = state is not None and not state.channels_ready
        for slot in self._slots:
            if _suffix_matches(rest, slot.route_suffix):
                return SlotMatch(team_slug=team_slug, slot_id=slot.slot_id, plugin_id=slot.plugin_id)
        return SlotMatch(team_slug=team_slug, slot_id=CHANNEL_SLOT, fetching_channels=fetching)
