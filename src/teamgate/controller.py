"""RouteTeamController -- keeps the current team in step with the route.

Lifecycle::

    controller = RouteTeamController(actions, session, directory, navigator, transport)
    await controller.start("my-team")          # mount
    await controller.on_route_changed("other")  # route slug changed
    await controller.stop()                     # unmount

or ``async with controller.mounted("my-team"): ...``.

The view layer reads :attr:`state` (or subscribes to it) and renders
nothing until ``current_team`` is set.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

from teamgate.config import TeamgateConfig, get_config
from teamgate.models import ClientSession, ControllerState, Team
from teamgate.monitors.focus import FocusReadSync
from teamgate.monitors.idle_wake import IdleWakeMonitor
from teamgate.shortcuts import KeyEvent, ShortcutDispatcher
from teamgate.teams.directory import TeamDirectory
from teamgate.teams.initializer import InitializationHandle, TeamInitializer
from teamgate.teams.joiner import MembershipJoiner
from teamgate.teams.marker import JoinedOnLoadStore
from teamgate.types import ControllerPhase, ErrorReason, JoinOutcome, Navigator, RealtimeTransport, TeamActions, ViewSurface
from teamgate.window import BLUR, FOCUS, KEYDOWN, WindowActivity, WindowEvents, window_activity

logger = logging.getLogger(__name__)

StateListener = Callable[[ControllerState], None]


class RouteTeamController:
    """State machine: resolving -> (joining) -> initializing -> ready | error.

    Parameters:
        actions: Server-side operations shared by all components.
        session: Live client session kept current by the host.
        directory: Teams the user already belongs to.
        navigator: Receives error and MFA redirects.
        transport: Real-time connection reconnected after a wake-up.
        events: Window event source for focus, blur and keydown.
        surface: View surface for the keyboard shortcut; without one no
            keydown listener is registered.
        marker: Joined-on-load store; defaults to one under ``state_dir``.
    """

    def __init__(
        self,
        actions: TeamActions,
        session: ClientSession,
        directory: TeamDirectory,
        navigator: Navigator,
        transport: RealtimeTransport,
        *,
        events: WindowEvents | None = None,
        surface: ViewSurface | None = None,
        marker: JoinedOnLoadStore | None = None,
        config: TeamgateConfig | None = None,
        clock: Callable[[], float] = time.time,
        activity: WindowActivity = window_activity,
    ) -> None:
        self._config = config or get_config()
        self._actions = actions
        self._session = session
        self._directory = directory
        self._navigator = navigator
        self._events = events or WindowEvents()
        self._activity = activity
        self._marker = marker or JoinedOnLoadStore(self._config.state_dir)

        self._joiner = MembershipJoiner(actions, session, self._marker, config=self._config)
        self._initializer = TeamInitializer(
            actions,
            session,
            on_channels_ready=self._on_channels_ready,
            config=self._config,
        )
        self._idle_monitor = IdleWakeMonitor(
            transport,
            interval=self._config.wakeup_check_interval,
            threshold=self._config.wakeup_threshold,
            clock=clock,
        )
        self._focus_sync = FocusReadSync(
            actions,
            session,
            unread_check_seconds=self._config.unread_check_seconds,
            clock=clock,
            activity=activity,
        )
        self._shortcuts = ShortcutDispatcher(surface) if surface is not None else None

        self._state = ControllerState()
        self._listeners: list[StateListener] = []
        self._resources: AsyncExitStack | None = None
        self._route_generation = 0
        self._initialization: InitializationHandle | None = None
        self._background: set[asyncio.Future[Any]] = set()

    # -- View contract --------------------------------------------------------

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def current_team(self) -> Team | None:
        return self._state.current_team

    @property
    def channels_ready(self) -> bool:
        return self._state.channels_ready

    @property
    def started(self) -> bool:
        return self._resources is not None

    @property
    def initialization(self) -> InitializationHandle | None:
        """Handle of the most recent prefetch, for callers that want to await it."""
        return self._initialization

    @property
    def joiner(self) -> MembershipJoiner:
        return self._joiner

    @property
    def initializer(self) -> TeamInitializer:
        return self._initializer

    @property
    def idle_monitor(self) -> IdleWakeMonitor:
        return self._idle_monitor

    @property
    def focus_sync(self) -> FocusReadSync:
        return self._focus_sync

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* with every new state. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- Lifecycle ------------------------------------------------------------

    async def start(self, slug: str) -> None:
        """Mount: acquire timers and listeners, then resolve *slug*."""
        if self._resources is not None:
            await self.stop()

        if self._session.mfa_required:
            logger.info("MFA setup required, redirecting")
            self._navigator.push(self._config.mfa_setup_path)
            return

        stack = AsyncExitStack()
        try:
            self._marker.clear()

            self._idle_monitor.start()
            stack.callback(self._idle_monitor.stop)

            self._spawn("start status updates", self._actions.start_periodic_status_updates())
            stack.push_async_callback(self._stop_status_updates)
            self._spawn("fetch all teams", self._actions.fetch_all_teams_channels_and_members())

            self._activity.set_active(True)
            stack.callback(self._activity.set_active, False)

            self._listen(stack, FOCUS, self._focus_sync.on_focus)
            self._listen(stack, BLUR, self._focus_sync.on_blur)
            if self._shortcuts is not None:
                self._listen(stack, KEYDOWN, self._on_key_down)
        except BaseException:
            await stack.aclose()
            raise
        self._resources = stack

        try:
            await self._enter(slug, first_load=True)
        except BaseException:
            await self.stop()
            raise

    async def on_route_changed(self, slug: str) -> None:
        """Re-run resolution when the route's team slug changes."""
        if self._resources is None:
            logger.debug("Ignoring route change to '%s' on a stopped controller", slug)
            return
        if slug == self._state.last_route_slug:
            return
        await self._enter(slug, first_load=False)

    def refresh_from_directory(self) -> None:
        """Pick up a re-fetched record of the current team from the directory."""
        current = self._state.current_team
        if current is None:
            return
        team = self._directory.resolve(self._state.last_route_slug)
        if team is not None and team != current:
            self._transition(current_team=team)

    async def stop(self) -> None:
        """Unmount: release every timer and listener acquired by :meth:`start`."""
        stack, self._resources = self._resources, None
        if stack is not None:
            await stack.aclose()

    @asynccontextmanager
    async def mounted(self, slug: str) -> AsyncIterator[RouteTeamController]:
        try:
            await self.start(slug)
            yield self
        finally:
            await self.stop()

    # -- State machine --------------------------------------------------------

    async def _enter(self, slug: str, *, first_load: bool) -> None:
        self._route_generation += 1
        generation = self._route_generation
        self._replace(ControllerState(phase=ControllerPhase.RESOLVING, last_route_slug=slug))

        team = self._directory.resolve(slug)
        if team is not None:
            self._activate(team)
            return

        if self._config.is_reserved(slug):
            logger.debug("Route slug '%s' is reserved, ignoring", slug)
            self._transition(phase=ControllerPhase.ERROR, error_reason=ErrorReason.RESERVED_SLUG)
            return

        self._transition(phase=ControllerPhase.JOINING)
        result = await self._joiner.join(slug, first_load=first_load)
        if generation != self._route_generation:
            logger.debug("Discarding join result for '%s': route moved on", slug)
            return

        if result.outcome == JoinOutcome.SKIPPED:
            self._transition(phase=ControllerPhase.ERROR, error_reason=ErrorReason.RESERVED_SLUG)
        elif result.joined and result.team is not None:
            self._activate(result.team)
        else:
            self._transition(phase=ControllerPhase.ERROR, error_reason=ErrorReason.TEAM_NOT_FOUND)
            self._navigator.push(self._config.error_path)

    def _activate(self, team: Team) -> None:
        self._transition(phase=ControllerPhase.INITIALIZING, current_team=team, channels_ready=False)
        self._initialization = self._initializer.initialize(team)
        self._transition(phase=ControllerPhase.READY)

    def _on_channels_ready(self, team: Team, ready: bool) -> None:
        # Last write wins: a slow fetch for a previous team may land here.
        self._transition(channels_ready=ready)

    def _transition(self, **update: Any) -> None:
        self._replace(self._state.model_copy(update=update))

    def _replace(self, state: ControllerState) -> None:
        if state.phase != self._state.phase:
            logger.info(
                "Team route '%s': %s -> %s",
                state.last_route_slug,
                self._state.phase,
                state.phase,
            )
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # -- Internal helpers -----------------------------------------------------

    def _listen(self, stack: AsyncExitStack, event: str, handler: Callable[..., Any]) -> None:
        self._events.add_listener(event, handler)
        stack.callback(self._events.remove_listener, event, handler)

    def _on_key_down(self, event: KeyEvent) -> None:
        if self._shortcuts is not None:
            self._shortcuts.handle(event)

    async def _stop_status_updates(self) -> None:
        try:
            await self._actions.stop_periodic_status_updates()
        except Exception:
            logger.warning("Stopping periodic status updates failed", exc_info=True)

    def _spawn(self, label: str, operation: Awaitable[Any]) -> None:
        async def run() -> None:
            try:
                await operation
            except Exception:
                logger.warning("Background operation '%s' failed", label, exc_info=True)

        task = asyncio.ensure_future(run())
        self._background.add(task)
        task.add_done_callback(self._background.discard)
