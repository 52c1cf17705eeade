"""FocusReadSync -- keep read state in step with window focus."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from teamgate.models import ClientSession, FocusState
from teamgate.types import TeamActions
from teamgate.window import WindowActivity, window_activity

logger = logging.getLogger(__name__)


class FocusReadSync:
    """Blur/focus handlers.

    On blur the viewed channel is cleared server-side. On focus the
    current channel is marked read, and after a blur longer than
    *unread_check_seconds* the current team's channels are re-fetched.
    """

    def __init__(
        self,
        actions: TeamActions,
        session: ClientSession,
        *,
        unread_check_seconds: float = 10.0,
        clock: Callable[[], float] = time.time,
        activity: WindowActivity = window_activity,
    ) -> None:
        self._actions = actions
        self._session = session
        self._threshold = unread_check_seconds
        self._clock = clock
        self._activity = activity
        self._state = FocusState(blurred_at_timestamp=clock(), window_active=activity.is_active)

    @property
    def state(self) -> FocusState:
        return self._state

    def _set_active(self, active: bool, **update: float) -> None:
        self._state = self._state.model_copy(update={"window_active": active, **update})
        self._activity.set_active(active)

    async def on_blur(self, *_: object) -> None:
        self._set_active(False, blurred_at_timestamp=self._clock())
        if self._session.current_user is not None:
            try:
                await self._actions.set_viewed_channel("")
            except Exception:
                logger.warning("Clearing viewed channel on blur failed", exc_info=True)

    async def on_focus(self, *_: object) -> bool:
        """Handle a focus event. Returns ``True`` if channels were re-fetched."""
        session = self._session
        if session.selected_thread_id:
            self._set_active(True)

        if session.current_channel_id:
            try:
                await self._actions.mark_channel_read_on_focus(session.current_channel_id)
            except Exception:
                logger.warning("Marking channel %s read on focus failed", session.current_channel_id, exc_info=True)
            self._set_active(True)

        stale = self._clock() - self._state.blurred_at_timestamp > self._threshold
        if stale and session.current_team_id:
            logger.debug("Window was blurred for over %.0fs, refreshing team %s", self._threshold, session.current_team_id)
            try:
                await self._actions.fetch_channels_and_members(session.current_team_id)
            except Exception:
                logger.warning("Refreshing channels for team %s failed", session.current_team_id, exc_info=True)
            return True
        return False
