from __future__ import annotations

import pytest

from teamgate.models import ClientSession
from teamgate.monitors.focus import FocusReadSync


def _sync(actions, session, clock, activity) -> FocusReadSync:
    return FocusReadSync(actions, session, unread_check_seconds=10, clock=clock, activity=activity)


class TestBlur:
    @pytest.mark.asyncio
    async def test_blur_records_time_and_clears_viewed_channel(self, actions, session, clock, activity):
        activity.set_active(True)
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        assert sync.state.blurred_at_timestamp == clock.now
        assert sync.state.window_active is False
        assert activity.is_active is False
        actions.set_viewed_channel.assert_awaited_once_with("")

    @pytest.mark.asyncio
    async def test_blur_without_user_skips_viewed_channel(self, actions, clock, activity):
        await _sync(actions, ClientSession(), clock, activity).on_blur()
        actions.set_viewed_channel.assert_not_awaited()


class TestFocus:
    @pytest.mark.asyncio
    async def test_short_blur_does_not_refetch(self, actions, session, clock, activity):
        session.current_team_id = "team-a"
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        clock.advance(5)
        assert await sync.on_focus() is False
        actions.fetch_channels_and_members.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_long_blur_refetches_team(self, actions, session, clock, activity):
        session.current_team_id = "team-a"
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        clock.advance(15)
        assert await sync.on_focus() is True
        actions.fetch_channels_and_members.assert_awaited_once_with("team-a")

    @pytest.mark.asyncio
    async def test_long_blur_without_team_does_nothing(self, actions, session, clock, activity):
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        clock.advance(60)
        assert await sync.on_focus() is False
        actions.fetch_channels_and_members.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_current_channel_marked_read(self, actions, session, clock, activity):
        session.current_channel_id = "chan-1"
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        await sync.on_focus()
        actions.mark_channel_read_on_focus.assert_awaited_once_with("chan-1")
        assert sync.state.window_active is True
        assert activity.is_active is True

    @pytest.mark.asyncio
    async def test_selected_thread_reactivates_window(self, actions, session, clock, activity):
        session.selected_thread_id = "thread-9"
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        await sync.on_focus()
        assert activity.is_active is True
        actions.mark_channel_read_on_focus.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_channel_or_thread_stays_inactive(self, actions, session, clock, activity):
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        await sync.on_focus()
        assert activity.is_active is False

    @pytest.mark.asyncio
    async def test_all_effects_on_one_focus(self, actions, session, clock, activity):
        session.selected_thread_id = "thread-9"
        session.current_channel_id = "chan-1"
        session.current_team_id = "team-a"
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        clock.advance(30)
        assert await sync.on_focus() is True
        actions.mark_channel_read_on_focus.assert_awaited_once_with("chan-1")
        actions.fetch_channels_and_members.assert_awaited_once_with("team-a")
        assert activity.is_active is True

    @pytest.mark.asyncio
    async def test_mark_read_failure_still_refetches(self, actions, session, clock, activity):
        session.current_channel_id = "chan-1"
        session.current_team_id = "team-a"
        actions.mark_channel_read_on_focus.side_effect = RuntimeError("offline")
        sync = _sync(actions, session, clock, activity)
        await sync.on_blur()
        clock.advance(11)
        assert await sync.on_focus() is True
        actions.fetch_channels_and_members.assert_awaited_once_with("team-a")
