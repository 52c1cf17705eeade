from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from teamgate.shortcuts import (
    POST_TEXTBOX,
    REPLY_TEXTBOX,
    SIDEBAR_EXPANDED_LEFT,
    SIDEBAR_RIGHT,
    KeyEvent,
    ShortcutDispatcher,
    cmd_or_ctrl_pressed,
)


def _surface(sidebar_classes: str | None) -> MagicMock:
    surface = MagicMock()
    surface.element_classes.side_effect = lambda el: sidebar_classes if el == SIDEBAR_RIGHT else None
    surface.focus.return_value = True
    return surface


class TestCmdOrCtrl:
    def test_mac_uses_meta(self):
        assert cmd_or_ctrl_pressed(KeyEvent(key="l", meta=True), is_mac=True)
        assert not cmd_or_ctrl_pressed(KeyEvent(key="l", ctrl=True), is_mac=True)

    def test_other_platforms_use_ctrl(self):
        assert cmd_or_ctrl_pressed(KeyEvent(key="l", ctrl=True), is_mac=False)
        assert not cmd_or_ctrl_pressed(KeyEvent(key="l", meta=True), is_mac=False)


class TestShortcutDispatcher:
    def test_expanded_sidebar_focuses_reply(self):
        surface = _surface(SIDEBAR_EXPANDED_LEFT)
        target = ShortcutDispatcher(surface, is_mac=False).handle(KeyEvent(key="L", shift=True, ctrl=True))
        assert target == REPLY_TEXTBOX
        surface.focus.assert_called_once_with(REPLY_TEXTBOX)

    def test_collapsed_sidebar_focuses_post(self):
        surface = _surface("sidebar--right")
        target = ShortcutDispatcher(surface, is_mac=False).handle(KeyEvent(key="l", shift=True, ctrl=True))
        assert target == POST_TEXTBOX

    def test_missing_sidebar_is_noop(self):
        surface = _surface(None)
        assert ShortcutDispatcher(surface, is_mac=False).handle(KeyEvent(key="l", shift=True, ctrl=True)) is None
        surface.focus.assert_not_called()

    @pytest.mark.parametrize(
        "event",
        [
            KeyEvent(key="l", ctrl=True),
            KeyEvent(key="l", shift=True),
            KeyEvent(key="k", shift=True, ctrl=True),
        ],
    )
    def test_other_keys_ignored(self, event):
        surface = _surface(SIDEBAR_EXPANDED_LEFT)
        assert ShortcutDispatcher(surface, is_mac=False).handle(event) is None
        surface.element_classes.assert_not_called()

    def test_missing_target_returns_none(self):
        surface = _surface("sidebar--right")
        surface.focus.return_value = False
        assert ShortcutDispatcher(surface, is_mac=True).handle(KeyEvent(key="l", shift=True, meta=True)) is None
