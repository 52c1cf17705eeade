"""ShortcutDispatcher -- Shift+Cmd/Ctrl+L jumps to the active message box."""

from __future__ import annotations

import logging
import sys

from pydantic import BaseModel

from teamgate.types import ViewSurface

logger = logging.getLogger(__name__)

SIDEBAR_RIGHT = "sidebar-right"
SIDEBAR_EXPANDED_LEFT = "sidebar--right sidebar--right--expanded move--left"
REPLY_TEXTBOX = "reply_textbox"
POST_TEXTBOX = "post_textbox"


class KeyEvent(BaseModel):
    key: str
    shift: bool = False
    ctrl: bool = False
    meta: bool = False
    alt: bool = False


def cmd_or_ctrl_pressed(event: KeyEvent, *, is_mac: bool) -> bool:
    """Cmd on macOS, Ctrl elsewhere."""
    return event.meta if is_mac else event.ctrl


class ShortcutDispatcher:
    def __init__(self, surface: ViewSurface, *, is_mac: bool | None = None) -> None:
        self._surface = surface
        self._is_mac = sys.platform == "darwin" if is_mac is None else is_mac

    def handle(self, event: KeyEvent) -> str | None:
        """Focus the reply or post box. Returns the focused element id, if any."""
        if not (event.shift and cmd_or_ctrl_pressed(event, is_mac=self._is_mac) and event.key.lower() == "l"):
            return None
        classes = self._surface.element_classes(SIDEBAR_RIGHT)
        if classes is None:
            return None
        target = REPLY_TEXTBOX if SIDEBAR_EXPANDED_LEFT in classes else POST_TEXTBOX
        if not self._surface.focus(target):
            logger.debug("Shortcut target '%s' not present", target)
            return None
        return target
