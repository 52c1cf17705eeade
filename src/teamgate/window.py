"""Process-wide window activity flag and the window event source."""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

FOCUS = "focus"
BLUR = "blur"
KEYDOWN = "keydown"

WindowListener = Callable[..., Any]


class WindowActivity:
    """Thread-safe "is the window active" flag readable by any subsystem."""

    def __init__(self) -> None:
        self._active = False
        self._lock = threading.Lock()

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._active

    def set_active(self, active: bool) -> None:
        with self._lock:
            self._active = active


window_activity = WindowActivity()


class WindowEvents:
    """Listener registry for ``focus``, ``blur`` and ``keydown`` events.

    Handlers may be plain callables or coroutine functions; ``dispatch``
    awaits the latter in registration order.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[WindowListener]] = {}

    def add_listener(self, event: str, handler: WindowListener) -> None:
        self._listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: WindowListener) -> None:
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    async def dispatch(self, event: str, *args: Any) -> None:
        for handler in list(self._listeners.get(event, [])):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result
