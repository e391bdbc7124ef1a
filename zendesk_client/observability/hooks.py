"""Debug hook points for observability collaborators.

The executor emits `debug::request` before dispatch and then either
`debug::response` or `debug::error`. Nothing in the request path depends
on what subscribers do with them.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any


HookCallback = Callable[[Any], None]


class HookEvent(str, Enum):
    """Events emitted by the request executor."""

    REQUEST = "debug::request"
    RESPONSE = "debug::response"
    ERROR = "debug::error"


class HookRegistry:
    """Minimal event emitter for the debug hook points."""

    def __init__(self) -> None:
        self._callbacks: dict[HookEvent, list[HookCallback]] = {
            event: [] for event in HookEvent
        }

    def on(self, event: HookEvent | str, callback: HookCallback) -> None:
        """Subscribe `callback` to `event`.

        Args:
            event: Hook event or its wire name (e.g. "debug::request").
            callback: Called with the event payload.
        """
        self._callbacks[HookEvent(event)].append(callback)

    def off(self, event: HookEvent | str, callback: HookCallback) -> None:
        """Unsubscribe `callback` from `event` if it is subscribed."""
        callbacks = self._callbacks[HookEvent(event)]
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: HookEvent, payload: Any) -> None:
        """Call every subscriber of `event` with `payload`, in order."""
        for callback in list(self._callbacks[event]):
            callback(payload)

    def listener_count(self, event: HookEvent | str) -> int:
        """Number of subscribers for `event`."""
        return len(self._callbacks[HookEvent(event)])
