"""In-process event emitter shared by source providers and extensions.

Listeners are called synchronously, in registration order, on the thread
that emits.  Providers publish every change twice: once as the specific
event (``changed``) and once wrapped in the generic ``any`` event carrying
the specific event's name, so observers can subscribe to either style.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

EVENT_CHANGED = "changed"
EVENT_ANY = "any"


class EventEmitter:
    """Minimal synchronous pub/sub.

    A listener that raises aborts the emit and the exception propagates to
    the emitter's caller; remaining listeners for that emit are not called.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> Listener:
        """Register *listener* for *event*.  Returns the listener for ``off``."""
        self._listeners[event].append(listener)
        return listener

    def off(self, event: str, listener: Listener) -> None:
        """Remove a listener.  Unknown listeners are ignored."""
        bucket = self._listeners.get(event, [])
        if listener in bucket:
            bucket.remove(listener)

    def listener_count(self, event: str) -> int:
        """Number of listeners registered for *event*."""
        return len(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> None:
        """Call every listener registered for *event* with ``*args``."""
        # Snapshot so listeners may unsubscribe while being called.
        for listener in list(self._listeners.get(event, [])):
            listener(*args)
        logger.debug("event %s %s", event, args[0] if args else "-")

    def emit_changed(self, path: Any) -> None:
        """Publish one ``changed`` event and its ``any`` wrapper for *path*."""
        self.emit(EVENT_CHANGED, path)
        self.emit(EVENT_ANY, EVENT_CHANGED, path)
