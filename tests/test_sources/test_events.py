"""Tests for the synchronous event emitter (codecache.sources.events).

Tests cover:
- Listener registration order and arguments
- off() for known and unknown listeners
- emit_changed() dual publication
- Exceptions raised by listeners propagate
"""

from __future__ import annotations

import pytest

from codecache.sources.events import EVENT_ANY, EVENT_CHANGED, EventEmitter

pytestmark = pytest.mark.unit


class TestOnEmit:
    def test_listeners_called_in_order_with_args(self):
        emitter = EventEmitter()
        calls: list[tuple] = []
        emitter.on("x", lambda *a: calls.append(("first", a)))
        emitter.on("x", lambda *a: calls.append(("second", a)))

        emitter.emit("x", 1, "two")

        assert calls == [("first", (1, "two")), ("second", (1, "two"))]

    def test_other_events_not_delivered(self):
        emitter = EventEmitter()
        calls: list = []
        emitter.on("x", calls.append)
        emitter.emit("y", 1)
        assert calls == []

    def test_emit_without_listeners(self):
        EventEmitter().emit("nothing", 1)

    def test_listener_count(self):
        emitter = EventEmitter()
        emitter.on("x", print)
        emitter.on("x", repr)
        assert emitter.listener_count("x") == 2
        assert emitter.listener_count("y") == 0


class TestOff:
    def test_removes_listener(self):
        emitter = EventEmitter()
        calls: list = []
        listener = emitter.on("x", calls.append)
        emitter.off("x", listener)
        emitter.emit("x", 1)
        assert calls == []

    def test_unknown_listener_ignored(self):
        emitter = EventEmitter()
        emitter.off("x", print)
        assert emitter.listener_count("x") == 0

    def test_listener_may_unsubscribe_while_called(self):
        emitter = EventEmitter()
        calls: list = []

        def once(value):
            calls.append(value)
            emitter.off("x", once)

        emitter.on("x", once)
        emitter.emit("x", 1)
        emitter.emit("x", 2)
        assert calls == [1]


class TestEmitChanged:
    def test_emits_specific_then_wrapper(self):
        emitter = EventEmitter()
        calls: list[tuple] = []
        emitter.on(EVENT_CHANGED, lambda *a: calls.append((EVENT_CHANGED, a)))
        emitter.on(EVENT_ANY, lambda *a: calls.append((EVENT_ANY, a)))

        emitter.emit_changed("/out/app.js")

        assert calls == [
            (EVENT_CHANGED, ("/out/app.js",)),
            (EVENT_ANY, (EVENT_CHANGED, "/out/app.js")),
        ]


class TestListenerErrors:
    def test_exception_propagates_and_stops_emit(self):
        emitter = EventEmitter()
        calls: list = []

        def boom(_):
            raise RuntimeError("listener failed")

        emitter.on("x", boom)
        emitter.on("x", calls.append)

        with pytest.raises(RuntimeError, match="listener failed"):
            emitter.emit("x", 1)
        assert calls == []
