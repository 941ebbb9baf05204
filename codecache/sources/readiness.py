"""Readiness aggregation over many input sources.

Every file-backed source finishes its own asynchronous initialisation before
it may be queried.  ``ReadinessJoin`` turns N such signals into one awaitable
with a fail-fast policy: the first source that fails cancels the waits still
pending and the join raises ``ReadinessError`` naming that source.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class ReadinessError(Exception):
    """Raised when an input source fails to become ready."""

    def __init__(self, alias: str, message: str = "") -> None:
        self.alias = alias
        super().__init__(f"Source '{alias}' failed to become ready{': ' + message if message else ''}")


class ReadinessJoin:
    """Fail-fast "all must complete" join over aliased readiness signals.

    Args:
        signals: ``(alias, ready)`` pairs where ``ready`` is a zero-argument
            callable returning an awaitable.  Signals are not started until
            the join is first awaited.

    The outcome is memoised: every ``wait()`` after the first shares the same
    task, so sources are initialised at most once per join.
    """

    def __init__(self, signals: Iterable[tuple[str, Callable[[], Awaitable[Any]]]]) -> None:
        self._signals = list(signals)
        self._task: asyncio.Task[None] | None = None

    @property
    def aliases(self) -> list[str]:
        """Aliases of every joined source, in registration order."""
        return [alias for alias, _ in self._signals]

    def wait(self) -> asyncio.Future[None]:
        """Return the shared awaitable for the joined readiness.

        Must be called from within a running event loop.
        """
        if self._task is None:
            self._task = asyncio.ensure_future(self._join())
        return self._task

    def done(self) -> bool:
        """``True`` once the join has resolved, successfully or not."""
        return self._task is not None and self._task.done()

    async def _join(self) -> None:
        if not self._signals:
            return

        pending_by_alias: dict[asyncio.Future[Any], str] = {
            asyncio.ensure_future(_start(ready)): alias for alias, ready in self._signals
        }
        pending = set(pending_by_alias)

        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
            for future in done:
                exc = future.exception()
                if exc is None:
                    logger.debug("source %s ready", pending_by_alias[future])
                    continue

                for other in pending:
                    other.cancel()
                # Let cancelled sources unwind before reporting.
                await asyncio.gather(*pending, return_exceptions=True)
                alias = pending_by_alias[future]
                raise ReadinessError(alias, str(exc)) from exc


async def _start(ready: Callable[[], Awaitable[Any]]) -> Any:
    # A signal that raises before returning an awaitable fails like any other.
    return await ready()
