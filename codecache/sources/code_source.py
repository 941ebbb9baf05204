"""Aggregate of every input source a build reads from."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol


class ReadySource(Protocol):
    """Anything that finishes its own initialisation asynchronously."""

    async def ready(self) -> Any: ...


class CodeSource:
    """Aliased input sources plus the generated-code provider.

    Sources are keyed by import alias (usually the project or addon name).
    ``generated`` is attached by whoever builds the generated-code provider
    so that extensions handed this aggregate can reach it too.
    """

    def __init__(self) -> None:
        self._aliased: dict[str, ReadySource] = {}
        self.generated: Any = None

    def add(self, alias: str, source: ReadySource) -> None:
        """Register *source* under *alias*.

        Raises:
            ValueError: If *alias* is already registered.
        """
        if alias in self._aliased:
            raise ValueError(f"Source alias already registered: {alias}")
        self._aliased[alias] = source

    def get(self, alias: str) -> ReadySource | None:
        return self._aliased.get(alias)

    @property
    def aliased_sources(self) -> Iterator[tuple[str, ReadySource]]:
        """``(alias, source)`` pairs in registration order."""
        return iter(list(self._aliased.items()))

    def __len__(self) -> int:
        return len(self._aliased)
