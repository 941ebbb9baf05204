"""Base class for code-generating extensions.

An extension contributes generated source files.  It is asked for its full
file mapping on every build via ``generate_code`` and may push a fresh
mapping at any later time by emitting ``EVENT_GENERATED``; the provider then
rewrites only that extension's files.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..sources.events import EventEmitter

if TYPE_CHECKING:
    from ..config import BuildConfiguration
    from ..sources.code_source import CodeSource


class AbstractExtension(EventEmitter, ABC):
    """A named contributor of generated files.

    Paths in the mapping are relative; the provider places them under a
    directory named after the extension.
    """

    EVENT_GENERATED = "generated"

    def __init__(self, name: str) -> None:
        super().__init__()
        if not name:
            raise ValueError("Extension name must not be empty")
        self._name = name
        self._code_source: CodeSource | None = None

    def get_name(self) -> str:
        return self._name

    @property
    def code_source(self) -> CodeSource | None:
        return self._code_source

    def set_code_source(self, code_source: CodeSource) -> None:
        """Receive the input-source aggregate this extension may observe."""
        self._code_source = code_source

    @abstractmethod
    def generate_code(self, build_config: BuildConfiguration) -> dict[str, str]:
        """Return ``{relative path: file content}`` for the current build."""

    def publish(self, sources: dict[str, str]) -> None:
        """Push a regenerated mapping to whoever listens."""
        self.emit(self.EVENT_GENERATED, dict(sources))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"


class StaticExtension(AbstractExtension):
    """Extension serving a fixed mapping; ``update`` republishes it."""

    def __init__(self, name: str, sources: dict[str, str] | None = None) -> None:
        super().__init__(name)
        self._sources: dict[str, str] = dict(sources or {})

    def generate_code(self, build_config: BuildConfiguration) -> dict[str, str]:
        return dict(self._sources)

    def update(self, sources: dict[str, str]) -> None:
        self._sources.update(sources)
        self.publish(sources)
