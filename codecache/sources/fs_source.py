"""Directory-backed input source.

An ``FsSource`` indexes every regular file under a root directory.  Indexing
runs in a worker thread so that several sources can initialise concurrently
while the event loop stays responsive; ``ready()`` resolves once the index
exists.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .events import EVENT_ANY, EVENT_CHANGED, EventEmitter

logger = logging.getLogger(__name__)


class FsSource(EventEmitter):
    """Files under a single root directory.

    Emits ``EVENT_CHANGED`` with the absolute path when ``notify_changed`` is
    called by a watcher, and the generic ``EVENT_ANY`` wrapper alongside it.
    """

    EVENT_CHANGED = EVENT_CHANGED
    EVENT_ANY = EVENT_ANY

    def __init__(self, root: str | Path) -> None:
        super().__init__()
        self._root = Path(root).resolve()
        self._files: list[Path] | None = None
        self._index_task: asyncio.Task[list[Path]] | None = None

    def get_root(self) -> Path:
        return self._root

    def get_files(self) -> list[Path]:
        """Indexed files, sorted.  Empty until ``ready()`` has resolved."""
        return list(self._files or [])

    async def ready(self) -> None:
        """Index the root directory once.

        Raises:
            FileNotFoundError: If the root does not exist or is not a directory.
        """
        if self._files is not None:
            return
        if self._index_task is None:
            self._index_task = asyncio.ensure_future(asyncio.to_thread(_scan, self._root))
        self._files = await self._index_task
        logger.debug("indexed %d file(s) under %s", len(self._files), self._root)

    def notify_changed(self, path: str | Path) -> None:
        """Record a change reported by a file watcher and fan it out."""
        absolute = Path(path).resolve()
        if self._files is not None and absolute not in self._files and absolute.is_file():
            self._files.append(absolute)
            self._files.sort()
        self.emit_changed(absolute)


def _scan(root: Path) -> list[Path]:
    """Synchronous helper: list every regular file below *root*."""
    if not root.is_dir():
        raise FileNotFoundError(f"Source directory not found: {root}")
    return sorted(p for p in root.rglob("*") if p.is_file())
