"""Output directory lifecycle for generated code.

``OutputDirectory`` owns one root directory: it cleans it, writes files into
it and remembers every absolute path written since the last clean.  Entries
whose names start with ``.`` are never touched by ``clean`` so tool caches
and VCS metadata can live alongside the generated files.

Filesystem errors are not caught here; they propagate and abort the current
pass, leaving whatever was already written on disk.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from ..sources.events import EventEmitter

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


class OutputDirectory:
    """A single-writer output root and its written-file registry.

    Args:
        root: Absolute path of the output root.  It need not exist yet.
        emitter: Receives one ``changed`` event and one ``any`` wrapper event
            per write.
    """

    def __init__(self, root: Path, emitter: EventEmitter) -> None:
        self.root = Path(root)
        self._emitter = emitter
        # dict keeps first-write order and gives set semantics.
        self._written: dict[Path, None] = {}

    @property
    def files(self) -> list[Path]:
        """Absolute paths written since the last clean, in first-write order."""
        return list(self._written)

    def clean(self) -> None:
        """Remove every non-hidden top-level entry and reset the registry.

        A missing root is already clean.
        """
        if self.root.exists():
            for entry in sorted(self.root.iterdir()):
                if entry.name.startswith(HIDDEN_PREFIX):
                    continue
                if entry.is_file() or entry.is_symlink():
                    entry.unlink()
                else:
                    shutil.rmtree(entry)
            logger.debug("cleaned %s", self.root)

        self._written = {}

    def write(self, relative_path: str | Path, content: str) -> Path:
        """Write *content* to *relative_path* under the root.

        Parent directories are created as needed and existing files are
        overwritten.

        Returns:
            The absolute path written.
        """
        target = Path(os.path.normpath(self.root / relative_path))
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

        self._written.setdefault(target, None)
        self._emitter.emit_changed(target)
        return target

    def write_all(self, sources: dict[str, str]) -> list[Path]:
        """Write every ``{relative path: content}`` entry, in mapping order."""
        return [self.write(path, content) for path, content in sources.items()]
