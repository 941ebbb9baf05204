"""Project-relative path resolution."""

from __future__ import annotations

import os
from pathlib import Path


class PathHelper:
    """Resolves configured paths against a project root directory."""

    def __init__(self, project_root: str | Path) -> None:
        self.project_root = Path(project_root).resolve()

    def resolve_absolute_path(self, path: str | Path) -> Path:
        """Return *path* as an absolute, normalised path.

        Relative paths are taken relative to the project root; absolute
        paths are only normalised.
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.project_root / candidate
        return Path(os.path.normpath(candidate))
