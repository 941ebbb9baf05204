"""Tests for the directory-backed source (codecache.sources.fs_source)."""

from __future__ import annotations

from pathlib import Path

import pytest

from codecache.sources.events import EVENT_ANY, EVENT_CHANGED
from codecache.sources.fs_source import FsSource

pytestmark = pytest.mark.unit


class TestFsSource:
    async def test_ready_indexes_files(self, project_dir: Path):
        source = FsSource(project_dir / "src")
        assert source.get_files() == []

        await source.ready()

        files = source.get_files()
        assert (project_dir / "src" / "application.js").resolve() in files
        assert (project_dir / "src" / "widgets" / "button.js").resolve() in files
        assert files == sorted(files)

    async def test_ready_twice_keeps_index(self, project_dir: Path):
        source = FsSource(project_dir / "src")
        await source.ready()
        first = source.get_files()
        await source.ready()
        assert source.get_files() == first

    async def test_missing_root_raises(self, tmp_path: Path):
        source = FsSource(tmp_path / "missing")
        with pytest.raises(FileNotFoundError):
            await source.ready()

    def test_get_root_is_absolute(self, project_dir: Path):
        assert FsSource(project_dir / "src").get_root().is_absolute()

    async def test_notify_changed_adds_file_and_emits(self, project_dir: Path):
        source = FsSource(project_dir / "src")
        await source.ready()
        new_file = project_dir / "src" / "new.js"
        new_file.write_text("export {};\n", encoding="utf-8")

        changed: list = []
        wrapped: list = []
        source.on(EVENT_CHANGED, changed.append)
        source.on(EVENT_ANY, lambda *args: wrapped.append(args))

        source.notify_changed(new_file)

        assert new_file.resolve() in source.get_files()
        assert changed == [new_file.resolve()]
        assert wrapped == [(EVENT_CHANGED, new_file.resolve())]
