"""Shared pytest fixtures for the codecache test suite.

Provides reusable fixtures for:
- A temporary project directory with sources and a package descriptor
- Build configurations pointing at that project
- Template renderers (real and recording)
- Sources that become ready, fail, or hang on demand
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from codecache.addons import AddonRegistry, Platform, StaticExtension
from codecache.codegen import CodeCacheProvider, PathHelper, TemplateRenderer
from codecache.config import BuildConfiguration, ProjectSettings
from codecache.sources import CodeSource


# ---------------------------------------------------------------------------
# Project on disk
# ---------------------------------------------------------------------------

SAMPLE_PACKAGE_JSON: dict[str, Any] = {
    "name": "demo-app",
    "version": "1.2.3",
    "private": True,
    "dependencies": {"zombiebox": "^2.0.0"},
}


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Temporary project with ``src/application.js`` and ``package.json``."""
    root = tmp_path / "demo-app"
    (root / "src").mkdir(parents=True)
    (root / "src" / "application.js").write_text(
        "export default class Application {}\n", encoding="utf-8"
    )
    (root / "src" / "widgets").mkdir()
    (root / "src" / "widgets" / "button.js").write_text("export {};\n", encoding="utf-8")
    (root / "package.json").write_text(json.dumps(SAMPLE_PACKAGE_JSON), encoding="utf-8")
    yield root


@pytest.fixture
def build_config() -> BuildConfiguration:
    """Configuration for the sample project with a few defines."""
    return BuildConfiguration(
        project=ProjectSettings(name="demo", src=Path("src"), entry=Path("src/application.js")),
        generated_code=Path(".generated"),
        define={"FOO": 1, "BAR": "x", "BAZ": [1, "a", None]},
    )


@pytest.fixture
def path_helper(project_dir: Path) -> PathHelper:
    return PathHelper(project_dir)


@pytest.fixture
def renderer() -> TemplateRenderer:
    """The real renderer with the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def recording_renderer() -> MagicMock:
    """A mock TemplateRenderer returning ``<template>:<sorted context keys>``."""
    mock = MagicMock(spec=TemplateRenderer)

    def fake_render(template_path: str, context: dict[str, Any]) -> str:
        return f"{template_path}:{','.join(sorted(context))}\n"

    mock.render.side_effect = fake_render
    return mock


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


class FakeSource:
    """Input source whose readiness is controlled by the test."""

    def __init__(self, delay: float = 0.0, error: Exception | None = None) -> None:
        self.delay = delay
        self.error = error
        self.calls = 0
        self.cancelled = False

    async def ready(self) -> None:
        self.calls += 1
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_source_factory():
    """Build ``FakeSource`` instances: ``fake_source_factory(delay=0.1)``."""
    return FakeSource


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


@pytest.fixture
def addons() -> AddonRegistry:
    """Platforms ``[a, b, pc, c]`` and one extension ``foo`` producing ``bar.js``."""
    return AddonRegistry(
        platforms=[Platform("a"), Platform("b"), Platform("pc"), Platform("c")],
        extensions=[StaticExtension("foo", {"bar.js": "content"})],
    )


@pytest.fixture
def provider(
    addons: AddonRegistry,
    path_helper: PathHelper,
    renderer: TemplateRenderer,
    build_config: BuildConfiguration,
) -> CodeCacheProvider:
    """A provider over the sample project with no input sources."""
    return CodeCacheProvider(
        CodeSource(), addons, path_helper, renderer, build_config, dict(SAMPLE_PACKAGE_JSON)
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo ``setup_logging`` calls made by a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
