"""Generated code provider.

``CodeCacheProvider`` materialises the generated part of an application's
source tree:

- ``base-application.js`` - platform bootstrap, platforms in detection order
- ``app.js`` - entry module importing the project's application class
- ``package-info.js`` - the project's package descriptor
- ``<extension>/<path>`` - every file contributed by each extension
- ``define.js`` - typed build-time constants

A full build cleans the output root and regenerates everything.  After that,
an extension emitting ``EVENT_GENERATED`` rewrites only its own files.  Every
write is published as a ``changed`` event followed by an ``any`` wrapper.
"""

from __future__ import annotations

import asyncio
import logging
import os
import posixpath
import re
from pathlib import Path
from typing import Any

from ..addons.extension import AbstractExtension
from ..addons.platform import order_platform_names
from ..addons.registry import AddonRegistry
from ..config import BuildConfiguration
from ..sources.code_source import CodeSource
from ..sources.events import EVENT_ANY, EVENT_CHANGED, EventEmitter
from ..sources.readiness import ReadinessJoin
from .defines import render_defines
from .output import OutputDirectory
from .paths import PathHelper
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

_SOURCE_EXTENSION = re.compile(r"\.js$")


class CodeCacheProvider(EventEmitter):
    """Owns one generated-code root for the lifetime of a build session.

    Args:
        code_source: Aggregate of input sources; generation waits for all of
            them through ``ready()``.
        addons: Platforms and extensions taking part in the build.
        path_helper: Resolves configured paths against the project root.
        renderer: Renders the base application templates.
        build_config: The build configuration.
        package_json: Parsed package descriptor, embedded as-is.
    """

    EVENT_CHANGED = EVENT_CHANGED
    EVENT_ANY = EVENT_ANY

    def __init__(
        self,
        code_source: CodeSource,
        addons: AddonRegistry,
        path_helper: PathHelper,
        renderer: TemplateRenderer,
        build_config: BuildConfiguration,
        package_json: dict[str, Any],
    ) -> None:
        super().__init__()
        self._path_helper = path_helper
        self._renderer = renderer
        self._build_config = build_config
        self._package_json = package_json
        self._addons = addons

        self._root = path_helper.resolve_absolute_path(build_config.generated_code)
        self._output = OutputDirectory(self._root, self)

        self._setup_extensions(code_source)

        self._readiness = ReadinessJoin(
            (alias, source.ready) for alias, source in code_source.aliased_sources
        )

    # -- Public API --------------------------------------------------------

    @property
    def root(self) -> Path:
        return self._root

    def ready(self) -> asyncio.Future[None]:
        """Awaitable resolving once every input source is ready.

        Raises ``ReadinessError`` when awaited if any source fails.
        """
        return self._readiness.wait()

    def get_files(self) -> list[Path]:
        """Absolute paths written since the last clean."""
        return self._output.files

    def clean(self) -> None:
        """Remove generated files, keeping hidden entries.  Safe to repeat."""
        self._output.clean()

    def build_code(self) -> None:
        """Clean and regenerate everything."""
        self.clean()
        self.generate_base_app()
        self.generate_extensions_code()
        self.generate_defines()
        logger.debug("built %d file(s) in %s", len(self._output.files), self._root)

    def generate_base_app(self) -> None:
        """Write the bootstrap, entry and package-info modules."""
        platform_names = order_platform_names(
            [platform.get_name() for platform in self._addons.get_platforms()]
        )

        self._output.write(
            "base-application.js",
            self._renderer.render("base-application.js.j2", {"platforms": platform_names}),
        )

        self._output.write(
            "app.js",
            self._renderer.render("app.js.j2", {"path": self._entry_import_path()}),
        )

        # TODO: whitelist the package.json fields that are safe to ship to clients.
        self._output.write(
            "package-info.js",
            self._renderer.render("package-info.js.j2", {"config": self._package_json}),
        )

    def generate_extensions_code(self) -> None:
        """Write every extension's files under a directory named after it."""
        for extension in self._addons.get_extensions():
            sources = extension.generate_code(self._build_config)
            self._output.write_all(_namespace_sources(extension, sources))

    def generate_defines(self) -> None:
        """Write the typed constants module."""
        self._output.write("define.js", render_defines(self._build_config.define))

    # -- Internals ---------------------------------------------------------

    def _setup_extensions(self, code_source: CodeSource) -> None:
        for extension in self._addons.get_extensions():
            extension.on(
                AbstractExtension.EVENT_GENERATED,
                self._make_regenerated_handler(extension),
            )
            extension.set_code_source(code_source)

    def _make_regenerated_handler(self, extension: AbstractExtension):
        def on_generated(sources: dict[str, str]) -> None:
            logger.debug("extension %s regenerated %d file(s)", extension.get_name(), len(sources))
            self._output.write_all(_namespace_sources(extension, sources))

        return on_generated

    def _entry_import_path(self) -> str:
        """``<project name>/<entry relative to src>`` without the ``.js`` suffix."""
        project = self._build_config.project
        relative = os.path.relpath(
            self._path_helper.resolve_absolute_path(project.entry),
            self._path_helper.resolve_absolute_path(project.src),
        )
        main_path = posixpath.normpath(Path(project.name, relative).as_posix())
        return _SOURCE_EXTENSION.sub("", main_path)


def _namespace_sources(extension: AbstractExtension, sources: dict[str, str]) -> dict[str, str]:
    """Prefix every relative path with the extension's name."""
    name = extension.get_name()
    return {
        Path(name, str(path).lstrip("/")).as_posix(): content for path, content in sources.items()
    }
