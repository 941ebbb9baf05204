"""codecache build pipeline.

Wires a ``CodeCacheProvider`` from a configuration file and runs one build:

1. Load the build configuration and the project's ``package.json``.
2. Register the project sources and wait until they are ready.
3. Clean the output root and regenerate every file.

Usage::

    python -m codecache.pipeline codecache.json
    python -m codecache.pipeline codecache.json --platform tizen --platform pc
    python -m codecache.pipeline codecache.json --clean-only
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import Any

from rich.panel import Panel

from codecache.addons import AddonRegistry, Platform
from codecache.codegen import CodeCacheProvider, PathHelper, TemplateRenderer
from codecache.config import BuildConfiguration
from codecache.sources import CodeSource, FsSource
from codecache.utils import (
    console,
    format_duration,
    load_json,
    print_error,
    print_success,
    print_summary_table,
    setup_logging,
)


class PipelineError(Exception):
    """Raised when the build cannot be set up."""


class BuildPipeline:
    """One build of one project.

    Attributes:
        config: The build configuration.
        project_root: Directory every configured path is relative to.
        addons: Platforms and extensions taking part in the build.
    """

    def __init__(
        self,
        config: BuildConfiguration,
        project_root: str | Path,
        addons: AddonRegistry | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.project_root = Path(project_root).resolve()
        self.addons = addons if addons is not None else AddonRegistry()
        self.path_helper = PathHelper(self.project_root)
        self.renderer = renderer if renderer is not None else TemplateRenderer()

        self.code_source = CodeSource()
        self.code_source.add(
            config.project.name,
            FsSource(self.path_helper.resolve_absolute_path(config.project.src)),
        )
        self.provider = CodeCacheProvider(
            self.code_source,
            self.addons,
            self.path_helper,
            self.renderer,
            config,
            self._load_package_json(),
        )
        self.code_source.generated = self.provider

    def _load_package_json(self) -> dict[str, Any]:
        path = self.path_helper.resolve_absolute_path(self.config.package_json)
        if not path.exists():
            raise PipelineError(f"Package descriptor not found: {path}")
        return load_json(path)

    async def run(self) -> dict[str, Any]:
        """Wait for the sources, then clean and rebuild the generated code.

        Returns:
            Summary with ``output_dir``, ``files`` and ``duration``.
        """
        started = time.monotonic()

        console.print(
            Panel(
                f"[bold bright_cyan]codecache[/bold bright_cyan]\n"
                f"Project : {self.config.project.name}\n"
                f"Output  : {self.provider.root}\n"
                f"Addons  : {len(self.addons.get_platforms())} platform(s), "
                f"{len(self.addons.get_extensions())} extension(s)",
                title="[bold]Build[/bold]",
                border_style="bright_cyan",
            )
        )

        await self.provider.ready()
        self.provider.build_code()

        files = self.provider.get_files()
        return {
            "output_dir": str(self.provider.root),
            "files": [str(path.relative_to(self.provider.root)) for path in files],
            "duration": format_duration(time.monotonic() - started),
        }

    def clean(self) -> None:
        self.provider.clean()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m codecache.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="codecache -- generate the application's code cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m codecache.pipeline codecache.json\n"
            "  python -m codecache.pipeline codecache.json --platform tizen --platform pc\n"
        ),
    )
    parser.add_argument("config", help="Path to the build configuration JSON file")
    parser.add_argument(
        "--project-root",
        default=None,
        help="Directory configured paths are relative to (default: the config file's directory)",
    )
    parser.add_argument(
        "--platform",
        action="append",
        default=[],
        help="Register a target platform by name (repeatable)",
    )
    parser.add_argument(
        "--clean-only",
        action="store_true",
        help="Only remove previously generated files",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config_path = Path(args.config)
    if not config_path.exists():
        print_error(f"Error: Configuration file not found: {config_path}")
        sys.exit(1)

    try:
        config = BuildConfiguration.load(config_path)
        addons = AddonRegistry(platforms=[Platform(name) for name in args.platform])
        pipeline = BuildPipeline(
            config,
            project_root=args.project_root or config_path.resolve().parent,
            addons=addons,
        )
        if args.clean_only:
            pipeline.clean()
            print_success(f"Cleaned {pipeline.provider.root}")
            return
        result = asyncio.run(pipeline.run())
    except Exception as exc:
        print_error(f"Build failed: {exc}")
        sys.exit(1)

    print_summary_table(
        {
            "Output": result["output_dir"],
            "Files": str(len(result["files"])),
            "Duration": result["duration"],
        },
        title="Generated code",
    )
    print_success("Build completed successfully!")


if __name__ == "__main__":
    main()
