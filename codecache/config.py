"""codecache build configuration.

Typed configuration for a generated-code build. All settings use Pydantic v2
models so they are validated at construction time and can be serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class ProjectSettings(BaseModel):
    """Location of the application sources being built."""

    name: str = Field(..., min_length=1, description="Project name, used as the import alias")
    src: Path = Field(default=Path("src"), description="Project source root")
    entry: Path = Field(
        default=Path("src/application.js"), description="Application entry module"
    )


class BuildConfiguration(BaseModel):
    """Global build configuration.

    Holds the project layout, the generated code output directory and the
    ``define`` mapping of build-time constants.  Instances are typically
    created once by ``BuildPipeline`` or loaded from a JSON file and then
    passed to ``CodeCacheProvider`` and every extension.
    """

    project: ProjectSettings
    generated_code: Path = Field(default=Path(".generated"))
    package_json: Path = Field(default=Path("package.json"))

    # Arbitrary JSON-like values; validated by the define emitter, not here.
    define: dict[str, Any] = Field(default_factory=dict)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def define_path(self) -> Path:
        """Path of the generated constants module."""
        return self.generated_code / "define.js"

    @property
    def app_path(self) -> Path:
        """Path of the generated application entry module."""
        return self.generated_code / "app.js"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "BuildConfiguration":
        """Load a configuration from JSON.

        Raises:
            FileNotFoundError: If *path* does not exist.
            pydantic.ValidationError: If the content is not a valid configuration.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "BuildConfiguration":
        """Build a ``BuildConfiguration`` from environment variables.

        Recognised variables:
            CODECACHE_PROJECT_NAME (required), CODECACHE_PROJECT_SRC,
            CODECACHE_PROJECT_ENTRY, CODECACHE_GENERATED_CODE,
            CODECACHE_PACKAGE_JSON, CODECACHE_DEFINE (a JSON object).
        """
        project_kwargs: dict[str, Any] = {
            "name": os.environ.get("CODECACHE_PROJECT_NAME", ""),
        }
        if os.environ.get("CODECACHE_PROJECT_SRC"):
            project_kwargs["src"] = Path(os.environ["CODECACHE_PROJECT_SRC"])
        if os.environ.get("CODECACHE_PROJECT_ENTRY"):
            project_kwargs["entry"] = Path(os.environ["CODECACHE_PROJECT_ENTRY"])

        kwargs: dict[str, Any] = {}
        if os.environ.get("CODECACHE_GENERATED_CODE"):
            kwargs["generated_code"] = Path(os.environ["CODECACHE_GENERATED_CODE"])
        if os.environ.get("CODECACHE_PACKAGE_JSON"):
            kwargs["package_json"] = Path(os.environ["CODECACHE_PACKAGE_JSON"])
        if os.environ.get("CODECACHE_DEFINE"):
            kwargs["define"] = json.loads(os.environ["CODECACHE_DEFINE"])

        return cls(project=ProjectSettings(**project_kwargs), **kwargs)
