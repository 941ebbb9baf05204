"""In-memory addon registry.

Discovering addons (entry points, node_modules, plugin folders) is left to
the caller; the registry only keeps what was registered, in order.
"""

from __future__ import annotations

from .extension import AbstractExtension
from .platform import Platform


class AddonRegistry:
    """Platforms and extensions available to a build."""

    def __init__(
        self,
        platforms: list[Platform] | None = None,
        extensions: list[AbstractExtension] | None = None,
    ) -> None:
        self._platforms: list[Platform] = []
        self._extensions: list[AbstractExtension] = []
        for platform in platforms or []:
            self.add_platform(platform)
        for extension in extensions or []:
            self.add_extension(extension)

    def add_platform(self, platform: Platform) -> None:
        """Register a platform.

        Raises:
            ValueError: If a platform with the same name is registered.
        """
        if any(p.get_name() == platform.get_name() for p in self._platforms):
            raise ValueError(f"Platform already registered: {platform.get_name()}")
        self._platforms.append(platform)

    def add_extension(self, extension: AbstractExtension) -> None:
        """Register an extension.

        Raises:
            ValueError: If an extension with the same name is registered.
        """
        if any(e.get_name() == extension.get_name() for e in self._extensions):
            raise ValueError(f"Extension already registered: {extension.get_name()}")
        self._extensions.append(extension)

    def get_platforms(self) -> list[Platform]:
        return list(self._platforms)

    def get_extensions(self) -> list[AbstractExtension]:
        return list(self._extensions)
