"""Target platform descriptors."""

from __future__ import annotations

from dataclasses import dataclass

# Cannot be detected at runtime, so it is always tried last.
FALLBACK_PLATFORM = "pc"


@dataclass(frozen=True)
class Platform:
    """A named target runtime environment."""

    name: str

    def get_name(self) -> str:
        return self.name


def order_platform_names(names: list[str]) -> list[str]:
    """Return *names* with the fallback platform moved to the end.

    The relative order of every other platform is preserved.

    Examples::

        order_platform_names(["a", "b", "pc", "c"]) -> ["a", "b", "c", "pc"]
    """
    ordered = [name for name in names if name != FALLBACK_PLATFORM]
    if len(ordered) != len(names):
        ordered.append(FALLBACK_PLATFORM)
    return ordered
