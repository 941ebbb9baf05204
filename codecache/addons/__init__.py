"""codecache addons: platforms and code-generating extensions.

Key classes:
    AbstractExtension - Named contributor of generated files
    StaticExtension   - Extension serving a fixed, updatable mapping
    Platform          - Named target runtime
    AddonRegistry     - Registered platforms and extensions
"""

from .extension import AbstractExtension, StaticExtension
from .platform import FALLBACK_PLATFORM, Platform, order_platform_names
from .registry import AddonRegistry

__all__ = [
    "AbstractExtension",
    "StaticExtension",
    "Platform",
    "FALLBACK_PLATFORM",
    "order_platform_names",
    "AddonRegistry",
]
