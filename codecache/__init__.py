"""codecache -- build-time generated code for multi-platform applications.

Subpackages:
    sources  - Input sources, readiness join, event emitter
    addons   - Platforms, extensions and their registry
    codegen  - Output directory, define emitter and the code cache provider
"""

__version__ = "0.1.0"
