"""codecache input sources.

Key classes:
    EventEmitter    - Synchronous pub/sub used by sources and extensions
    FsSource        - Directory-backed source with asynchronous indexing
    CodeSource      - Aliased aggregate of every input source
    ReadinessJoin   - Fail-fast join over every source's ``ready()``
"""

from .code_source import CodeSource, ReadySource
from .events import EVENT_ANY, EVENT_CHANGED, EventEmitter
from .fs_source import FsSource
from .readiness import ReadinessError, ReadinessJoin

__all__ = [
    "CodeSource",
    "ReadySource",
    "EventEmitter",
    "EVENT_ANY",
    "EVENT_CHANGED",
    "FsSource",
    "ReadinessError",
    "ReadinessJoin",
]
