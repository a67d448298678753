from .timing import (
    SourceLocation,
    ThreadGroup,
    TimingRecord,
    UINT32_MAX,
    UINT64_MAX,
)
from .timeline import (
    TimelineEvent,
    Timeline,
    ThreadNameMap,
)

__all__ = [
    "SourceLocation",
    "ThreadGroup",
    "TimingRecord",
    "UINT32_MAX",
    "UINT64_MAX",
    "TimelineEvent",
    "Timeline",
    "ThreadNameMap",
]
