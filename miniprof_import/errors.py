"""
Error taxonomy for the miniprofiler importer.

Every failure raised by the pipeline derives from ImportFailure and is fatal
to the run: nothing is retried and no partial output is kept.
"""

from pathlib import Path


class ImportFailure(Exception):
    """Base class for failures that abort an import run."""


class MissingFieldError(ImportFailure):
    """A thread group does not expose a valid unsigned 64-bit thread_id."""

    def __init__(self, field: str, reason: str, group_index: int | None = None):
        self.field = field
        self.reason = reason
        self.group_index = group_index
        where = f"thread group {group_index}: " if group_index is not None else ""
        super().__init__(f"{where}missing or invalid field '{field}' ({reason})")


class MalformedRecordError(ImportFailure):
    """A thread group or timing entry has a missing or mistyped field."""

    def __init__(
        self,
        field: str,
        reason: str,
        group_index: int | None = None,
        timing_index: int | None = None,
    ):
        self.field = field
        self.reason = reason
        self.group_index = group_index
        self.timing_index = timing_index

        parts = []
        if group_index is not None:
            parts.append(f"thread group {group_index}")
        if timing_index is not None:
            parts.append(f"timing {timing_index}")
        where = ", ".join(parts)
        prefix = f"{where}: " if where else ""
        super().__init__(f"{prefix}malformed field '{field}' ({reason})")


class TimestampOverflowError(ImportFailure):
    """start + duration does not fit in an unsigned 64-bit timestamp."""

    def __init__(self, thread_id: int, start: int, duration: int):
        self.thread_id = thread_id
        self.start = start
        self.duration = duration
        super().__init__(
            f"thread {thread_id}: end timestamp {start} + {duration} "
            "overflows the 64-bit timestamp range"
        )


class TraceIOError(ImportFailure):
    """The input could not be read or the output sink could not be written."""

    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {path}")
