"""
Event synthesis.

Expands each timing record into the begin/end pair used by the trace
writer's dual-event model. No ordering is imposed here.
"""

from typing import Iterable

from miniprof_import.errors import TimestampOverflowError
from miniprof_import.schema import TimelineEvent, TimingRecord, UINT64_MAX


def synthesize(record: TimingRecord) -> tuple[TimelineEvent, TimelineEvent]:
    """
    Build the begin and end events for one timing record.

    Raises:
        TimestampOverflowError: If start + duration exceeds the 64-bit range
    """
    end_timestamp = record.start + record.duration
    if end_timestamp > UINT64_MAX:
        raise TimestampOverflowError(record.thread_id, record.start, record.duration)

    name = record.location.key

    begin = TimelineEvent(
        thread_id=record.thread_id,
        timestamp=record.start,
        label=name,
        location_key=name,
        is_end=False,
        file=record.location.file,
        line=record.location.line,
    )
    end = TimelineEvent(
        thread_id=record.thread_id,
        timestamp=end_timestamp,
        is_end=True,
    )
    return begin, end


def synthesize_all(records: Iterable[TimingRecord]) -> list[TimelineEvent]:
    """Synthesize every record, begin then end, in record order."""
    events: list[TimelineEvent] = []
    for record in records:
        events.extend(synthesize(record))
    return events
