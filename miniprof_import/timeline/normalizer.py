"""
Timeline sorting and normalization.

Orders events from all threads into one global sequence and rebases it so
the earliest event sits at time zero.
"""

from operator import attrgetter
from typing import Iterable

from miniprof_import.schema import Timeline, TimelineEvent


def sort_timeline(events: Iterable[TimelineEvent]) -> Timeline:
    """
    Stably sort events by timestamp.

    Events sharing a timestamp keep their emission order, so a zero-length
    record's begin event stays ahead of its own end event.
    """
    return tuple(sorted(events, key=attrgetter("timestamp")))


def normalize_timeline(timeline: Timeline) -> tuple[Timeline, int]:
    """
    Rebase a sorted timeline to a zero origin.

    Args:
        timeline: Events sorted by timestamp

    Returns:
        Tuple of (rebased timeline, origin that was subtracted)
    """
    if not timeline:
        return (), 0

    mts = timeline[0].timestamp
    if mts == 0:
        return timeline, 0

    rebased = tuple(
        event.model_copy(update={"timestamp": event.timestamp - mts})
        for event in timeline
    )
    return rebased, mts


def sort_and_normalize(events: Iterable[TimelineEvent]) -> tuple[Timeline, int]:
    """Sort events globally and rebase them; returns (timeline, mts)."""
    return normalize_timeline(sort_timeline(events))
