"""
In-memory trace model.

TraceWorker takes ownership of a normalized timeline and its thread names,
reassembles begin/end events into zones per thread and serializes the
result through a FileWrite sink.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from miniprof_import.schema import Timeline, ThreadNameMap
from .file_write import FileWrite


@dataclass
class Zone:
    """A closed interval reassembled from a begin/end pair."""
    start: int
    end: int
    name: str
    file: str | None
    line: int | None
    depth: int


@dataclass
class ThreadData:
    """Zones recorded on one thread, in begin order."""
    id: int
    zones: list[Zone] = field(default_factory=list)


class TraceWorker:
    """
    Trace model built from an imported timeline.

    An end event closes the most recently opened zone of its thread. The
    timeline and the thread names are held by reference, not copied.
    """

    def __init__(
        self,
        capture_name: str,
        program_name: str,
        timeline: Timeline,
        messages: list[Any],
        plots: list[Any],
        thread_names: ThreadNameMap,
    ):
        self.capture_name = capture_name
        self.program_name = program_name
        self.timeline = timeline
        self.messages = messages
        self.plots = plots
        self.thread_names = thread_names

        self.threads: dict[int, ThreadData] = {}
        self.last_time = 0
        self._build_zones()

    def _build_zones(self) -> None:
        open_zones: dict[int, list[Zone]] = {}

        for event in self.timeline:
            thread = self.threads.get(event.thread_id)
            if thread is None:
                thread = self.threads[event.thread_id] = ThreadData(id=event.thread_id)
            stack = open_zones.setdefault(event.thread_id, [])

            if event.is_end:
                if not stack:
                    raise ValueError(
                        f"End event at {event.timestamp} on thread {event.thread_id} "
                        "has no open zone"
                    )
                stack.pop().end = event.timestamp
            else:
                zone = Zone(
                    start=event.timestamp,
                    end=event.timestamp,
                    name=event.label,
                    file=event.file,
                    line=event.line,
                    depth=len(stack),
                )
                thread.zones.append(zone)
                stack.append(zone)

            self.last_time = max(self.last_time, event.timestamp)

        unclosed = [tid for tid, stack in open_zones.items() if stack]
        if unclosed:
            raise ValueError(f"Unclosed zones on threads {unclosed}")

    @property
    def zone_count(self) -> int:
        return sum(len(thread.zones) for thread in self.threads.values())

    def get_thread_name(self, thread_id: int) -> str:
        """Get the display name of a thread, falling back to its id."""
        return self.thread_names.get(thread_id, str(thread_id))

    def to_dict(self) -> dict[str, Any]:
        """Convert the trace model to its serialized payload."""
        return {
            "capture_name": self.capture_name,
            "capture_program": self.program_name,
            "last_time": self.last_time,
            "thread_names": {str(tid): name for tid, name in self.thread_names.items()},
            "threads": [
                {
                    "id": thread.id,
                    "name": self.thread_names.get(thread.id),
                    "zones": [asdict(zone) for zone in thread.zones],
                }
                for thread in self.threads.values()
            ],
            "messages": self.messages,
            "plots": self.plots,
        }

    def write(self, file_write: FileWrite) -> None:
        """Serialize the trace into an open sink."""
        payload = json.dumps(self.to_dict(), separators=(",", ":"))
        file_write.write(payload.encode("utf-8"))
