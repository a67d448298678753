"""
Timeline models handed to the trace writer.

A timing interval is represented as a begin event and an end event. Only
begin events carry a label and a source position.
"""

from pydantic import BaseModel, ConfigDict


class TimelineEvent(BaseModel):
    """A single point event on a thread's timeline."""
    model_config = ConfigDict(frozen=True)

    thread_id: int
    timestamp: int
    label: str = ""
    location_key: str = ""
    is_end: bool = False

    file: str | None = None
    line: int | None = None

    def is_begin(self) -> bool:
        """Check if this event opens a zone."""
        return not self.is_end


Timeline = tuple[TimelineEvent, ...]
ThreadNameMap = dict[int, str]
