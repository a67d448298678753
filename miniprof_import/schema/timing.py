"""
Input-side models for miniprofiler timing exports.

The export is a JSON array of thread groups, each carrying a list of timing
entries. These models validate one group or one entry at a time; integers
are strict so that booleans, floats and numeric strings are rejected.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1

UInt32 = Annotated[StrictInt, Field(ge=0, le=UINT32_MAX)]
UInt64 = Annotated[StrictInt, Field(ge=0, le=UINT64_MAX)]


class SourceLocation(BaseModel):
    """A position in the profiled program's source."""
    model_config = ConfigDict(frozen=True)

    file: StrictStr
    line: UInt32
    column: UInt32

    @property
    def key(self) -> str:
        """Render the location as ``file:line:column``."""
        return f"{self.file}:{self.line}:{self.column}"


class ThreadGroup(BaseModel):
    """
    Header of one thread group in the export.

    Timing entries are kept raw here and validated one by one into
    TimingRecord so that errors can name the offending entry.
    """
    model_config = ConfigDict(frozen=True)

    thread_id: UInt64
    thread_name: StrictStr | None = None
    timings: list[Any] | None = None


class TimingRecord(BaseModel):
    """One measured interval on one thread."""
    model_config = ConfigDict(frozen=True)

    thread_id: UInt64
    location: SourceLocation
    start: UInt64
    duration: UInt64
