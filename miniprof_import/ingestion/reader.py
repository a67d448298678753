"""
Record reader.

Validates a decoded miniprofiler export into typed timing records and a
thread-name lookup. The first invalid field aborts the whole read; there is
no best-effort mode.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from miniprof_import.errors import MalformedRecordError, MissingFieldError
from miniprof_import.schema import ThreadGroup, ThreadNameMap, TimingRecord
from .loader import DOCUMENT_FIELD


@dataclass(frozen=True)
class ReadResult:
    """Validated contents of an export."""
    records: tuple[TimingRecord, ...]
    thread_names: ThreadNameMap


def read_document(document: Any) -> ReadResult:
    """
    Validate a decoded export document.

    Thread groups and their timings are read in document order. When the
    same thread_id is named by several groups the last name wins; a group
    without a name leaves an earlier name in place.

    Args:
        document: The decoded JSON document (expected: a list of groups)

    Returns:
        ReadResult with records in document order and the thread names

    Raises:
        MissingFieldError: If a group has no valid thread_id
        MalformedRecordError: If any other field is missing or mistyped
    """
    if not isinstance(document, list):
        raise MalformedRecordError(
            DOCUMENT_FIELD,
            f"expected an array of thread groups, got {_json_type(document)}",
        )

    records: list[TimingRecord] = []
    thread_names: ThreadNameMap = {}

    for group_index, raw_group in enumerate(document):
        group = _read_group(raw_group, group_index)

        if group.thread_name is not None:
            thread_names[group.thread_id] = group.thread_name

        for timing_index, raw_timing in enumerate(group.timings or []):
            records.append(
                _read_timing(group.thread_id, raw_timing, group_index, timing_index)
            )

    return ReadResult(records=tuple(records), thread_names=thread_names)


def _read_group(raw_group: Any, group_index: int) -> ThreadGroup:
    """Validate a thread group header."""
    if not isinstance(raw_group, dict):
        raise MissingFieldError(
            "thread_id",
            f"expected an object, got {_json_type(raw_group)}",
            group_index,
        )

    try:
        return ThreadGroup.model_validate(raw_group)
    except ValidationError as e:
        errors = e.errors()
        for error in errors:
            if error["loc"][:1] == ("thread_id",):
                raise MissingFieldError("thread_id", error["msg"], group_index) from e

        error = errors[0]
        raise MalformedRecordError(
            _field_path(error["loc"]), error["msg"], group_index
        ) from e


def _read_timing(
    thread_id: int,
    raw_timing: Any,
    group_index: int,
    timing_index: int,
) -> TimingRecord:
    """Validate one timing entry of a group."""
    if not isinstance(raw_timing, dict):
        raise MalformedRecordError(
            "timing",
            f"expected an object, got {_json_type(raw_timing)}",
            group_index,
            timing_index,
        )

    try:
        return TimingRecord.model_validate({**raw_timing, "thread_id": thread_id})
    except ValidationError as e:
        error = e.errors()[0]
        raise MalformedRecordError(
            _field_path(error["loc"]), error["msg"], group_index, timing_index
        ) from e


def _field_path(loc: tuple) -> str:
    """Render a pydantic error location as a dotted field path."""
    return ".".join(str(part) for part in loc) or DOCUMENT_FIELD


def _json_type(value: Any) -> str:
    """Name the JSON type of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__
