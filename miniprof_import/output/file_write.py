"""
Compressed trace file output.

A trace file is an 8-byte magic, a version byte and a compression byte,
followed by a gzip stream holding the UTF-8 JSON payload. Output is staged
in a temporary sibling file and renamed into place on commit, so a failed
run never leaves a partial trace behind.
"""

import contextlib
import gzip
import json
import os
import stat
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any

from miniprof_import.errors import TraceIOError

TRACE_MAGIC = b"MPTRACE\x00"
TRACE_VERSION = 1


class FileCompression(str, Enum):
    """Compression effort for the trace payload."""
    FAST = "fast"
    SLOW = "slow"
    EXTREME = "extreme"

    @property
    def level(self) -> int:
        """gzip compression level for this setting."""
        return _GZIP_LEVELS[self]

    @property
    def code(self) -> int:
        """Byte stored in the file header."""
        return list(FileCompression).index(self)


_GZIP_LEVELS = {
    FileCompression.FAST: 1,
    FileCompression.SLOW: 6,
    FileCompression.EXTREME: 9,
}


class FileWrite:
    """
    Output sink for a single trace file.

    Use FileWrite.open() to create one. As a context manager it commits on a
    clean exit and discards the staged file when an exception escapes.
    """

    def __init__(self, path: Path, compression: FileCompression, raw, staged_path: Path):
        self.path = path
        self.compression = compression
        self.staged_path = staged_path
        self._raw = raw
        self._stream: gzip.GzipFile | None = None
        self.bytes_written = 0

    @classmethod
    def open(
        cls,
        path: str | Path,
        compression: FileCompression = FileCompression.FAST,
    ) -> "FileWrite":
        """
        Open a staged output file next to ``path``.

        Raises:
            TraceIOError: If the output location cannot be written
        """
        path = Path(path)

        try:
            fd, staged_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".part", dir=path.parent
            )
        except OSError as e:
            raise TraceIOError(path, "Cannot open output file") from e

        sink = cls(path, compression, os.fdopen(fd, "wb"), Path(staged_name))
        try:
            sink._raw.write(TRACE_MAGIC + bytes([TRACE_VERSION, compression.code]))
            sink._stream = gzip.GzipFile(
                filename="",
                mode="wb",
                fileobj=sink._raw,
                compresslevel=compression.level,
                mtime=0,
            )
        except OSError as e:
            sink.discard()
            raise TraceIOError(path, "Cannot open output file") from e

        return sink

    def write(self, data: bytes) -> None:
        """Append payload bytes to the compressed stream."""
        if self._stream is None:
            raise TraceIOError(self.path, "Output file is already closed")
        try:
            self._stream.write(data)
        except OSError as e:
            raise TraceIOError(self.path, "Cannot write output file") from e
        self.bytes_written += len(data)

    def commit(self) -> Path:
        """Flush the stream and move the staged file onto the target path."""
        try:
            self._close()
            os.chmod(self.staged_path, self._target_mode())
            os.replace(self.staged_path, self.path)
        except OSError as e:
            self.discard()
            raise TraceIOError(self.path, "Cannot write output file") from e
        return self.path

    def discard(self) -> None:
        """Drop the staged file without touching the target path."""
        with contextlib.suppress(OSError):
            self._close()
        self.staged_path.unlink(missing_ok=True)

    def _target_mode(self) -> int:
        """Mode for the committed file: the replaced file's, else 0o666 under the umask."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _close(self) -> None:
        stream, self._stream = self._stream, None
        try:
            if stream is not None:
                stream.close()
        finally:
            self._raw.close()

    def __enter__(self) -> "FileWrite":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.commit()
        else:
            self.discard()
        return False


def read_trace(path: str | Path) -> dict[str, Any]:
    """
    Read a trace file back into its JSON payload.

    Raises:
        TraceIOError: If the file cannot be read or is not a trace file
    """
    path = Path(path)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise TraceIOError(path, "Cannot open trace file") from e

    header_size = len(TRACE_MAGIC) + 2
    if len(data) < header_size or not data.startswith(TRACE_MAGIC):
        raise TraceIOError(path, "Not a trace file")

    version = data[len(TRACE_MAGIC)]
    if version != TRACE_VERSION:
        raise TraceIOError(path, f"Unsupported trace version {version}")

    try:
        payload = gzip.decompress(data[header_size:])
    except (OSError, EOFError) as e:
        raise TraceIOError(path, "Corrupt trace payload") from e

    return json.loads(payload.decode("utf-8"))
