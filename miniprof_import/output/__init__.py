from .file_write import FileCompression, FileWrite, read_trace
from .worker import TraceWorker, ThreadData, Zone
from .exporter import export_timeline

__all__ = [
    "FileCompression",
    "FileWrite",
    "read_trace",
    "TraceWorker",
    "ThreadData",
    "Zone",
    "export_timeline",
]
