"""
Input document loading.

Reads a miniprofiler export from disk and decodes it as JSON. The whole
document is loaded into memory; validation happens in the reader.
"""

import json
from pathlib import Path
from typing import Any

from miniprof_import.errors import MalformedRecordError, TraceIOError

DOCUMENT_FIELD = "<document>"


def load_document(file_path: str | Path) -> Any:
    """
    Load and decode a miniprofiler JSON export.

    Args:
        file_path: Path to the export file

    Returns:
        The decoded JSON document

    Raises:
        TraceIOError: If the file cannot be opened or read
        MalformedRecordError: If the file is not valid JSON
    """
    path = Path(file_path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise TraceIOError(path, "Cannot open input file") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRecordError(DOCUMENT_FIELD, f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedRecordError(DOCUMENT_FIELD, "JSON nesting is too deep") from e
