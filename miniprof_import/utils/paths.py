"""
Path helpers for display names.
"""

import os


def basename(path: str | os.PathLike) -> str:
    """
    Get the final component of a path.

    Both ``/`` and ``\\`` are treated as separators regardless of platform,
    so exports produced on Windows display the same way everywhere. A path
    ending in a separator has an empty final component.
    """
    text = os.fspath(path)
    cut = max(text.rfind("/"), text.rfind("\\"))
    return text[cut + 1:]
