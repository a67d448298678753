from .loader import load_document
from .reader import ReadResult, read_document

__all__ = ["load_document", "ReadResult", "read_document"]
