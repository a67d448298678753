from .synthesizer import synthesize, synthesize_all
from .normalizer import sort_timeline, normalize_timeline, sort_and_normalize

__all__ = [
    "synthesize",
    "synthesize_all",
    "sort_timeline",
    "normalize_timeline",
    "sort_and_normalize",
]
