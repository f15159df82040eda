"""Track matching: key extraction and key-based resolution."""

from .algorithms import DestinationIndex, build_index, classify, resolve
from .keys import extract_key, normalize_number, normalize_text
from .types import (
    Ambiguous,
    MatchKey,
    Matched,
    ResolutionEntry,
    ResolutionMap,
    Unmatched,
)

__all__ = [
    "Ambiguous",
    "DestinationIndex",
    "MatchKey",
    "Matched",
    "ResolutionEntry",
    "ResolutionMap",
    "Unmatched",
    "build_index",
    "classify",
    "extract_key",
    "normalize_number",
    "normalize_text",
    "resolve",
]
