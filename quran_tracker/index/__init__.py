"""Location index - structural lookups over the mushaf.

This module provides:
- Verse references and their "<chapter>:<verse>" parsing
- Chapter, part and page boundaries
- Verse to page mapping in both directions
- The start-of-text fallback used when a lookup misses
"""

from quran_tracker.index.location_index import (
    DEFAULT_DATASET_PATH,
    LocationIndex,
    get_location_index,
    load_location_index,
)
from quran_tracker.index.refs import START_OF_TEXT, VerseRef, parse_verse_ref
from quran_tracker.index.types import ChapterBounds, PageVerses, PartBounds, ScopeSpan

__all__ = [
    "DEFAULT_DATASET_PATH",
    "START_OF_TEXT",
    "ChapterBounds",
    "LocationIndex",
    "PageVerses",
    "PartBounds",
    "ScopeSpan",
    "VerseRef",
    "get_location_index",
    "load_location_index",
    "parse_verse_ref",
]
