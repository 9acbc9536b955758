"""Value objects returned by the location index."""

from dataclasses import dataclass

from quran_tracker.index.refs import START_OF_TEXT, VerseRef


@dataclass(frozen=True)
class ChapterBounds:
    """Page span and verse span of one chapter (surah).

    Attributes:
        chapter_id: Chapter number (1-114)
        name: Transliterated chapter name
        start_page: First page the chapter appears on
        end_page: Last page the chapter appears on
        verse_count: Number of verses in the chapter
        start_verse: First verse reference (always <chapter>:1)
        end_verse: Last verse reference
    """

    chapter_id: int
    name: str
    start_page: int
    end_page: int
    verse_count: int
    start_verse: VerseRef
    end_verse: VerseRef


@dataclass(frozen=True)
class PartBounds:
    """Page span and verse span of one part (juz)."""

    part_id: int
    start_page: int
    end_page: int
    start_verse: VerseRef
    end_verse: VerseRef


@dataclass(frozen=True)
class PageVerses:
    """First and last verse printed on a page."""

    page: int
    first_verse: VerseRef
    last_verse: VerseRef


@dataclass(frozen=True)
class ScopeSpan:
    """Where a reading scope starts and ends, in pages and in verses."""

    start_page: int
    end_page: int
    start_verse: VerseRef
    end_verse: VerseRef

    @classmethod
    def fallback(cls) -> "ScopeSpan":
        """Span used when a scope cannot be resolved."""
        return cls(start_page=1, end_page=1, start_verse=START_OF_TEXT, end_verse=START_OF_TEXT)

    def clamp(self, ref: VerseRef) -> VerseRef:
        """Pull a verse reference inside [start_verse, end_verse]."""
        if ref < self.start_verse:
            return self.start_verse
        if ref > self.end_verse:
            return self.end_verse
        return ref
