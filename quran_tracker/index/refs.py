"""Verse references in their textual "<chapter>:<verse>" form."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class VerseRef:
    """One verse, ordered by (chapter, verse)."""

    chapter: int
    verse: int

    def __str__(self) -> str:
        return f"{self.chapter}:{self.verse}"


# Start of text; every lookup miss resolves here.
START_OF_TEXT = VerseRef(1, 1)


def parse_verse_ref(text: str) -> VerseRef | None:
    """Parse "<chapter>:<verse>" into a VerseRef.

    Anything other than exactly two colon-separated integer fields yields
    None rather than raising.
    """
    if not isinstance(text, str):
        return None
    parts = text.split(":")
    if len(parts) != 2:
        return None
    try:
        chapter = int(parts[0].strip())
        verse = int(parts[1].strip())
    except ValueError:
        return None
    return VerseRef(chapter, verse)
