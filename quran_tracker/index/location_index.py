"""Location index over the 604-page Madani mushaf.

Answers structural questions about the text: where a chapter or part begins
and ends, which verses a page holds and which page a verse sits on.

Internally every verse is addressed by its global number (1..total_verses),
so page placement is a flat list and range arithmetic is integer arithmetic.
Lookups return None on a miss. Only `resolve_scope`, `verse_span_of_pages` and
`page_of_ref` substitute the start-of-text fallback, so that policy lives in
one place.
"""

from __future__ import annotations

from bisect import bisect_right
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from loguru import logger

from quran_tracker.config.settings import settings
from quran_tracker.errors import LocationIndexError
from quran_tracker.index.refs import START_OF_TEXT, VerseRef, parse_verse_ref
from quran_tracker.index.types import ChapterBounds, PageVerses, PartBounds, ScopeSpan

if TYPE_CHECKING:
    from quran_tracker.plans.types import Scope

DEFAULT_DATASET_PATH = Path(__file__).parent / "data" / "madani.yaml"


class LocationIndex:
    """Read-only structural index of the text.

    Page placement comes from an explicit page table when one is given.
    Otherwise it is interpolated between anchors (chapter starts and part
    starts), which are exact; pages between two anchors share the anchor
    interval's verses evenly.
    """

    def __init__(
        self,
        *,
        total_pages: int,
        chapter_names: list[str],
        verse_counts: list[int],
        chapter_start_pages: list[int],
        part_starts: list[tuple[VerseRef, int]],
        page_starts: list[VerseRef] | None = None,
        edition: str = "custom",
    ) -> None:
        if not verse_counts:
            raise LocationIndexError("Dataset has no chapters")
        if len(chapter_names) != len(verse_counts) or len(chapter_start_pages) != len(verse_counts):
            raise LocationIndexError("Chapter names, verse counts and start pages must have the same length")
        if total_pages <= 0:
            raise LocationIndexError(f"total_pages must be positive, got {total_pages}")

        self.edition = edition
        self.total_pages = total_pages
        self._names = list(chapter_names)
        self._verse_counts = list(verse_counts)

        # Global number of each chapter's first verse
        self._chapter_offsets: list[int] = []
        running = 0
        for chapter, count in enumerate(self._verse_counts, start=1):
            if count <= 0:
                raise LocationIndexError(f"Chapter {chapter} has no verses")
            self._chapter_offsets.append(running + 1)
            running += count
        self.total_verses = running

        self._part_starts = [self._require_number(ref, f"part {part}") for part, (ref, _) in enumerate(part_starts, start=1)]
        self._part_start_pages = [page for _, page in part_starts]
        if any(b <= a for a, b in zip(self._part_starts, self._part_starts[1:])):
            raise LocationIndexError("Part starts must be strictly increasing")

        if page_starts is not None:
            self._page_of = self._place_from_page_table(page_starts)
            self._check_anchors(chapter_start_pages)
        else:
            self._page_of = self._place_from_anchors(chapter_start_pages)

        self._page_first: dict[int, int] = {}
        self._page_last: dict[int, int] = {}
        for number, page in enumerate(self._page_of, start=1):
            self._page_first.setdefault(page, number)
            self._page_last[page] = number

        logger.debug(
            f"[INDEX] Built {edition} index: {self.total_chapters} chapters, "
            f"{self.total_parts} parts, {self.total_pages} pages, {self.total_verses} verses"
        )

    @classmethod
    def from_dataset(cls, data: dict[str, Any], source: str = "<memory>") -> LocationIndex:
        """Build an index from a parsed dataset mapping.

        Raises:
            LocationIndexError: If the mapping is missing keys or holds bad values
        """
        try:
            chapters = sorted(data["chapters"], key=lambda c: int(c["id"]))
            ids = [int(c["id"]) for c in chapters]
            if ids != list(range(1, len(chapters) + 1)):
                raise LocationIndexError(f"Chapter ids in {source} must run 1..{len(chapters)} without gaps")
            total_pages = int(data["total_pages"])

            part_starts: list[tuple[VerseRef, int]] = []
            for part in sorted(data["parts"], key=lambda p: int(p["id"])):
                ref = parse_verse_ref(str(part["start"]))
                if ref is None:
                    raise LocationIndexError(f"Part {part['id']} in {source} has malformed start {part['start']!r}")
                part_starts.append((ref, int(part["start_page"])))

            page_starts: list[VerseRef] | None = None
            if data.get("pages"):
                page_starts = []
                for page, raw in enumerate(data["pages"], start=1):
                    ref = parse_verse_ref(str(raw))
                    if ref is None:
                        raise LocationIndexError(f"Page {page} in {source} has malformed start {raw!r}")
                    page_starts.append(ref)

            start_pages = [int(c["start_page"]) for c in chapters]
            if any(not 1 <= page <= total_pages for page in start_pages):
                raise LocationIndexError(f"Chapter start pages in {source} must be within 1..{total_pages}")

            return cls(
                total_pages=total_pages,
                chapter_names=[str(c.get("name", "")) for c in chapters],
                verse_counts=[int(c["verses"]) for c in chapters],
                chapter_start_pages=start_pages,
                part_starts=part_starts,
                page_starts=page_starts,
                edition=str(data.get("edition", "custom")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise LocationIndexError(f"Malformed location dataset {source}: {e}") from e

    # ---- sizes ---------------------------------------------------------

    @property
    def total_chapters(self) -> int:
        return len(self._verse_counts)

    @property
    def total_parts(self) -> int:
        return len(self._part_starts)

    # ---- structural lookups ---------------------------------------------

    def chapter_bounds(self, chapter_id: int) -> ChapterBounds | None:
        """Return the page and verse span of a chapter, or None if unknown."""
        if not 1 <= chapter_id <= self.total_chapters:
            return None
        count = self._verse_counts[chapter_id - 1]
        first = self._chapter_offsets[chapter_id - 1]
        last = first + count - 1
        return ChapterBounds(
            chapter_id=chapter_id,
            name=self._names[chapter_id - 1],
            start_page=self._page_of[first - 1],
            end_page=self._page_of[last - 1],
            verse_count=count,
            start_verse=VerseRef(chapter_id, 1),
            end_verse=VerseRef(chapter_id, count),
        )

    def part_bounds(self, part_id: int) -> PartBounds | None:
        """Return the page and verse span of a part, or None if unknown."""
        if not 1 <= part_id <= self.total_parts:
            return None
        first = self._part_starts[part_id - 1]
        last = self._part_starts[part_id] - 1 if part_id < self.total_parts else self.total_verses
        return PartBounds(
            part_id=part_id,
            start_page=self._page_of[first - 1],
            end_page=self._page_of[last - 1],
            start_verse=self._to_ref(first),
            end_verse=self._to_ref(last),
        )

    def verse_range_of_page(self, page: int) -> PageVerses | None:
        """Return the first and last verse on a page, or None if the page is unknown."""
        first = self._page_first.get(page)
        if first is None:
            return None
        return PageVerses(page=page, first_verse=self._to_ref(first), last_verse=self._to_ref(self._page_last[page]))

    def page_of_verse(self, chapter_id: int, verse: int) -> int | None:
        """Return the page a verse is printed on, or None if the verse is unknown."""
        number = self._to_number(VerseRef(chapter_id, verse))
        if number is None:
            return None
        return self._page_of[number - 1]

    def verses_on_page(self, page: int) -> list[VerseRef]:
        """List every verse on a page in reading order."""
        first = self._page_first.get(page)
        if first is None:
            return []
        return [self._to_ref(number) for number in range(first, self._page_last[page] + 1)]

    # ---- verse arithmetic -------------------------------------------------

    def advance_verse(self, ref: VerseRef, count: int) -> VerseRef:
        """Move `count` verses forward, rolling into following chapters.

        The result never passes the last verse of the text. An unknown
        reference is returned unchanged.
        """
        number = self._to_number(ref)
        if number is None:
            return ref
        return self._to_ref(min(max(number + count, 1), self.total_verses))

    def verse_count_between(self, first: VerseRef, last: VerseRef) -> int:
        """Count verses in the inclusive range [first, last]; 0 if it is not a valid range."""
        a = self._to_number(first)
        b = self._to_number(last)
        if a is None or b is None or b < a:
            return 0
        return b - a + 1

    # ---- fallback policy -----------------------------------------------------

    def resolve_scope(self, scope: Scope) -> ScopeSpan:
        """Resolve a reading scope to its page and verse span.

        An unknown part or chapter (or a missing index) resolves to the
        start-of-text fallback span instead of failing.
        """
        if scope.kind == "whole":
            return ScopeSpan(
                start_page=1,
                end_page=self.total_pages,
                start_verse=START_OF_TEXT,
                end_verse=self._to_ref(self.total_verses),
            )

        bounds: ChapterBounds | PartBounds | None = None
        if scope.index is not None:
            if scope.kind == "part":
                bounds = self.part_bounds(scope.index)
            elif scope.kind == "chapter":
                bounds = self.chapter_bounds(scope.index)

        if bounds is None:
            logger.debug(f"[INDEX] Could not resolve {scope.kind} {scope.index}; using start of text")
            return ScopeSpan.fallback()

        return ScopeSpan(
            start_page=bounds.start_page,
            end_page=bounds.end_page,
            start_verse=bounds.start_verse,
            end_verse=bounds.end_verse,
        )

    def verse_span_of_pages(self, first_page: int, last_page: int) -> tuple[VerseRef, VerseRef]:
        """First verse of `first_page` and last verse of `last_page`, start of text on a miss."""
        first = self.verse_range_of_page(first_page)
        last = self.verse_range_of_page(last_page)
        if first is None or last is None:
            logger.debug(f"[INDEX] Page lookup missed for pages {first_page}-{last_page}; using start of text")
        return (
            first.first_verse if first else START_OF_TEXT,
            last.last_verse if last else START_OF_TEXT,
        )

    def page_of_ref(self, ref: VerseRef) -> int:
        """Page a verse is printed on, page 1 when the verse is unknown."""
        page = self.page_of_verse(ref.chapter, ref.verse)
        if page is None:
            logger.debug(f"[INDEX] No page for verse {ref}; using page 1")
            return 1
        return page

    # ---- internals ---------------------------------------------------------

    def _to_number(self, ref: VerseRef) -> int | None:
        if not 1 <= ref.chapter <= self.total_chapters:
            return None
        if not 1 <= ref.verse <= self._verse_counts[ref.chapter - 1]:
            return None
        return self._chapter_offsets[ref.chapter - 1] + ref.verse - 1

    def _to_ref(self, number: int) -> VerseRef:
        position = bisect_right(self._chapter_offsets, number) - 1
        return VerseRef(position + 1, number - self._chapter_offsets[position] + 1)

    def _require_number(self, ref: VerseRef, label: str) -> int:
        number = self._to_number(ref)
        if number is None:
            raise LocationIndexError(f"{label} references unknown verse {ref}")
        return number

    def _place_from_page_table(self, page_starts: list[VerseRef]) -> list[int]:
        if len(page_starts) != self.total_pages:
            raise LocationIndexError(f"Page table has {len(page_starts)} entries, expected {self.total_pages}")
        firsts = [self._require_number(ref, f"page {page}") for page, ref in enumerate(page_starts, start=1)]
        if firsts[0] != 1 or any(b <= a for a, b in zip(firsts, firsts[1:])):
            raise LocationIndexError("Page table must start at the first verse and increase strictly")
        return [bisect_right(firsts, number) for number in range(1, self.total_verses + 1)]

    def _check_anchors(self, chapter_start_pages: list[int]) -> None:
        """Chapter and part start pages must agree with the page table."""
        for chapter, page in enumerate(chapter_start_pages, start=1):
            placed = self._page_of[self._chapter_offsets[chapter - 1] - 1]
            if placed != page:
                raise LocationIndexError(f"Chapter {chapter} starts on page {page}, page table puts it on {placed}")
        for part, (number, page) in enumerate(zip(self._part_starts, self._part_start_pages), start=1):
            placed = self._page_of[number - 1]
            if placed != page:
                raise LocationIndexError(f"Part {part} starts on page {page}, page table puts it on {placed}")

    def _place_from_anchors(self, chapter_start_pages: list[int]) -> list[int]:
        anchors: dict[int, int] = {}

        def add(number: int, page: int, label: str) -> None:
            existing = anchors.get(number)
            if existing is not None and existing != page:
                raise LocationIndexError(
                    f"{label} puts verse {self._to_ref(number)} on page {page}, already anchored to page {existing}"
                )
            anchors[number] = page

        for chapter, page in enumerate(chapter_start_pages, start=1):
            add(self._chapter_offsets[chapter - 1], page, f"chapter {chapter}")
        for part, (number, page) in enumerate(zip(self._part_starts, self._part_start_pages), start=1):
            add(number, page, f"part {part}")
        # Sentinel one past the end so the last interval closes on the last page
        anchors[self.total_verses + 1] = self.total_pages + 1

        points = sorted(anchors.items())
        page_of: list[int] = []
        for (a_number, a_page), (b_number, b_page) in zip(points, points[1:]):
            if b_page < a_page:
                raise LocationIndexError(
                    f"Anchor at verse {self._to_ref(b_number) if b_number <= self.total_verses else 'end'} "
                    f"goes back from page {a_page} to page {b_page}"
                )
            span = b_number - a_number
            for number in range(a_number, b_number):
                page_of.append(a_page + (number - a_number) * (b_page - a_page) // span)
        return page_of


def load_location_index(path: Path | str | None = None) -> LocationIndex:
    """Load a location index from a YAML dataset.

    Args:
        path: Dataset path; defaults to the bundled Madani dataset

    Returns:
        LocationIndex built from the dataset

    Raises:
        LocationIndexError: If the file is missing, unreadable or malformed
    """
    dataset_path = Path(path) if path else DEFAULT_DATASET_PATH
    if not dataset_path.exists():
        raise LocationIndexError(f"Location dataset not found: {dataset_path}")

    try:
        data = yaml.safe_load(dataset_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise LocationIndexError(f"Invalid YAML in {dataset_path}: {e}") from e

    if not isinstance(data, dict):
        raise LocationIndexError(f"Location dataset {dataset_path} must be a YAML mapping")

    index = LocationIndex.from_dataset(data, source=str(dataset_path))
    logger.info(f"[INDEX] Loaded location index from {dataset_path.name} ({index.edition})")
    return index


@lru_cache(maxsize=1)
def get_location_index() -> LocationIndex:
    """Shared index for the configured dataset, loaded once."""
    return load_location_index(settings.location_index_path)
