"""Tests for the location index over the bundled Madani dataset."""

import pytest
import yaml

from quran_tracker.errors import LocationIndexError
from quran_tracker.index.location_index import DEFAULT_DATASET_PATH, LocationIndex, load_location_index
from quran_tracker.index.refs import START_OF_TEXT, VerseRef
from quran_tracker.index.types import ScopeSpan
from quran_tracker.plans.types import NamedChapter, NamedPart, WholeText


class TestReferenceConstants:
    """Tests for the size of the reference text."""

    def test_totals(self, location_index):
        """Test the 604-page, 30-part, 114-chapter layout."""
        assert location_index.total_pages == 604
        assert location_index.total_parts == 30
        assert location_index.total_chapters == 114
        assert location_index.total_verses == 6236

    def test_edition(self, location_index):
        assert location_index.edition == "madani-604"


class TestChapterBounds:
    """Tests for chapter_bounds."""

    def test_opening_chapter(self, location_index):
        """Test that chapter 1 fills page 1."""
        bounds = location_index.chapter_bounds(1)
        assert bounds is not None
        assert bounds.name == "Al-Fatihah"
        assert bounds.verse_count == 7
        assert (bounds.start_page, bounds.end_page) == (1, 1)
        assert bounds.start_verse == VerseRef(1, 1)
        assert bounds.end_verse == VerseRef(1, 7)

    def test_second_chapter_spans_pages_2_to_49(self, location_index):
        bounds = location_index.chapter_bounds(2)
        assert bounds is not None
        assert bounds.verse_count == 286
        assert (bounds.start_page, bounds.end_page) == (2, 49)
        assert bounds.end_verse == VerseRef(2, 286)

    def test_last_chapter(self, location_index):
        bounds = location_index.chapter_bounds(114)
        assert bounds is not None
        assert bounds.end_page == 604
        assert bounds.end_verse == VerseRef(114, 6)

    @pytest.mark.parametrize("chapter_id", [0, 115, -1])
    def test_unknown_chapter(self, location_index, chapter_id):
        assert location_index.chapter_bounds(chapter_id) is None


class TestPartBounds:
    """Tests for part_bounds."""

    def test_first_part(self, location_index):
        """Test that part 1 ends just before 2:142."""
        bounds = location_index.part_bounds(1)
        assert bounds is not None
        assert bounds.start_verse == VerseRef(1, 1)
        assert bounds.end_verse == VerseRef(2, 141)
        assert (bounds.start_page, bounds.end_page) == (1, 21)

    def test_last_part(self, location_index):
        bounds = location_index.part_bounds(30)
        assert bounds is not None
        assert bounds.start_verse == VerseRef(78, 1)
        assert bounds.end_verse == VerseRef(114, 6)
        assert (bounds.start_page, bounds.end_page) == (582, 604)

    def test_parts_tile_the_text(self, location_index):
        """Test that consecutive parts meet with no gap or overlap."""
        for part_id in range(1, 30):
            current = location_index.part_bounds(part_id)
            following = location_index.part_bounds(part_id + 1)
            assert location_index.advance_verse(current.end_verse, 1) == following.start_verse
            assert following.start_page - current.end_page in (0, 1)

    @pytest.mark.parametrize("part_id", [0, 31])
    def test_unknown_part(self, location_index, part_id):
        assert location_index.part_bounds(part_id) is None


class TestPageMapping:
    """Tests for page to verse mapping in both directions."""

    def test_first_page(self, location_index):
        page = location_index.verse_range_of_page(1)
        assert page is not None
        assert page.first_verse == VerseRef(1, 1)
        assert page.last_verse == VerseRef(1, 7)

    def test_last_page(self, location_index):
        page = location_index.verse_range_of_page(604)
        assert page is not None
        assert page.first_verse == VerseRef(112, 1)
        assert page.last_verse == VerseRef(114, 6)

    @pytest.mark.parametrize("page", [0, 605])
    def test_unknown_page(self, location_index, page):
        assert location_index.verse_range_of_page(page) is None
        assert location_index.verses_on_page(page) == []

    def test_every_page_has_verses(self, location_index):
        """Test that no page of the layout is empty."""
        for page in range(1, 605):
            assert location_index.verse_range_of_page(page) is not None

    def test_pages_are_contiguous(self, location_index):
        """Test that each page starts right after the previous one ends."""
        for page in range(1, 604):
            current = location_index.verse_range_of_page(page)
            following = location_index.verse_range_of_page(page + 1)
            assert location_index.advance_verse(current.last_verse, 1) == following.first_verse

    def test_page_of_verse(self, location_index):
        assert location_index.page_of_verse(1, 1) == 1
        assert location_index.page_of_verse(2, 1) == 2
        assert location_index.page_of_verse(78, 1) == 582
        assert location_index.page_of_verse(114, 6) == 604

    def test_page_of_verse_round_trips_with_page_range(self, location_index):
        page = location_index.verse_range_of_page(300)
        assert location_index.page_of_verse(page.first_verse.chapter, page.first_verse.verse) == 300
        assert location_index.page_of_verse(page.last_verse.chapter, page.last_verse.verse) == 300

    @pytest.mark.parametrize(("chapter_id", "verse"), [(1, 8), (115, 1), (2, 0)])
    def test_unknown_verse(self, location_index, chapter_id, verse):
        assert location_index.page_of_verse(chapter_id, verse) is None

    def test_verses_on_page(self, location_index):
        verses = location_index.verses_on_page(1)
        assert verses == [VerseRef(1, n) for n in range(1, 8)]


class TestMadaniPageTable:
    """Tests pinning the bundled page table to known pages of the printed mushaf."""

    @pytest.mark.parametrize(
        ("page", "first", "last"),
        [
            (2, VerseRef(2, 1), VerseRef(2, 5)),
            (3, VerseRef(2, 6), VerseRef(2, 16)),
            (22, VerseRef(2, 142), VerseRef(2, 145)),
            (48, VerseRef(2, 282), VerseRef(2, 282)),
            (50, VerseRef(3, 1), VerseRef(3, 9)),
            (585, VerseRef(80, 1), VerseRef(80, 42)),
        ],
    )
    def test_page_ranges(self, location_index, page, first, last):
        verses = location_index.verse_range_of_page(page)
        assert (verses.first_verse, verses.last_verse) == (first, last)

    def test_throne_verse_page(self, location_index):
        assert location_index.page_of_verse(2, 255) == 42

    @pytest.mark.parametrize(
        ("chapter_id", "start_page", "end_page"),
        [(2, 2, 49), (8, 177, 186), (9, 187, 207), (10, 208, 221), (11, 221, 235), (83, 587, 589)],
    )
    def test_chapter_page_spans(self, location_index, chapter_id, start_page, end_page):
        """Test chapter spans, including chapters ending on the next one's first page."""
        bounds = location_index.chapter_bounds(chapter_id)
        assert (bounds.start_page, bounds.end_page) == (start_page, end_page)

    def test_part_starting_mid_page(self, location_index):
        bounds = location_index.part_bounds(26)
        assert bounds.start_verse == VerseRef(46, 1)
        assert bounds.start_page == 502
        assert location_index.verse_range_of_page(502).first_verse == VerseRef(45, 33)


class TestVerseArithmetic:
    """Tests for advance_verse and verse_count_between."""

    def test_advance_within_chapter(self, location_index):
        assert location_index.advance_verse(VerseRef(2, 1), 9) == VerseRef(2, 10)

    def test_advance_rolls_into_next_chapter(self, location_index):
        assert location_index.advance_verse(VerseRef(1, 7), 1) == VerseRef(2, 1)
        assert location_index.advance_verse(VerseRef(1, 5), 5) == VerseRef(2, 3)

    def test_advance_stops_at_end_of_text(self, location_index):
        assert location_index.advance_verse(VerseRef(114, 5), 10) == VerseRef(114, 6)

    def test_advance_unknown_reference_is_unchanged(self, location_index):
        assert location_index.advance_verse(VerseRef(200, 1), 3) == VerseRef(200, 1)

    def test_verse_count_between(self, location_index):
        assert location_index.verse_count_between(VerseRef(1, 1), VerseRef(2, 5)) == 12
        assert location_index.verse_count_between(VerseRef(1, 1), VerseRef(114, 6)) == 6236

    def test_verse_count_between_invalid_range(self, location_index):
        assert location_index.verse_count_between(VerseRef(2, 5), VerseRef(1, 1)) == 0
        assert location_index.verse_count_between(VerseRef(1, 1), VerseRef(1, 99)) == 0


class TestScopeResolution:
    """Tests for resolve_scope and its start-of-text fallback."""

    def test_whole_text(self, location_index):
        span = location_index.resolve_scope(WholeText())
        assert span == ScopeSpan(1, 604, VerseRef(1, 1), VerseRef(114, 6))

    def test_named_part(self, location_index):
        span = location_index.resolve_scope(NamedPart(index=30))
        assert (span.start_page, span.end_page) == (582, 604)
        assert span.start_verse == VerseRef(78, 1)

    def test_named_chapter(self, location_index):
        span = location_index.resolve_scope(NamedChapter(index=2))
        assert span.start_verse == VerseRef(2, 1)
        assert span.end_verse == VerseRef(2, 286)

    @pytest.mark.parametrize(
        "scope",
        [NamedPart(index=31), NamedPart(index=None), NamedChapter(index=0), NamedChapter(index=None)],
    )
    def test_unresolvable_scope_falls_back_to_start_of_text(self, location_index, scope):
        assert location_index.resolve_scope(scope) == ScopeSpan.fallback()

    def test_verse_span_of_pages(self, location_index):
        first, last = location_index.verse_span_of_pages(1, 2)
        assert first == VerseRef(1, 1)
        assert last == location_index.verse_range_of_page(2).last_verse

    def test_verse_span_of_unknown_pages(self, location_index):
        assert location_index.verse_span_of_pages(0, 700) == (START_OF_TEXT, START_OF_TEXT)

    def test_page_of_ref(self, location_index):
        assert location_index.page_of_ref(VerseRef(10, 109)) == 221

    @pytest.mark.parametrize("ref", [VerseRef(1, 8), VerseRef(115, 1)])
    def test_page_of_unknown_ref_is_first_page(self, location_index, ref):
        assert location_index.page_of_ref(ref) == 1


class TestDatasetLoading:
    """Tests for building indexes from datasets."""

    def _small_dataset(self) -> dict:
        return {
            "edition": "tiny",
            "total_pages": 3,
            "chapters": [
                {"id": 1, "name": "One", "verses": 4, "start_page": 1},
                {"id": 2, "name": "Two", "verses": 6, "start_page": 2},
            ],
            "parts": [
                {"id": 1, "start": "1:1", "start_page": 1},
                {"id": 2, "start": "2:4", "start_page": 3},
            ],
        }

    def test_interpolated_placement(self):
        index = LocationIndex.from_dataset(self._small_dataset())
        assert index.total_verses == 10
        assert index.verses_on_page(1) == [VerseRef(1, n) for n in range(1, 5)]
        assert index.verse_range_of_page(2).first_verse == VerseRef(2, 1)
        assert index.verse_range_of_page(2).last_verse == VerseRef(2, 3)
        assert index.part_bounds(2).start_page == 3

    def test_explicit_page_table_wins(self):
        data = self._small_dataset()
        data["pages"] = ["1:1", "1:3", "2:4"]
        index = LocationIndex.from_dataset(data)
        assert index.verses_on_page(1) == [VerseRef(1, 1), VerseRef(1, 2)]
        assert index.page_of_verse(2, 1) == 2

    def test_page_table_of_wrong_length(self):
        data = self._small_dataset()
        data["pages"] = ["1:1", "2:4"]
        with pytest.raises(LocationIndexError, match="Page table"):
            LocationIndex.from_dataset(data)

    def test_page_table_must_agree_with_chapter_starts(self):
        data = self._small_dataset()
        data["pages"] = ["1:1", "2:2", "2:4"]
        with pytest.raises(LocationIndexError, match="Chapter 2 starts on page 2"):
            LocationIndex.from_dataset(data)

    def test_page_table_must_agree_with_part_starts(self):
        data = self._small_dataset()
        data["pages"] = ["1:1", "2:1", "2:5"]
        with pytest.raises(LocationIndexError, match="Part 2 starts on page 3"):
            LocationIndex.from_dataset(data)

    def test_bundled_dataset_has_a_page_table(self):
        data = yaml.safe_load(DEFAULT_DATASET_PATH.read_text(encoding="utf-8"))
        assert len(data["pages"]) == 604
        assert data["pages"][:3] == ["1:1", "2:1", "2:6"]

    def test_conflicting_anchors(self):
        data = self._small_dataset()
        data["parts"][1] = {"id": 2, "start": "2:1", "start_page": 3}
        with pytest.raises(LocationIndexError, match="already anchored"):
            LocationIndex.from_dataset(data)

    def test_malformed_part_reference(self):
        data = self._small_dataset()
        data["parts"][1]["start"] = "two:four"
        with pytest.raises(LocationIndexError, match="malformed start"):
            LocationIndex.from_dataset(data)

    def test_missing_key(self):
        data = self._small_dataset()
        del data["chapters"]
        with pytest.raises(LocationIndexError, match="Malformed location dataset"):
            LocationIndex.from_dataset(data)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LocationIndexError, match="not found"):
            load_location_index(tmp_path / "missing.yaml")

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(LocationIndexError, match="mapping"):
            load_location_index(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("chapters: [\n", encoding="utf-8")
        with pytest.raises(LocationIndexError, match="Invalid YAML"):
            load_location_index(path)
