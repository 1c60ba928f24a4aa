"""Tests for location descriptor expansion."""

from services.scripture.location_expander import VerseRecord, expand_location
from services.scripture.reference_parser import LocationDescriptor

from conftest import GENESIS_1, GENESIS_2


def test_whole_chapter_in_verse_order(conn):
    records = expand_location(conn, 1, LocationDescriptor(chapters=(1,)))
    assert [r.verse for r in records] == [1, 2, 3, 4, 5]
    assert [r.text for r in records] == GENESIS_1
    assert all(r.book_id == 1 and r.chapter == 1 for r in records)


def test_several_chapters_ordered_by_chapter_then_verse(conn):
    records = expand_location(conn, 1, LocationDescriptor(chapters=(2, 1)))
    assert [(r.chapter, r.verse) for r in records] == (
        [(1, n) for n in range(1, 6)] + [(2, n) for n in range(1, 4)]
    )
    assert records[-1].text == GENESIS_2[-1]


def test_verse_subset_of_single_chapter(conn):
    records = expand_location(conn, 45, LocationDescriptor(chapters=(8,), verses=(1, 3)))
    assert [r.verse for r in records] == [1, 3]


def test_verse_subset_across_chapters_is_skipped(conn):
    location = LocationDescriptor(chapters=(1, 2), verses=(1,))
    assert expand_location(conn, 1, location) is None


def test_missing_chapter_yields_no_rows(conn):
    assert expand_location(conn, 1, LocationDescriptor(chapters=(50,))) == []


def test_missing_verses_yield_no_rows(conn):
    location = LocationDescriptor(chapters=(8,), verses=(99,))
    assert expand_location(conn, 45, location) == []


def test_record_serialization():
    record = VerseRecord(book_id=1, chapter=1, verse=1, text="In the beginning")
    assert record.to_dict() == {
        "book_id": 1,
        "chapter": 1,
        "verse": 1,
        "text": "In the beginning",
    }
