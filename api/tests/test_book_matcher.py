"""Tests for catalog book matching."""

from services.scripture.book_matcher import BookCatalogEntry, match_book


def test_matches_alt_name(conn):
    entry = match_book(conn, "Gen")
    assert entry == BookCatalogEntry(
        id=1, canonical_name="Бытие", alt_name="Genesis", abbreviation="Быт"
    )


def test_matches_abbreviation(conn):
    assert match_book(conn, "Рим").id == 45
    assert match_book(conn, "Ин").id == 43


def test_case_insensitive(conn):
    assert match_book(conn, "gEN").id == 1
    assert match_book(conn, "быт").id == 1
    assert match_book(conn, "ROMANS").id == 45


def test_unanchored_substring_match(conn):
    # Matching is not tied to word boundaries
    assert match_book(conn, "enes").id == 1
    assert match_book(conn, "xod").id == 2


def test_first_row_wins(conn):
    # "o" appears in several catalog names; the lowest id is returned
    assert match_book(conn, "o").id == 2


def test_no_match(conn):
    assert match_book(conn, "Nowhere") is None


def test_empty_name(conn):
    assert match_book(conn, "") is None
