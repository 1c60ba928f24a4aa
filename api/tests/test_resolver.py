"""Tests for reference resolution."""

from services.scripture.reference_parser import parse
from services.scripture.resolver import ResolvedReference, resolve_references


def test_gen_1_resolves_to_whole_chapter(conn):
    (resolved,) = resolve_references(conn, parse("Gen 1"))
    assert resolved.book_id == 1
    assert resolved.display_name == "Бытие"
    assert resolved.display_alt == "Genesis"
    (group,) = resolved.verse_groups
    assert [r.verse for r in group] == [1, 2, 3, 4, 5]


def test_rom_8_1_3_skips_verse_2(conn):
    (resolved,) = resolve_references(conn, parse("Rom 8:1,3"))
    (group,) = resolved.verse_groups
    assert [(r.chapter, r.verse) for r in group] == [(8, 1), (8, 3)]


def test_unknown_books_are_dropped(conn):
    resolved = resolve_references(conn, parse("Nowhere 1; Gen 1; Elsewhere 2"))
    assert [r.book_id for r in resolved] == [1]


def test_order_follows_input(conn):
    refs = parse("Rom 8:1; Nowhere 1; Gen 1:1; Ин 3:16; Missing 4; Быт 2")
    resolved = resolve_references(conn, refs)
    assert [r.book_id for r in resolved] == [45, 1, 43, 1]


def test_unresolvable_location_keeps_reference(conn):
    (resolved,) = resolve_references(conn, parse("Gen 1:5-2:1"))
    assert resolved.book_id == 1
    assert resolved.verse_groups == []


def test_only_resolvable_locations_become_groups(conn):
    (resolved,) = resolve_references(conn, parse("Gen 1:5-2:1, 2:2; 1:1"))
    assert [[(r.chapter, r.verse) for r in g] for g in resolved.verse_groups] == [
        [(2, 2)],
        [(1, 1)],
    ]


def test_missing_chapter_gives_empty_group(conn):
    (resolved,) = resolve_references(conn, parse("Rom 99"))
    assert resolved.verse_groups == [[]]


def test_no_references(conn):
    assert resolve_references(conn, []) == []


def test_to_dict_shape(conn):
    (resolved,) = resolve_references(conn, parse("Rom 8:2"))
    assert resolved.to_dict() == {
        "reference": {"title": "К Римлянам", "alt": "Romans"},
        "texts": [[{
            "book_id": 45,
            "chapter": 8,
            "verse": 2,
            "text": "For the law of the Spirit of life hath made me free.",
        }]],
    }


def test_empty_reference_serializes_with_empty_texts():
    resolved = ResolvedReference(book_id=1, display_name="Бытие", display_alt="Genesis")
    assert resolved.to_dict()["texts"] == []
