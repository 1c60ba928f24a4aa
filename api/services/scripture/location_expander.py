# api/services/scripture/location_expander.py
"""
Turn one location descriptor into verse rows.

Decision table:
    chapters        verses      action
    --------        ------      ------
    any             None        every verse of every listed chapter
    exactly one     given       only the listed verses of that chapter
    more than one   given       not resolvable, skipped

Missing chapters or verses simply produce no rows.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from .reference_parser import LocationDescriptor
from .tables import verses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerseRecord:
    book_id: int
    chapter: int
    verse: int
    text: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "book_id": self.book_id,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }


def _records(conn: Connection, stmt) -> list:
    return [
        VerseRecord(
            book_id=row.book_id,
            chapter=row.chapter,
            verse=row.verse,
            text=row.text,
        )
        for row in conn.execute(stmt)
    ]


def verses_by_chapters(conn: Connection, book_id: int, chapters) -> list:
    """All verses of the given chapters, ordered by chapter then verse."""
    stmt = (
        select(verses.c.book_id, verses.c.chapter, verses.c.verse, verses.c.text)
        .where(verses.c.book_id == book_id, verses.c.chapter.in_(list(chapters)))
        .order_by(verses.c.chapter, verses.c.verse)
    )
    return _records(conn, stmt)


def verses_in_chapter(conn: Connection, book_id: int, chapter: int, verse_numbers) -> list:
    """Selected verses of a single chapter, in verse order."""
    stmt = (
        select(verses.c.book_id, verses.c.chapter, verses.c.verse, verses.c.text)
        .where(
            verses.c.book_id == book_id,
            verses.c.chapter == chapter,
            verses.c.verse.in_(list(verse_numbers)),
        )
        .order_by(verses.c.verse)
    )
    return _records(conn, stmt)


def expand_location(
    conn: Connection,
    book_id: int,
    location: LocationDescriptor,
) -> Optional[list]:
    """
    Fetch the verses a location descriptor points at.

    Args:
        conn: Open store connection
        book_id: Catalog id of the resolved book
        location: Chapters plus optional verse subset

    Returns:
        List of VerseRecord (possibly empty), or None if the descriptor
        cannot be resolved (verse subset across several chapters)
    """
    if location.verses is None:
        return verses_by_chapters(conn, book_id, location.chapters)

    if len(location.chapters) == 1:
        return verses_in_chapter(conn, book_id, location.chapters[0], location.verses)

    logger.debug(
        f"Skipping location chapters={location.chapters} verses={location.verses}: "
        "verse subset spans several chapters"
    )
    return None
