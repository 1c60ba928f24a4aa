# api/services/scripture/book_matcher.py
"""
Resolve a typed book name against the book catalog.

The name is used as a case-insensitive, unanchored regular expression
against the canonical name, the alternate name and the abbreviation.
"Быт" therefore matches "Бытие", and so does any name the pattern finds
inside a longer catalog value. The first catalog row wins.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.engine import Connection

from .tables import books, matches

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookCatalogEntry:
    id: int
    canonical_name: str
    alt_name: Optional[str] = None
    abbreviation: Optional[str] = None


def match_book(conn: Connection, name: str) -> Optional[BookCatalogEntry]:
    """
    Find the catalog entry for a book name.

    Args:
        conn: Open store connection
        name: Book name as typed, e.g. "Gen", "1 Кор"

    Returns:
        The first matching BookCatalogEntry, or None when nothing matches
    """
    if not name:
        return None

    stmt = (
        select(books.c.id, books.c.book, books.c.alt, books.c.abbr)
        .where(or_(
            matches(books.c.book, name),
            matches(books.c.alt, name),
            matches(books.c.abbr, name),
        ))
        .order_by(books.c.id)
        .limit(1)
    )
    row = conn.execute(stmt).first()
    if row is None:
        logger.debug(f"No catalog match for book {name!r}")
        return None

    return BookCatalogEntry(
        id=row.id,
        canonical_name=row.book,
        alt_name=row.alt,
        abbreviation=row.abbr,
    )
