# api/services/scripture/search.py
"""
Regex full-text search over verse bodies with page-based pagination.

Pages are fixed at PAGE_SIZE rows. The total page count is derived from
a COUNT over the same filter, so a page past the end is simply empty.
"""

import logging
import math
from dataclasses import dataclass, field

import regex
from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from .tables import books, icase, matches, verses

logger = logging.getLogger(__name__)

PAGE_SIZE = 10

# Page numbers are 16-bit; anything outside 1..MAX_PAGE means the first page
MAX_PAGE = 32767


class InvalidPattern(ValueError):
    """The search text is not a usable regular expression."""
    pass


@dataclass
class SearchPage:
    """
    One page of search results.

    Attributes:
        query_text: The pattern searched for
        page_number: Page served (1-based, after clamping)
        total_pages: Pages available for this pattern
        total_rows: Matching verses overall
        rows: Joined verse + book rows for this page
    """
    query_text: str
    page_number: int
    total_pages: int
    total_rows: int = 0
    rows: list = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "meta": {
                "text": self.query_text,
                "page": self.page_number,
                "total": self.total_pages,
                "count": self.total_rows,
            },
            "results": [self.rows],
        }


def clamp_page(page) -> int:
    """Missing, non-positive or oversized pages mean the first page."""
    if page is None or page < 1 or page > MAX_PAGE:
        return 1
    return page


def total_pages(total_rows: int, page_size: int = PAGE_SIZE) -> int:
    """Ceiling of total_rows / page_size; 0 rows means 0 pages."""
    return int(math.ceil(total_rows / page_size))


def validate_pattern(text: str) -> None:
    """
    Reject patterns the regex engine cannot compile.

    Raises:
        InvalidPattern: If the pattern does not compile
    """
    try:
        regex.compile(icase(text))
    except regex.error as e:
        raise InvalidPattern(f"Invalid search pattern {text!r}: {e}") from e


def count_matches(conn: Connection, text: str) -> int:
    stmt = select(func.count(verses.c.book_id)).where(matches(verses.c.text, text))
    return conn.execute(stmt).scalar_one()


def fetch_page(conn: Connection, text: str, offset: int, limit: int = PAGE_SIZE) -> list:
    """Joined verse rows for one page, ordered by book, chapter, verse."""
    stmt = (
        select(
            verses.c.book_id,
            verses.c.text,
            verses.c.chapter,
            verses.c.verse,
            books.c.book.label("book_name"),
            books.c.alt.label("book_alt"),
        )
        .select_from(verses.outerjoin(books, verses.c.book_id == books.c.id))
        .where(matches(verses.c.text, text))
        .order_by(verses.c.book_id, verses.c.chapter, verses.c.verse)
        .limit(limit)
        .offset(offset)
    )
    return [dict(row) for row in conn.execute(stmt).mappings()]


def search_verses(conn: Connection, text: str, page: int = 1) -> SearchPage:
    """
    Search verse text and return one page of results.

    Args:
        conn: Open store connection
        text: Regular expression, matched case-insensitively
        page: Requested page; values below 1 are treated as 1

    Returns:
        SearchPage (rows empty and total_pages 0 when nothing matches)
    """
    page = clamp_page(page)
    total = count_matches(conn, text)
    if total == 0:
        return SearchPage(query_text=text, page_number=page, total_pages=0)

    offset = (page - 1) * PAGE_SIZE
    rows = fetch_page(conn, text, offset)
    logger.debug(f"Search {text!r}: {total} matches, page {page} has {len(rows)} rows")

    return SearchPage(
        query_text=text,
        page_number=page,
        total_pages=total_pages(total),
        total_rows=total,
        rows=rows,
    )
