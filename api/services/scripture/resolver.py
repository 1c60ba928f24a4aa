# api/services/scripture/resolver.py
"""
Resolve parsed references into verse groups.

For every reference whose book is found in the catalog, each location is
expanded in order and the resolvable ones become verse groups. References
with an unknown book are left out of the result entirely; a known book
with nothing resolvable still appears, with an empty texts list.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.engine import Connection

from .book_matcher import match_book
from .location_expander import expand_location

logger = logging.getLogger(__name__)


@dataclass
class ResolvedReference:
    """
    A reference bound to a catalog book, with its verse groups.

    Attributes:
        book_id: Catalog id
        display_name: Canonical book title
        display_alt: Alternate book title
        verse_groups: One list of VerseRecord per resolvable location
    """
    book_id: int
    display_name: Optional[str] = None
    display_alt: Optional[str] = None
    verse_groups: list = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "reference": {"title": self.display_name, "alt": self.display_alt},
            "texts": [
                [record.to_dict() for record in group]
                for group in self.verse_groups
            ],
        }


def resolve_reference(conn: Connection, ref) -> Optional[ResolvedReference]:
    """
    Resolve a single ParsedReference.

    Returns:
        ResolvedReference, or None when the book is not in the catalog
    """
    entry = match_book(conn, ref.book_name)
    if entry is None:
        return None

    resolved = ResolvedReference(
        book_id=entry.id,
        display_name=entry.canonical_name,
        display_alt=entry.alt_name,
    )
    for location in ref.locations:
        group = expand_location(conn, entry.id, location)
        if group is not None:
            resolved.verse_groups.append(group)

    return resolved


def resolve_references(conn: Connection, refs) -> list:
    """
    Resolve parsed references, keeping input order and dropping unknown books.

    Args:
        conn: Open store connection
        refs: Sequence of ParsedReference

    Returns:
        List of ResolvedReference
    """
    results = []
    for ref in refs:
        resolved = resolve_reference(conn, ref)
        if resolved is None:
            logger.debug(f"Dropping reference {ref.original or ref.book_name!r}: unknown book")
            continue
        results.append(resolved)
    return results
