# api/services/scripture/__init__.py
"""
Scripture lookup services.

This package provides:
- ScriptureService: Unified interface used by the HTTP routes
- parse: Free text to ParsedReference list
- match_book: Fuzzy book name lookup in the catalog
- expand_location: Location descriptor to verse rows
- resolve_references: Parsed references to ResolvedReference list
- DailyReadingSelector: Calendar-driven verse of the day
- search_verses: Regex text search with pagination
"""

from .reference_parser import (
    LocationDescriptor,
    ParsedReference,
    parse,
)
from .book_matcher import BookCatalogEntry, match_book
from .location_expander import (
    VerseRecord,
    expand_location,
    verses_by_chapters,
    verses_in_chapter,
)
from .resolver import ResolvedReference, resolve_reference, resolve_references
from .daily_reading import DailyReadingSelector, system_today
from .search import (
    MAX_PAGE,
    PAGE_SIZE,
    InvalidPattern,
    SearchPage,
    clamp_page,
    search_verses,
    total_pages,
    validate_pattern,
)
from .scripture_service import ScriptureService

__all__ = [
    # Unified Service (primary interface)
    "ScriptureService",
    # Parsing
    "LocationDescriptor",
    "ParsedReference",
    "parse",
    # Resolution
    "BookCatalogEntry",
    "match_book",
    "VerseRecord",
    "expand_location",
    "verses_by_chapters",
    "verses_in_chapter",
    "ResolvedReference",
    "resolve_reference",
    "resolve_references",
    # Daily reading
    "DailyReadingSelector",
    "system_today",
    # Search
    "MAX_PAGE",
    "PAGE_SIZE",
    "InvalidPattern",
    "SearchPage",
    "clamp_page",
    "search_verses",
    "total_pages",
    "validate_pattern",
]
