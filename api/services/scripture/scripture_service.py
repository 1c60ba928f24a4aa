# api/services/scripture/scripture_service.py
"""
Single entry point for the scripture endpoints.

Each call borrows one pooled connection for its whole run, so a request
sees one consistent connection and one deadline.
"""

import logging
from datetime import date
from typing import Callable, Optional

from sqlalchemy.engine import Engine

from utils.db import connect
from .daily_reading import DailyReadingSelector
from .reference_parser import parse
from .resolver import resolve_references
from .search import SearchPage, search_verses

logger = logging.getLogger(__name__)


class ScriptureService:
    """
    Reference lookup, verse of the day and text search.

    Usage:
        service = ScriptureService()

        for ref in service.lookup("Gen 1:1-3, Rom 8"):
            print(ref.display_name, len(ref.verse_groups))

        page = service.search("love", page=2)
        print(page.total_pages)
    """

    def __init__(
        self,
        engine: Optional[Engine] = None,
        today: Optional[Callable[[], date]] = None,
        timeout: Optional[float] = None,
    ):
        self.engine = engine
        self.timeout = timeout
        self.daily_selector = DailyReadingSelector(today=today)

    def _connect(self):
        return connect(self.engine, timeout=self.timeout)

    def lookup(self, text: str) -> list:
        """
        Resolve free-text references.

        Returns:
            List of ResolvedReference in input order
        """
        refs = parse(text)
        with self._connect() as conn:
            return resolve_references(conn, refs)

    def daily(self) -> list:
        """Resolved references scheduled for today."""
        with self._connect() as conn:
            return self.daily_selector.select(conn)

    def search(self, text: str, page: int = 1) -> SearchPage:
        """One page of verses whose text matches the pattern."""
        with self._connect() as conn:
            return search_verses(conn, text, page)
