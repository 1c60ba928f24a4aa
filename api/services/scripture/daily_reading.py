# api/services/scripture/daily_reading.py
"""
Verse of the day.

The calendar table maps (month, day) to one or more reference strings.
Each string goes through the same parser and resolver as /refs and the
resolved references are flattened into one list.
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.engine import Connection

from core.config import DAILY_TIMEZONE
from .reference_parser import parse
from .resolver import resolve_references
from .tables import daily

logger = logging.getLogger(__name__)


def system_today(tz_name: str = DAILY_TIMEZONE) -> date:
    """Today's date in the configured reading timezone."""
    return datetime.now(ZoneInfo(tz_name)).date()


def daily_references(conn: Connection, month: int, day: int) -> list:
    """Reference strings scheduled for a calendar day."""
    stmt = select(daily.c.verses).where(daily.c.month == month, daily.c.day == day)
    return [row.verses for row in conn.execute(stmt)]


class DailyReadingSelector:
    """
    Resolve the reading for the current day.

    Usage:
        selector = DailyReadingSelector(today=lambda: date(2024, 1, 1))
        results = selector.select(conn)
    """

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self.today = today or system_today

    def select(self, conn: Connection, on: Optional[date] = None) -> list:
        """
        Resolve every reading scheduled for a day.

        Args:
            conn: Open store connection
            on: Date to use instead of today

        Returns:
            Flat list of ResolvedReference (empty when nothing is scheduled
            or nothing resolves)
        """
        on = on or self.today()
        texts = daily_references(conn, on.month, on.day)
        if not texts:
            logger.info(f"No daily reading scheduled for {on.month:02d}-{on.day:02d}")
            return []

        results = []
        for text in texts:
            results.extend(resolve_references(conn, parse(text)))
        return results
