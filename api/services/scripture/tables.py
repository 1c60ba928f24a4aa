# api/services/scripture/tables.py
"""
Table definitions for the verse corpus.

The corpus is read-only from this service's side; these objects exist
so queries can be composed with SQLAlchemy Core instead of raw SQL.
"""

from sqlalchemy import Column, MetaData, SmallInteger, Table, Text

from core.config import BOOKS_TABLE, DAILY_TABLE, VERSES_TABLE

metadata = MetaData()

# Book catalog: canonical name, alternate name, abbreviation
books = Table(
    BOOKS_TABLE,
    metadata,
    Column("id", SmallInteger, primary_key=True),
    Column("book", Text, nullable=False),
    Column("alt", Text),
    Column("abbr", Text),
)

# Verse corpus
verses = Table(
    VERSES_TABLE,
    metadata,
    Column("book_id", SmallInteger, nullable=False),
    Column("chapter", SmallInteger, nullable=False),
    Column("verse", SmallInteger, nullable=False),
    Column("text", Text, nullable=False),
)

# Daily reading calendar: one or more reference strings per day
daily = Table(
    DAILY_TABLE,
    metadata,
    Column("month", SmallInteger, nullable=False),
    Column("day", SmallInteger, nullable=False),
    Column("verses", Text, nullable=False),
)


def matches(column, pattern: str):
    """
    Case-insensitive, unanchored regex match on a text column.

    The inline (?i) flag is understood by both PostgreSQL regexes
    (rendered with ~) and Python's re (SQLite REGEXP).
    """
    return column.regexp_match(icase(pattern))


def icase(pattern: str) -> str:
    return f"(?i){pattern}"
