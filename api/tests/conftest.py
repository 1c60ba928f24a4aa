# api/tests/conftest.py
"""
Shared fixtures: a small SQLite corpus and a Flask test client.
"""

import os
import sys
from datetime import date

import pytest
from sqlalchemy import insert

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from server import create_app
from services.scripture import ScriptureService
from services.scripture.tables import books, daily, metadata, verses
from utils.db import create_store_engine


BOOKS = [
    {"id": 1, "book": "Бытие", "alt": "Genesis", "abbr": "Быт"},
    {"id": 2, "book": "Исход", "alt": "Exodus", "abbr": "Исх"},
    {"id": 43, "book": "От Иоанна", "alt": "John", "abbr": "Ин"},
    {"id": 45, "book": "К Римлянам", "alt": "Romans", "abbr": "Рим"},
]

GENESIS_1 = [
    "In the beginning God created the heaven and the earth.",
    "And the earth was without form, and void.",
    "And God said, Let there be light: and there was light.",
    "And God saw the light, that it was good.",
    "And God called the light Day, and the darkness he called Night.",
]

GENESIS_2 = [
    "Thus the heavens and the earth were finished.",
    "And on the seventh day God ended his work.",
    "And God blessed the seventh day.",
]

ROMANS_8 = [
    "There is therefore now no condemnation.",
    "For the law of the Spirit of life hath made me free.",
    "For what the law could not do, in that it was weak.",
    "That the righteousness of the law might be fulfilled in us.",
]

# Fifteen verses mentioning love, all in John 3
JOHN_3 = [f"Verse {n} of the chapter where God so loved the world." for n in range(1, 16)]

DAILY = [
    {"month": 1, "day": 1, "verses": "Gen 1:1-2"},
    {"month": 1, "day": 1, "verses": "Rom 8:1"},
    {"month": 2, "day": 14, "verses": "Nowhere 3:16"},
    {"month": 3, "day": 1, "verses": "Ин 3:16; Быт 1:1"},
]


def _verse_rows(book_id, chapter, texts):
    return [
        {"book_id": book_id, "chapter": chapter, "verse": n, "text": text}
        for n, text in enumerate(texts, start=1)
    ]


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite store seeded with a tiny corpus."""
    engine = create_store_engine(
        f"sqlite:///{tmp_path / 'bible.db'}",
        pool_size=2,
        max_overflow=0,
        pool_timeout=1,
    )
    metadata.create_all(engine)

    rows = (
        # Genesis 1 stored out of order so ordering has to come from the query
        list(reversed(_verse_rows(1, 1, GENESIS_1)))
        + _verse_rows(1, 2, GENESIS_2)
        + _verse_rows(43, 3, JOHN_3)
        + _verse_rows(45, 8, ROMANS_8)
    )
    with engine.begin() as conn:
        conn.execute(insert(books), BOOKS)
        conn.execute(insert(verses), rows)
        conn.execute(insert(daily), DAILY)

    yield engine
    engine.dispose()


@pytest.fixture
def conn(engine):
    with engine.connect() as connection:
        yield connection


@pytest.fixture
def service(engine):
    return ScriptureService(engine=engine, today=lambda: date(2024, 1, 1))


@pytest.fixture
def app(service):
    app = create_app(service=service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
