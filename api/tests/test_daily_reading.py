"""Tests for the verse of the day."""

from datetime import date

from services.scripture.daily_reading import (
    DailyReadingSelector,
    daily_references,
    system_today,
)


def test_calendar_lookup(conn):
    assert daily_references(conn, 1, 1) == ["Gen 1:1-2", "Rom 8:1"]
    assert daily_references(conn, 7, 4) == []


def test_flattens_all_readings_for_the_day(conn):
    selector = DailyReadingSelector(today=lambda: date(2024, 1, 1))
    results = selector.select(conn)
    assert [r.book_id for r in results] == [1, 45]
    assert [[v.verse for v in g] for g in results[0].verse_groups] == [[1, 2]]
    assert [[v.verse for v in g] for g in results[1].verse_groups] == [[1]]


def test_reading_with_several_references(conn):
    selector = DailyReadingSelector(today=lambda: date(2023, 3, 1))
    results = selector.select(conn)
    assert [r.book_id for r in results] == [43, 1]


def test_unresolvable_reading_contributes_nothing(conn):
    selector = DailyReadingSelector(today=lambda: date(2024, 2, 14))
    assert selector.select(conn) == []


def test_day_without_calendar_row(conn):
    selector = DailyReadingSelector(today=lambda: date(2024, 5, 5))
    assert selector.select(conn) == []


def test_explicit_date_overrides_clock(conn):
    selector = DailyReadingSelector(today=lambda: date(2024, 5, 5))
    assert len(selector.select(conn, on=date(2020, 1, 1))) == 2


def test_system_today_uses_timezone():
    assert isinstance(system_today("UTC"), date)


def test_default_clock():
    assert DailyReadingSelector().today is system_today
