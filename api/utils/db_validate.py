"""
Verse Store Validation Utility

Checks that the corpus tables this service reads exist with the columns
the queries need, and that the data is internally consistent. Read-only:
nothing is created or repaired.

Usage:
    python -m utils.db_validate [--verbose] [--summary]
"""

import sys

from sqlalchemy import func, inspect, select

from core.config import BOOKS_TABLE, DAILY_TABLE, VERSES_TABLE
from utils.db import connect, get_engine


# Required columns for each table
REQUIRED_COLUMNS = {
    BOOKS_TABLE: ["id", "book", "alt", "abbr"],
    VERSES_TABLE: ["book_id", "chapter", "verse", "text"],
    DAILY_TABLE: ["month", "day", "verses"],
}


def validate_schema(engine=None, verbose: bool = False) -> tuple[bool, list]:
    """
    Validate the store schema.

    Returns:
        Tuple of (is_valid, list of issues)
    """
    engine = engine or get_engine()
    issues = []

    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())

    if verbose:
        print(f"Found {len(existing_tables)} tables")

    for table, required_cols in REQUIRED_COLUMNS.items():
        if table not in existing_tables:
            issues.append(f"Missing table: {table}")
            continue

        columns = {col["name"] for col in inspector.get_columns(table)}
        for col in required_cols:
            if col not in columns:
                issues.append(f"Missing column: {table}.{col}")

    return len(issues) == 0, issues


def validate_data(engine=None, verbose: bool = False) -> tuple[bool, list]:
    """
    Validate data consistency. Assumes the schema is valid.

    Returns:
        Tuple of (is_valid, list of issues)
    """
    # Imported here so a broken schema still reports cleanly
    from services.scripture.tables import books, daily, verses

    issues = []

    with connect(engine) as conn:
        # Verses pointing at books missing from the catalog
        orphaned = conn.execute(
            select(func.count())
            .select_from(verses.outerjoin(books, verses.c.book_id == books.c.id))
            .where(books.c.id.is_(None))
        ).scalar_one()
        if orphaned:
            issues.append(f"Found {orphaned} verses with no catalog book")

        # Calendar rows with impossible dates
        bad_dates = conn.execute(
            select(func.count())
            .select_from(daily)
            .where(
                (daily.c.month < 1) | (daily.c.month > 12)
                | (daily.c.day < 1) | (daily.c.day > 31)
            )
        ).scalar_one()
        if bad_dates:
            issues.append(f"Found {bad_dates} daily readings with an invalid month/day")

        if verbose:
            days = conn.execute(
                select(func.count()).select_from(
                    select(daily.c.month, daily.c.day).distinct().subquery()
                )
            ).scalar_one()
            print(f"Daily readings cover {days} calendar days")

    return len(issues) == 0, issues


def print_summary(engine=None):
    """Print store summary statistics."""
    engine = engine or get_engine()
    tables = inspect(engine).get_table_names()

    print("\nStore Summary")
    print("=" * 40)

    from services.scripture.tables import metadata

    with connect(engine) as conn:
        for name in sorted(REQUIRED_COLUMNS):
            if name not in tables:
                print(f"  {name}: MISSING")
                continue
            count = conn.execute(
                select(func.count()).select_from(metadata.tables[name])
            ).scalar_one()
            print(f"  {name}: {count} rows")


def main():
    """CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Verse Store Validation Utility"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed output"
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Show store summary"
    )

    args = parser.parse_args()

    print("Verse Store Validation")
    print("=" * 40)

    # Schema validation
    print("\nValidating schema...")
    schema_valid, schema_issues = validate_schema(verbose=args.verbose)

    if schema_valid:
        print("  Schema: OK")
    else:
        print("  Schema: ISSUES FOUND")
        for issue in schema_issues:
            print(f"    - {issue}")

    # Data validation only makes sense on a complete schema
    data_valid = True
    if schema_valid:
        print("\nValidating data consistency...")
        data_valid, data_issues = validate_data(verbose=args.verbose)

        if data_valid:
            print("  Data: OK")
        else:
            print("  Data: ISSUES FOUND")
            for issue in data_issues:
                print(f"    - {issue}")

    # Summary
    if args.summary:
        print_summary()

    # Exit status
    all_valid = schema_valid and data_valid
    print()
    if all_valid:
        print("Validation passed.")
        sys.exit(0)
    else:
        print("Validation failed. See issues above.")
        sys.exit(1)


if __name__ == "__main__":
    main()
