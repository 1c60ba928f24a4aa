# api/services/scripture/reference_parser.py
"""
Scripture reference parser.

Turns free text into structured references without consulting the
catalog; the book name is kept as typed and matched against the store
later. Handles:
- Chapters: "Gen 1", "Быт 1-3", "Rom 8, 12"
- Verses: "Gen 1:1", "Rom 8:1,3", "John 3:16-18"
- Several books: "Gen 1:1-3, Rom 8", "Быт 1; Ин 3:16"
- Several places in one book: "Gen 1:1; 2:3"
- Numbered books: "1 John 3", "1Кор 13", "II Kings 2"

Anything that does not look like a reference is ignored; parse() never
raises.
"""

import re
from dataclasses import dataclass
from typing import Optional

# Chapter and verse numbers above this are treated as noise
MAX_NUMBER = 255

_DASH = r"[-–—]"

# A book token directly followed by numbers joined with separators.
# A number that opens the next numbered book ("...; 1 John 3") is not
# part of the location.
_REFERENCE_RE = re.compile(
    r"(?P<book>(?:[1-3]\s*|I{1,3}\s+)?[^\W\d_]+)\.?\s*"
    rf"(?P<loc>\d+(?:\s*[:,;]\s*\d+(?!\s*[^\W\d_]+\.?\s*\d)|\s*{_DASH}\s*\d+)*)"
)

_CROSS_CHAPTER_RE = re.compile(rf"^(\d+):(\d+){_DASH}(\d+):(\d+)$")
_CHAPTER_VERSES_RE = re.compile(rf"^(\d+):(\d+)(?:{_DASH}(\d+))?$")
_NUMBERS_RE = re.compile(rf"^(\d+)(?:{_DASH}(\d+))?$")

_ROMAN = {"I": "1", "II": "2", "III": "3"}


@dataclass(frozen=True)
class LocationDescriptor:
    """
    The chapter/verse part of a reference.

    Attributes:
        chapters: Chapter numbers, never empty
        verses: Verse numbers, or None for whole chapters
    """
    chapters: tuple
    verses: Optional[tuple] = None

    @property
    def is_resolvable(self) -> bool:
        """Verse subsets only make sense inside a single chapter."""
        return self.verses is None or len(self.chapters) == 1


@dataclass(frozen=True)
class ParsedReference:
    """
    A book name plus the places in it the caller asked for.

    Attributes:
        book_name: Book name as typed (whitespace and roman numerals normalized)
        locations: Location descriptors in input order
        original: The slice of input this reference came from
    """
    book_name: str
    locations: tuple
    original: str = ""


def _span(start: int, end: Optional[int]) -> Optional[list]:
    if end is None:
        end = start
    if start > end:
        start, end = end, start
    if start < 1 or end > MAX_NUMBER:
        return None
    return list(range(start, end + 1))


def _ordered(numbers) -> tuple:
    return tuple(sorted(set(numbers)))


def _normalize_book(name: str) -> str:
    name = re.sub(r"\s+", " ", name.strip())
    head, _, rest = name.partition(" ")
    if rest and head in _ROMAN:
        return f"{_ROMAN[head]} {rest}"
    return name


def _parse_group(group: str) -> list:
    """
    Parse one ';'-separated group of locations.

    A bare number following a chapter:verse segment is another verse in
    that chapter ("8:1,3"); otherwise it is a chapter ("8, 12").
    """
    pending = []  # [chapters, verses-or-None]
    in_verses = False

    for segment in group.split(","):
        segment = re.sub(r"\s+", "", segment)
        if not segment:
            continue

        match = _CROSS_CHAPTER_RE.match(segment)
        if match:
            c1, v1, c2, v2 = (int(g) for g in match.groups())
            if c1 == c2:
                verses = _span(v1, v2)
                if verses is None or _span(c1, None) is None:
                    continue
                pending.append([[c1], verses])
            else:
                chapters = _span(c1, c2)
                if chapters is None or _span(v1, None) is None or _span(v2, None) is None:
                    continue
                pending.append([chapters, [v1, v2]])
            in_verses = c1 == c2
            continue

        match = _CHAPTER_VERSES_RE.match(segment)
        if match:
            chapter = int(match.group(1))
            verses = _span(int(match.group(2)), int(match.group(3)) if match.group(3) else None)
            if verses is None or _span(chapter, None) is None:
                in_verses = False
                continue
            pending.append([[chapter], verses])
            in_verses = True
            continue

        match = _NUMBERS_RE.match(segment)
        if match:
            numbers = _span(int(match.group(1)), int(match.group(2)) if match.group(2) else None)
            if numbers is None:
                continue
            if in_verses:
                pending[-1][1].extend(numbers)
            else:
                pending.append([numbers, None])

    return [
        LocationDescriptor(
            chapters=_ordered(chapters),
            verses=_ordered(verses) if verses is not None else None,
        )
        for chapters, verses in pending
    ]


def parse(text: str) -> list:
    """
    Parse free text into scripture references.

    Args:
        text: Query text, e.g. "Gen 1:1-3, Rom 8"

    Returns:
        List of ParsedReference in input order (empty if nothing parsed)
    """
    if not text:
        return []

    refs = []
    for match in _REFERENCE_RE.finditer(text):
        locations = []
        for group in match.group("loc").split(";"):
            locations.extend(_parse_group(group))
        if not locations:
            continue
        refs.append(ParsedReference(
            book_name=_normalize_book(match.group("book")),
            locations=tuple(locations),
            original=match.group(0).strip(" \t,;"),
        ))

    return refs
