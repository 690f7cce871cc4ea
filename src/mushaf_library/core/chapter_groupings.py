"""Derived chapter groupings held by the chapters cache. Never persisted."""

from dataclasses import dataclass
from typing import List, Optional

from .quran_entities import Chapter, Verse


@dataclass(frozen=True)
class ChaptersByPart:
    id: int
    part_number: int
    arabic_title: str
    english_title: str
    chapters: List[Chapter]
    first_page: Optional[int]
    first_verse: Optional[Verse]


@dataclass(frozen=True)
class ChaptersByQuarter:
    id: int
    quarter_number: int
    hizb_number: int
    hizb_fraction: int
    arabic_title: str
    english_title: str
    chapters: List[Chapter]
    first_page: Optional[int]
    first_verse: Optional[Verse]


@dataclass(frozen=True)
class ChaptersByHizb:
    id: int
    hizb_number: int
    quarters: List[ChaptersByQuarter]


@dataclass(frozen=True)
class ChaptersByType:
    """Meccan or Medinan chapters.

    first_page is a fixed placeholder (1) and first_verse is always None;
    the type grouping is built without touching the store.
    """

    id: str
    type: str
    arabic_type: str
    chapters: List[Chapter]
    first_page: Optional[int]
    first_verse: Optional[Verse]
