"""Quran content entities - immutable snapshots of store data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MushafType(Enum):
    """Text edition / page layout variant."""

    HAFS_1441 = "HAFS_1441"
    HAFS_1405 = "HAFS_1405"


@dataclass(frozen=True)
class Chapter:
    """A surah.

    Attributes:
        identifier: Stable identifier in the store.
        number: Chapter number, 1..114.
        is_meccan: True for Meccan chapters, False for Medinan.
        title: Transliterated title.
        arabic_title: Arabic title.
        english_title: English meaning of the title.
        title_code_point: Glyph code point used by the surah-name font.
        searchable_text: Normalized title used for search.
        searchable_keywords: Extra keywords used for search.
        verses_count: Number of verses.
        revelation_order: Position in revelation order (0 when unknown).
    """

    identifier: int
    number: int
    is_meccan: bool
    title: str
    arabic_title: str
    english_title: str
    title_code_point: str = ""
    searchable_text: str = ""
    searchable_keywords: str = ""
    verses_count: int = 0
    revelation_order: int = 0


@dataclass(frozen=True)
class Verse:
    """An ayah, identified by (chapter_number, number) and a global verse_id."""

    verse_id: int
    human_readable_id: str
    number: int
    text: str
    text_without_tashkil: str = ""
    uthmanic_hafs_text: str = ""
    hafs_smart_text: str = ""
    searchable_text: str = ""
    chapter_number: int = 0
    page_number: int = 0
    part_number: int = 0
    hizb_number: int = 0
    hizb_fraction: Optional[int] = None

    @property
    def verse_reference(self) -> str:
        return f"{self.chapter_number}:{self.number}"


@dataclass(frozen=True)
class Part:
    """A juz (1..30)."""

    identifier: int
    number: int
    arabic_title: str
    english_title: str


@dataclass(frozen=True)
class Quarter:
    """A quarter of a hizb, identified by (hizb_number, hizb_fraction 0..3)."""

    identifier: int
    hizb_number: int
    hizb_fraction: int
    arabic_title: str
    english_title: str
    part_number: int = 0


@dataclass(frozen=True)
class Page:
    identifier: int
    number: int
    is_right: bool


@dataclass(frozen=True)
class ChapterInfo:
    number: int
    arabic_title: str
    english_title: str


@dataclass(frozen=True)
class PageHeaderInfo:
    """Chapter / part / hizb context shown at the top of a page."""

    part_number: Optional[int] = None
    part_arabic_title: Optional[str] = None
    part_english_title: Optional[str] = None
    hizb_number: Optional[int] = None
    hizb_fraction: Optional[int] = None
    quarter_arabic_title: Optional[str] = None
    quarter_english_title: Optional[str] = None
    chapters: List[ChapterInfo] = field(default_factory=list)
