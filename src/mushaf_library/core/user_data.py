"""User-owned entities: bookmarks, reading positions, history, search, theme."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .quran_entities import MushafType

MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def now_millis() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


class SearchType(Enum):
    VERSE = "VERSE"
    CHAPTER = "CHAPTER"
    GENERAL = "GENERAL"


class ThemeMode(Enum):
    LIGHT = "LIGHT"
    DARK = "DARK"
    SYSTEM = "SYSTEM"


class ColorScheme(Enum):
    DEFAULT = "DEFAULT"
    GREEN = "GREEN"
    BLUE = "BLUE"
    SEPIA = "SEPIA"


@dataclass(frozen=True)
class ThemeConfig:
    mode: ThemeMode = ThemeMode.SYSTEM
    color_scheme: ColorScheme = ColorScheme.DEFAULT
    use_amoled: bool = False


@dataclass(frozen=True)
class Bookmark:
    """A user bookmark on a verse.

    Attributes:
        id: Opaque identifier assigned by the bookmark repository.
        chapter_number: Chapter of the bookmarked verse.
        verse_number: Verse number within the chapter.
        page_number: Page the verse appears on.
        created_at: Epoch milliseconds.
        note: Free-text note (may be empty).
        tags: User tags.
    """

    id: str
    chapter_number: int
    verse_number: int
    page_number: int
    created_at: int
    note: str = ""
    tags: List[str] = field(default_factory=list)

    @property
    def verse_reference(self) -> str:
        return f"{self.chapter_number}:{self.verse_number}"

    @property
    def has_note(self) -> bool:
        return bool(self.note.strip())

    @property
    def has_tags(self) -> bool:
        return bool(self.tags)


@dataclass(frozen=True)
class LastReadPosition:
    """Resume point; at most one per mushaf type."""

    mushaf_type: MushafType
    chapter_number: int
    verse_number: int
    page_number: int
    last_read_at: int
    scroll_position: float = 0.0

    @property
    def verse_reference(self) -> str:
        return f"{self.chapter_number}:{self.verse_number}"

    def is_recent(self, now: Optional[int] = None) -> bool:
        """True if read within the last 7 days."""
        now = now_millis() if now is None else now
        return self.last_read_at > now - 7 * MILLIS_PER_DAY


@dataclass(frozen=True)
class ReadingHistory:
    id: str
    chapter_number: int
    verse_number: int
    page_number: int
    timestamp: int
    duration_seconds: int
    mushaf_type: MushafType

    @property
    def verse_reference(self) -> str:
        return f"{self.chapter_number}:{self.verse_number}"

    @property
    def duration_minutes(self) -> int:
        return self.duration_seconds // 60


@dataclass(frozen=True)
class ReadingStats:
    """Aggregates computed on demand from reading sessions. Streaks count days."""

    total_reading_time_seconds: int
    total_pages_read: int
    total_chapters_read: int
    total_verses_read: int
    most_read_chapter: Optional[int]
    current_streak: int
    longest_streak: int
    average_daily_minutes: int

    @property
    def total_reading_time_minutes(self) -> int:
        return self.total_reading_time_seconds // 60

    @property
    def total_reading_time_hours(self) -> int:
        return self.total_reading_time_minutes // 60


@dataclass(frozen=True)
class SearchHistoryEntry:
    id: str
    query: str
    timestamp: int
    result_count: int
    search_type: SearchType


@dataclass(frozen=True)
class SearchSuggestion:
    query: str
    frequency: int
    last_searched: int
