"""Domain layer - Pure entities for Quran content and user data."""

from .backup import (
    BACKUP_FORMAT_VERSION,
    BookmarkData,
    ImportResult,
    LastReadPositionData,
    PreferencesData,
    SearchHistoryData,
    UserDataBackup,
)
from .chapter_groupings import ChaptersByHizb, ChaptersByPart, ChaptersByQuarter, ChaptersByType
from .quran_entities import (
    Chapter,
    ChapterInfo,
    MushafType,
    Page,
    PageHeaderInfo,
    Part,
    Quarter,
    Verse,
)
from .reciter import AyahTiming, ChapterTiming, ReciterInfo, ReciterTiming
from .user_data import (
    Bookmark,
    ColorScheme,
    LastReadPosition,
    ReadingHistory,
    ReadingStats,
    SearchHistoryEntry,
    SearchSuggestion,
    SearchType,
    ThemeConfig,
    ThemeMode,
    now_millis,
)

__all__ = [
    "BACKUP_FORMAT_VERSION",
    "AyahTiming",
    "Bookmark",
    "BookmarkData",
    "Chapter",
    "ChapterInfo",
    "ChapterTiming",
    "ChaptersByHizb",
    "ChaptersByPart",
    "ChaptersByQuarter",
    "ChaptersByType",
    "ColorScheme",
    "ImportResult",
    "LastReadPosition",
    "LastReadPositionData",
    "MushafType",
    "Page",
    "PageHeaderInfo",
    "Part",
    "PreferencesData",
    "Quarter",
    "ReadingHistory",
    "ReadingStats",
    "ReciterInfo",
    "ReciterTiming",
    "SearchHistoryData",
    "SearchHistoryEntry",
    "SearchSuggestion",
    "SearchType",
    "ThemeConfig",
    "ThemeMode",
    "UserDataBackup",
    "Verse",
    "now_millis",
]
