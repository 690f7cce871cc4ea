"""Repositories - the public data access surface over store, caches and user data."""

from .audio_repository import AudioRepository
from .bookmark_repository import BookmarkRepository
from .chapter_repository import ChapterRepository
from .data_export_repository import DataExportRepository
from .page_repository import PageRepository
from .preferences_repository import (
    PreferencesRepository,
    ReciterPreferencesRepository,
    ThemeRepository,
    open_settings,
)
from .quran_repository import QuranRepository
from .reading_history_repository import ReadingHistoryRepository
from .search_history_repository import SearchHistoryRepository
from .verse_repository import VerseRepository

__all__ = [
    "AudioRepository",
    "BookmarkRepository",
    "ChapterRepository",
    "DataExportRepository",
    "PageRepository",
    "PreferencesRepository",
    "QuranRepository",
    "ReadingHistoryRepository",
    "ReciterPreferencesRepository",
    "SearchHistoryRepository",
    "ThemeRepository",
    "VerseRepository",
    "open_settings",
]
