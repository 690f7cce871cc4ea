"""Composition root: builds and wires every store, cache, service and repository."""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QSettings

from mushaf_library.errors import NotInitializedError
from mushaf_library.io import DatabaseManager, SqliteStoreService, StoreService
from mushaf_library.repositories import (
    AudioRepository,
    BookmarkRepository,
    ChapterRepository,
    DataExportRepository,
    PageRepository,
    PreferencesRepository,
    QuranRepository,
    ReadingHistoryRepository,
    ReciterPreferencesRepository,
    SearchHistoryRepository,
    ThemeRepository,
    VerseRepository,
    open_settings,
)
from mushaf_library.services import (
    AyahTimingService,
    ChaptersDataCache,
    PageCacheService,
    ReciterService,
    SettingsManager,
)

logger = logging.getLogger(__name__)


class MushafContainer:
    """
    Owns one instance of every component and hands them out.

    Anything not passed explicitly is built from ``settings``: the database
    from ``MUSHAF_DB_PATH``, preferences from ``MUSHAF_PREFERENCES_PATH`` and
    reciter timings from ``MUSHAF_TIMING_DIR``. When ``store`` is given it is
    used for Quran content while user data still lives in ``database``.

    Accessors raise NotInitializedError until ``initialize()`` has completed.
    """

    def __init__(
        self,
        settings: Optional[SettingsManager] = None,
        database: Optional[DatabaseManager] = None,
        store: Optional[StoreService] = None,
        preferences_settings: Optional[QSettings] = None,
        timing_dir: Optional[Path] = None,
    ) -> None:
        self._settings = settings
        self._database = database
        self._store = store
        self._qsettings = preferences_settings
        self._timing_dir = timing_dir
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Open the store and build everything in dependency order. Idempotent."""
        if self._initialized:
            return

        settings = self._settings or SettingsManager()
        if self._database is None:
            self._database = DatabaseManager(settings.get_database_path())
        self._database.ensure_schema()
        if self._store is None:
            self._store = SqliteStoreService(self._database)
        await self._store.initialize()

        if self._qsettings is None:
            self._qsettings = open_settings(settings.get_preferences_path())
        if self._timing_dir is None:
            self._timing_dir = settings.get_timing_dir()

        # Caches
        self._page_cache = PageCacheService(self._store)
        self._chapters_cache = ChaptersDataCache(self._store)

        # Preferences
        self._preferences = PreferencesRepository(self._qsettings)
        self._reciter_preferences = ReciterPreferencesRepository(self._qsettings)
        self._theme = ThemeRepository(self._qsettings)

        # Audio metadata
        self._timing_service = AyahTimingService(self._timing_dir)
        self._reciter_service = ReciterService(self._timing_service, self._reciter_preferences)

        # Content repositories
        self._quran = QuranRepository(self._store, self._chapters_cache, self._page_cache)
        self._chapters = ChapterRepository(self._store, self._chapters_cache)
        self._pages = PageRepository(self._store, self._page_cache)
        self._verses = VerseRepository(self._store, self._page_cache)
        self._audio = AudioRepository(self._reciter_service, self._timing_service)

        # User data repositories
        connection = self._database.connection
        self._bookmarks = BookmarkRepository(connection)
        self._reading_history = ReadingHistoryRepository(connection)
        self._search_history = SearchHistoryRepository(connection)
        self._data_export = DataExportRepository(
            bookmarks=self._bookmarks,
            reading_history=self._reading_history,
            search_history=self._search_history,
            preferences=self._preferences,
            reciter_preferences=self._reciter_preferences,
            theme=self._theme,
        )

        self._initialized = True
        logger.info("Container initialized")

    def close(self) -> None:
        """Flush preferences and close the database."""
        if self._qsettings is not None:
            self._qsettings.sync()
        if self._database is not None:
            self._database.close()
        self._initialized = False

    def _require(self, attribute: str):
        if not self._initialized:
            raise NotInitializedError("MushafContainer.initialize() has not been called")
        return getattr(self, attribute)

    @property
    def database(self) -> DatabaseManager:
        return self._require("_database")

    @property
    def store(self) -> StoreService:
        return self._require("_store")

    @property
    def page_cache(self) -> PageCacheService:
        return self._require("_page_cache")

    @property
    def chapters_cache(self) -> ChaptersDataCache:
        return self._require("_chapters_cache")

    @property
    def quran_repository(self) -> QuranRepository:
        return self._require("_quran")

    @property
    def chapter_repository(self) -> ChapterRepository:
        return self._require("_chapters")

    @property
    def page_repository(self) -> PageRepository:
        return self._require("_pages")

    @property
    def verse_repository(self) -> VerseRepository:
        return self._require("_verses")

    @property
    def audio_repository(self) -> AudioRepository:
        return self._require("_audio")

    @property
    def bookmark_repository(self) -> BookmarkRepository:
        return self._require("_bookmarks")

    @property
    def reading_history_repository(self) -> ReadingHistoryRepository:
        return self._require("_reading_history")

    @property
    def search_history_repository(self) -> SearchHistoryRepository:
        return self._require("_search_history")

    @property
    def preferences_repository(self) -> PreferencesRepository:
        return self._require("_preferences")

    @property
    def reciter_preferences_repository(self) -> ReciterPreferencesRepository:
        return self._require("_reciter_preferences")

    @property
    def theme_repository(self) -> ThemeRepository:
        return self._require("_theme")

    @property
    def data_export_repository(self) -> DataExportRepository:
        return self._require("_data_export")
