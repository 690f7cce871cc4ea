"""Backup and restore of user data (bookmarks, positions, search history, preferences)."""

import json
import logging
from typing import Optional

from mushaf_library.core import (
    BACKUP_FORMAT_VERSION,
    BookmarkData,
    ColorScheme,
    ImportResult,
    LastReadPositionData,
    MushafType,
    PreferencesData,
    SearchHistoryData,
    SearchType,
    ThemeMode,
    UserDataBackup,
    now_millis,
)

from .bookmark_repository import BookmarkRepository
from .preferences_repository import (
    PreferencesRepository,
    ReciterPreferencesRepository,
    ThemeRepository,
)
from .reading_history_repository import ReadingHistoryRepository
from .search_history_repository import SearchHistoryRepository

logger = logging.getLogger(__name__)

EXPORT_SEARCH_LIMIT = 500


class DataExportRepository:
    """
    Exports user data to a versioned backup and imports it back.

    Imports never raise: every failure is caught at the smallest scope (one
    bookmark, one position, one search entry, the preferences block) and
    reported in ``ImportResult.errors`` while the rest continues. Nothing is
    rolled back.
    """

    def __init__(
        self,
        bookmarks: BookmarkRepository,
        reading_history: ReadingHistoryRepository,
        search_history: SearchHistoryRepository,
        preferences: PreferencesRepository,
        reciter_preferences: ReciterPreferencesRepository,
        theme: ThemeRepository,
    ) -> None:
        self._bookmarks = bookmarks
        self._reading_history = reading_history
        self._search_history = search_history
        self._preferences = preferences
        self._reciter_preferences = reciter_preferences
        self._theme = theme

    async def export_user_data(self, include_history: bool = True) -> UserDataBackup:
        """
        Snapshot the user's data.

        Args:
            include_history: Include up to 500 most recent search entries.

        Returns:
            UserDataBackup: The backup envelope. ``preferences`` is None when
                they could not be read.
        """
        bookmarks = [
            BookmarkData(
                chapter_number=b.chapter_number,
                verse_number=b.verse_number,
                page_number=b.page_number,
                created_at=b.created_at,
                note=b.note,
                tags=list(b.tags),
            )
            for b in await self._bookmarks.get_all_bookmarks()
        ]

        positions = []
        for mushaf_type in MushafType:
            position = await self._reading_history.get_last_read_position(mushaf_type)
            if position is None:
                continue
            positions.append(
                LastReadPositionData(
                    mushaf_type=position.mushaf_type.value,
                    chapter_number=position.chapter_number,
                    verse_number=position.verse_number,
                    page_number=position.page_number,
                    last_read_at=position.last_read_at,
                    scroll_position=position.scroll_position,
                )
            )

        searches = []
        if include_history:
            searches = [
                SearchHistoryData(
                    query=s.query,
                    timestamp=s.timestamp,
                    result_count=s.result_count,
                    search_type=s.search_type.value,
                )
                for s in await self._search_history.get_recent_searches(EXPORT_SEARCH_LIMIT)
            ]

        try:
            preferences: Optional[PreferencesData] = await self._export_preferences()
        except Exception as e:
            logger.warning("Preferences left out of backup: %s", e)
            preferences = None

        backup = UserDataBackup(
            version=BACKUP_FORMAT_VERSION,
            timestamp=now_millis(),
            bookmarks=bookmarks,
            last_read_positions=positions,
            search_history=searches,
            preferences=preferences,
        )
        logger.info(
            "Exported %d bookmarks, %d positions, %d searches",
            len(bookmarks),
            len(positions),
            len(searches),
        )
        return backup

    async def export_to_json(self, include_history: bool = True) -> str:
        backup = await self.export_user_data(include_history)
        return json.dumps(backup.to_dict(), ensure_ascii=False, indent=2)

    async def import_user_data(
        self, backup: UserDataBackup, merge_with_existing: bool = False
    ) -> ImportResult:
        """
        Restore a backup.

        Args:
            backup: The backup to restore.
            merge_with_existing: When False, bookmarks and search history are
                deleted first. Last-read positions are never cleared.

        Returns:
            ImportResult: Per-category counts and the collected error messages.
        """
        result = ImportResult()

        if not merge_with_existing:
            try:
                await self._bookmarks.delete_all_bookmarks()
                await self._search_history.clear_search_history()
            except Exception as e:
                result.errors.append(f"Failed to clear existing data: {e}")

        for item in backup.bookmarks:
            try:
                await self._bookmarks.add_bookmark(
                    chapter_number=item.chapter_number,
                    verse_number=item.verse_number,
                    page_number=item.page_number,
                    note=item.note,
                    tags=item.tags,
                    created_at=item.created_at,
                )
                result.bookmarks_imported += 1
            except Exception as e:
                result.errors.append(
                    f"Failed to import bookmark {item.chapter_number}:{item.verse_number}: {e}"
                )

        for item in backup.last_read_positions:
            try:
                await self._reading_history.update_last_read_position(
                    mushaf_type=MushafType(item.mushaf_type),
                    chapter_number=item.chapter_number,
                    verse_number=item.verse_number,
                    page_number=item.page_number,
                    scroll_position=item.scroll_position,
                    last_read_at=item.last_read_at,
                )
                result.last_read_positions_imported += 1
            except Exception as e:
                result.errors.append(
                    f"Failed to import last read position for {item.mushaf_type}: {e}"
                )

        for item in backup.search_history:
            try:
                await self._search_history.record_search(
                    query=item.query,
                    result_count=item.result_count,
                    search_type=SearchType(item.search_type),
                    timestamp=item.timestamp,
                )
                result.search_history_imported += 1
            except Exception as e:
                result.errors.append(f"Failed to import search history: {e}")

        if backup.preferences is not None:
            try:
                await self._import_preferences(backup.preferences)
                result.preferences_imported = True
            except Exception as e:
                result.errors.append(f"Failed to import preferences: {e}")

        for error in result.errors:
            logger.warning(error)
        logger.info(
            "Imported %d items (%d errors)", result.total_imported, len(result.errors)
        )
        return result

    async def import_from_json(
        self, payload: str, merge_with_existing: bool = False
    ) -> ImportResult:
        """Parse and restore a JSON backup. Parse failures come back as a single error."""
        try:
            backup = UserDataBackup.from_dict(json.loads(payload))
        except Exception as e:
            logger.warning("Rejected backup payload: %s", e)
            return ImportResult(errors=[f"Failed to parse JSON: {e}"])
        return await self.import_user_data(backup, merge_with_existing)

    async def clear_all_user_data(self) -> None:
        """Delete all bookmarks, reading history and search history."""
        await self._bookmarks.delete_all_bookmarks()
        await self._reading_history.delete_all_history()
        await self._search_history.clear_search_history()

    async def _export_preferences(self) -> PreferencesData:
        theme = await self._theme.get_theme_config()
        return PreferencesData(
            mushaf_type=(await self._preferences.get_mushaf_type()).value,
            current_page=await self._preferences.get_current_page(),
            font_size_multiplier=await self._preferences.get_font_size_multiplier(),
            selected_reciter_id=await self._reciter_preferences.get_selected_reciter_id(),
            playback_speed=await self._reciter_preferences.get_playback_speed(),
            repeat_mode=await self._reciter_preferences.get_repeat_mode(),
            theme_mode=theme.mode.value,
            color_scheme=theme.color_scheme.value,
            use_amoled=theme.use_amoled,
        )

    async def _import_preferences(self, data: PreferencesData) -> None:
        await self._preferences.set_mushaf_type(MushafType(data.mushaf_type))
        await self._preferences.set_current_page(data.current_page)
        await self._preferences.set_font_size_multiplier(data.font_size_multiplier)
        await self._reciter_preferences.set_selected_reciter_id(data.selected_reciter_id)
        await self._reciter_preferences.set_playback_speed(data.playback_speed)
        await self._reciter_preferences.set_repeat_mode(data.repeat_mode)
        await self._theme.set_theme_mode(ThemeMode(data.theme_mode))
        await self._theme.set_color_scheme(ColorScheme(data.color_scheme))
        await self._theme.set_amoled_mode(data.use_amoled)
