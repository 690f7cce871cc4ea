"""Tests for DataExportRepository - backup export and import."""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest

from mushaf_library.core import (
    BACKUP_FORMAT_VERSION,
    BookmarkData,
    MushafType,
    SearchType,
    ThemeMode,
    UserDataBackup,
)
from mushaf_library.io import DatabaseManager
from mushaf_library.io.database_manager import MEMORY_DB
from mushaf_library.repositories import (
    BookmarkRepository,
    DataExportRepository,
    PreferencesRepository,
    ReadingHistoryRepository,
    ReciterPreferencesRepository,
    SearchHistoryRepository,
    ThemeRepository,
    open_settings,
)


def _build(connection, qsettings):
    bookmarks = BookmarkRepository(connection)
    history = ReadingHistoryRepository(connection)
    searches = SearchHistoryRepository(connection)
    exporter = DataExportRepository(
        bookmarks=bookmarks,
        reading_history=history,
        search_history=searches,
        preferences=PreferencesRepository(qsettings),
        reciter_preferences=ReciterPreferencesRepository(qsettings),
        theme=ThemeRepository(qsettings),
    )
    return exporter, bookmarks, history, searches


@pytest.fixture
def stack(connection, qsettings):
    return _build(connection, qsettings)


@pytest.fixture
def populated(stack, qsettings):
    exporter, bookmarks, history, searches = stack

    async def fill():
        await bookmarks.add_bookmark(2, 255, 42, note="Kursi", tags=["daily"], created_at=1000)
        await bookmarks.add_bookmark(18, 10, 294, created_at=2000)
        await history.update_last_read_position(
            MushafType.HAFS_1441, 18, 10, 294, scroll_position=0.25, last_read_at=3000
        )
        await history.update_last_read_position(MushafType.HAFS_1405, 1, 1, 1, last_read_at=4000)
        await searches.record_search("mercy", 12, SearchType.VERSE, timestamp=5000)
        await searches.record_search("kahf", 1, SearchType.CHAPTER, timestamp=6000)
        await PreferencesRepository(qsettings).set_current_page(294)
        await ThemeRepository(qsettings).set_theme_mode(ThemeMode.DARK)

    asyncio.run(fill())
    return stack


def _snapshot(bookmarks, history, searches):
    async def read():
        return (
            [
                (b.chapter_number, b.verse_number, b.page_number, b.created_at, b.note, b.tags)
                for b in await bookmarks.get_all_bookmarks()
            ],
            [await history.get_last_read_position(t) for t in MushafType],
            [
                (s.query, s.timestamp, s.result_count, s.search_type)
                for s in await searches.get_recent_searches(500)
            ],
        )

    return asyncio.run(read())


class TestExport:
    def test_export_contents(self, populated):
        exporter = populated[0]

        backup = asyncio.run(exporter.export_user_data(include_history=True))

        assert backup.version == BACKUP_FORMAT_VERSION
        assert backup.timestamp > 0
        assert [(b.chapter_number, b.verse_number) for b in backup.bookmarks] == [(18, 10), (2, 255)]
        assert {p.mushaf_type for p in backup.last_read_positions} == {"HAFS_1441", "HAFS_1405"}
        assert [s.query for s in backup.search_history] == ["kahf", "mercy"]
        assert backup.preferences.current_page == 294
        assert backup.preferences.theme_mode == "DARK"

    def test_export_without_history(self, populated):
        backup = asyncio.run(populated[0].export_user_data(include_history=False))
        assert backup.search_history == []

    def test_preferences_omitted_when_unreadable(self, populated):
        exporter = populated[0]
        exporter._theme = AsyncMock()
        exporter._theme.get_theme_config.side_effect = RuntimeError("settings unavailable")

        backup = asyncio.run(exporter.export_user_data())

        assert backup.preferences is None
        assert len(backup.bookmarks) == 2

    def test_export_to_json_uses_camel_case(self, populated):
        payload = json.loads(asyncio.run(populated[0].export_to_json()))

        assert payload["version"] == 1
        assert payload["bookmarks"][1]["chapterNumber"] == 2
        assert payload["lastReadPositions"][0]["mushafType"] in {"HAFS_1441", "HAFS_1405"}
        assert payload["searchHistory"][0]["searchType"] == "CHAPTER"
        assert payload["preferences"]["themeMode"] == "DARK"


class TestRoundTrip:
    def test_import_into_empty_store_reproduces_data(self, populated, tmp_path):
        exporter, bookmarks, history, searches = populated
        original = _snapshot(bookmarks, history, searches)
        payload = asyncio.run(exporter.export_to_json(include_history=True))

        target_db = DatabaseManager(MEMORY_DB)
        target_db.ensure_schema()
        target_settings = open_settings(tmp_path / "restore" / "preferences.ini")
        target = _build(target_db.connection, target_settings)

        result = asyncio.run(target[0].import_from_json(payload, merge_with_existing=False))

        assert result.errors == []
        assert result.bookmarks_imported == 2
        assert result.last_read_positions_imported == 2
        assert result.search_history_imported == 2
        assert result.preferences_imported is True
        assert _snapshot(*target[1:]) == original
        restored_theme = asyncio.run(ThemeRepository(target_settings).get_theme_config())
        assert restored_theme.mode is ThemeMode.DARK
        target_db.close()


class TestImport:
    def test_partial_failure_keeps_valid_bookmarks(self, stack):
        exporter, bookmarks, _, _ = stack
        backup = UserDataBackup(
            version=1,
            timestamp=0,
            bookmarks=[
                BookmarkData(1, 1, 1, created_at=100),
                BookmarkData(200, 1, 1, created_at=200),
                BookmarkData(2, 5, 2, created_at=300),
            ],
        )

        result = asyncio.run(exporter.import_user_data(backup))

        assert result.bookmarks_imported == 2
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Failed to import bookmark 200:1")
        stored = asyncio.run(bookmarks.get_all_bookmarks())
        assert sorted((b.chapter_number, b.verse_number) for b in stored) == [(1, 1), (2, 5)]

    def test_malformed_json(self, stack):
        result = asyncio.run(stack[0].import_from_json("{not valid json"))

        assert result.total_imported == 0
        assert result.preferences_imported is False
        assert result.errors
        assert result.errors[0].startswith("Failed to parse JSON")

    def test_non_object_json(self, stack):
        result = asyncio.run(stack[0].import_from_json("[1, 2]"))
        assert result.has_errors

    @pytest.mark.parametrize(
        "payload",
        ['{"version": Infinity}', "[" * 100000],
        ids=["infinite-number", "deep-nesting"],
    )
    def test_unparseable_payload_returns_single_error(self, stack, payload):
        result = asyncio.run(stack[0].import_from_json(payload))

        assert result.total_imported == 0
        assert result.preferences_imported is False
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Failed to parse JSON")

    def test_unknown_fields_ignored(self, stack):
        payload = json.dumps({
            "version": 1,
            "timestamp": 1,
            "futureField": {"x": 1},
            "bookmarks": [{"chapterNumber": 1, "verseNumber": 1, "pageNumber": 1,
                           "createdAt": 5, "note": "", "tags": [], "color": "red"}],
        })

        result = asyncio.run(stack[0].import_from_json(payload))

        assert result.bookmarks_imported == 1
        assert result.errors == []

    def test_invalid_enum_values_reported_per_item(self, stack):
        payload = json.dumps({
            "version": 1,
            "timestamp": 1,
            "lastReadPositions": [{"mushafType": "WARSH", "chapterNumber": 1, "verseNumber": 1,
                                   "pageNumber": 1, "lastReadAt": 1, "scrollPosition": 0}],
            "searchHistory": [
                {"query": "a", "timestamp": 1, "resultCount": 1, "searchType": "BOGUS"},
                {"query": "b", "timestamp": 2, "resultCount": 1, "searchType": "VERSE"},
            ],
        })

        result = asyncio.run(stack[0].import_from_json(payload))

        assert result.last_read_positions_imported == 0
        assert result.search_history_imported == 1
        assert len(result.errors) == 2
        assert result.errors[0].startswith("Failed to import last read position for WARSH")

    def test_merge_keeps_existing(self, populated):
        exporter, bookmarks, _, searches = populated
        backup = UserDataBackup(version=1, timestamp=0, bookmarks=[BookmarkData(3, 7, 50, 10)])

        asyncio.run(exporter.import_user_data(backup, merge_with_existing=True))

        assert len(asyncio.run(bookmarks.get_all_bookmarks())) == 3
        assert len(asyncio.run(searches.get_recent_searches())) == 2

    def test_replace_clears_bookmarks_and_searches_only(self, populated):
        exporter, bookmarks, history, searches = populated
        backup = UserDataBackup(version=1, timestamp=0, bookmarks=[BookmarkData(3, 7, 50, 10)])

        asyncio.run(exporter.import_user_data(backup, merge_with_existing=False))

        assert [b.chapter_number for b in asyncio.run(bookmarks.get_all_bookmarks())] == [3]
        assert asyncio.run(searches.get_recent_searches()) == []
        assert asyncio.run(history.get_last_read_position(MushafType.HAFS_1441)) is not None

    def test_clear_failure_reported(self, stack):
        exporter = stack[0]
        exporter._bookmarks = AsyncMock(wraps=exporter._bookmarks)
        exporter._bookmarks.delete_all_bookmarks.side_effect = RuntimeError("locked")

        result = asyncio.run(
            exporter.import_user_data(UserDataBackup(version=1, timestamp=0))
        )

        assert result.errors == ["Failed to clear existing data: locked"]

    def test_invalid_preferences_reported(self, stack):
        exporter = stack[0]
        backup = UserDataBackup.from_dict({
            "version": 1,
            "timestamp": 0,
            "preferences": {
                "mushafType": "HAFS_1441", "currentPage": 3, "fontSizeMultiplier": 1.0,
                "selectedReciterId": 1, "playbackSpeed": 1.0, "repeatMode": False,
                "themeMode": "NEON", "colorScheme": "DEFAULT", "useAmoled": False,
            },
        })

        result = asyncio.run(exporter.import_user_data(backup))

        assert result.preferences_imported is False
        assert result.errors[0].startswith("Failed to import preferences")


def test_clear_all_user_data(populated):
    exporter, bookmarks, history, searches = populated
    asyncio.run(history.record_reading_session(1, 1, 1, 60, timestamp=1))

    asyncio.run(exporter.clear_all_user_data())

    assert asyncio.run(bookmarks.get_all_bookmarks()) == []
    assert asyncio.run(history.get_recent_history()) == []
    assert asyncio.run(searches.get_recent_searches()) == []
