"""Tests for ReadingHistoryRepository - positions, sessions and statistics."""

import asyncio

import pytest

from mushaf_library.core import MushafType
from mushaf_library.core.user_data import MILLIS_PER_DAY
from mushaf_library.repositories import ReadingHistoryRepository

DAY = MILLIS_PER_DAY
TODAY = 20000 * DAY + 5000


@pytest.fixture
def history_repo(connection):
    return ReadingHistoryRepository(connection)


def _session(repo, chapter, verse, page, seconds, timestamp):
    asyncio.run(
        repo.record_reading_session(chapter, verse, page, seconds, timestamp=timestamp)
    )


class TestLastReadPosition:
    def test_missing_position_is_none(self, history_repo):
        assert asyncio.run(history_repo.get_last_read_position(MushafType.HAFS_1441)) is None

    def test_upsert_per_mushaf_type(self, history_repo):
        asyncio.run(history_repo.update_last_read_position(MushafType.HAFS_1441, 2, 10, 3))
        asyncio.run(
            history_repo.update_last_read_position(
                MushafType.HAFS_1441, 2, 20, 4, scroll_position=0.5, last_read_at=1234
            )
        )
        asyncio.run(history_repo.update_last_read_position(MushafType.HAFS_1405, 1, 1, 1))

        position = asyncio.run(history_repo.get_last_read_position(MushafType.HAFS_1441))
        assert position.verse_reference == "2:20"
        assert position.page_number == 4
        assert position.scroll_position == 0.5
        assert position.last_read_at == 1234
        older = asyncio.run(history_repo.get_last_read_position(MushafType.HAFS_1405))
        assert older.chapter_number == 1


class TestSessions:
    def test_recent_history_newest_first(self, history_repo):
        _session(history_repo, 1, 1, 1, 60, TODAY - 2 * DAY)
        _session(history_repo, 2, 1, 2, 60, TODAY)
        _session(history_repo, 3, 1, 3, 60, TODAY - DAY)

        recent = asyncio.run(history_repo.get_recent_history(limit=2))

        assert [h.chapter_number for h in recent] == [2, 3]
        assert recent[0].mushaf_type is MushafType.HAFS_1441

    def test_date_range_and_chapter(self, history_repo):
        _session(history_repo, 1, 1, 1, 60, 1000)
        _session(history_repo, 2, 1, 2, 60, 2000)
        _session(history_repo, 2, 5, 2, 60, 3000)

        in_range = asyncio.run(history_repo.get_history_for_date_range(1500, 3000))
        assert [h.timestamp for h in in_range] == [3000, 2000]
        assert len(asyncio.run(history_repo.get_history_for_chapter(2))) == 2

    def test_deletes(self, history_repo):
        _session(history_repo, 1, 1, 1, 60, 1000)
        _session(history_repo, 2, 1, 2, 60, 5000)

        asyncio.run(history_repo.delete_history_older_than(2000))
        assert [h.timestamp for h in asyncio.run(history_repo.get_recent_history())] == [5000]

        asyncio.run(history_repo.delete_all_history())
        assert asyncio.run(history_repo.get_recent_history()) == []


class TestStatistics:
    def test_empty_stats(self, history_repo):
        stats = asyncio.run(history_repo.get_reading_stats(now=TODAY))

        assert stats.total_reading_time_seconds == 0
        assert stats.most_read_chapter is None
        assert stats.current_streak == 0
        assert stats.longest_streak == 0
        assert stats.average_daily_minutes == 0

    def test_aggregates(self, history_repo):
        _session(history_repo, 2, 1, 2, 600, TODAY)
        _session(history_repo, 2, 2, 2, 1200, TODAY - DAY)
        _session(history_repo, 1, 1, 1, 1800, TODAY - DAY)

        stats = asyncio.run(history_repo.get_reading_stats(now=TODAY))

        assert stats.total_reading_time_seconds == 3600
        assert stats.total_reading_time_minutes == 60
        assert stats.total_pages_read == 2
        assert stats.total_chapters_read == 2
        assert stats.total_verses_read == 3
        assert stats.most_read_chapter == 2
        assert stats.current_streak == 2
        assert stats.average_daily_minutes == 30

    def test_stats_for_range(self, history_repo):
        _session(history_repo, 1, 1, 1, 60, 1000)
        _session(history_repo, 2, 1, 2, 120, 5000)

        stats = asyncio.run(history_repo.get_reading_stats(4000, 6000, now=TODAY))

        assert stats.total_reading_time_seconds == 120
        assert stats.total_chapters_read == 1

    def test_current_streak_counts_back_from_yesterday(self, history_repo):
        for offset in (1, 2, 3):
            _session(history_repo, 1, 1, 1, 60, TODAY - offset * DAY)

        assert asyncio.run(history_repo.get_current_streak(now=TODAY)) == 3

    def test_current_streak_stops_at_gap(self, history_repo):
        for offset in (0, 1, 3, 4):
            _session(history_repo, 1, 1, 1, 60, TODAY - offset * DAY)

        assert asyncio.run(history_repo.get_current_streak(now=TODAY)) == 2

    def test_current_streak_broken_when_last_read_is_old(self, history_repo):
        _session(history_repo, 1, 1, 1, 60, TODAY - 2 * DAY)

        assert asyncio.run(history_repo.get_current_streak(now=TODAY)) == 0

    def test_longest_streak(self, history_repo):
        for offset in (0, 5, 6, 7, 10):
            _session(history_repo, 1, 1, 1, 60, TODAY - offset * DAY)

        stats = asyncio.run(history_repo.get_reading_stats(now=TODAY))
        assert stats.longest_streak == 3
        assert stats.current_streak == 1

    def test_total_time_and_read_chapters(self, history_repo):
        _session(history_repo, 3, 1, 50, 30, 1000)
        _session(history_repo, 1, 1, 1, 45, 2000)
        _session(history_repo, 3, 2, 50, 15, 3000)

        assert asyncio.run(history_repo.get_total_reading_time()) == 90
        assert asyncio.run(history_repo.get_read_chapters()) == [1, 3]
