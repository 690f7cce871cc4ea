"""Data access layer for last-read positions and reading sessions."""

import sqlite3
import uuid
from collections import Counter
from typing import List, Optional, Sequence

from mushaf_library.core import (
    LastReadPosition,
    MushafType,
    ReadingHistory,
    ReadingStats,
    now_millis,
)
from mushaf_library.core.user_data import MILLIS_PER_DAY

_HISTORY_COLUMNS = (
    "id, chapter_number, verse_number, page_number, timestamp, duration_seconds, mushaf_type"
)


class ReadingHistoryRepository:
    """Manages last-read positions (one per mushaf type) and reading sessions.

    Statistics are recomputed from the recorded sessions on every call. Days
    are UTC days since the epoch.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        if connection is None:
            raise RuntimeError("Database connection required")
        self.connection = connection
        self.connection.row_factory = sqlite3.Row

    # Last read position

    async def get_last_read_position(self, mushaf_type: MushafType) -> Optional[LastReadPosition]:
        rows = self._fetch_all(
            """
            SELECT mushaf_type, chapter_number, verse_number, page_number,
                   last_read_at, scroll_position
            FROM last_read_positions
            WHERE mushaf_type = ?
            """,
            (mushaf_type.value,),
        )
        return self._row_to_position(rows[0]) if rows else None

    async def update_last_read_position(
        self,
        mushaf_type: MushafType,
        chapter_number: int,
        verse_number: int,
        page_number: int,
        scroll_position: float = 0.0,
        last_read_at: Optional[int] = None,
    ) -> None:
        """Insert or replace the position of ``mushaf_type``.

        Args:
            last_read_at: Epoch millis to record; defaults to now.

        Raises:
            RuntimeError: If the database write fails.
        """
        timestamp = now_millis() if last_read_at is None else last_read_at
        self._execute(
            """
            INSERT INTO last_read_positions (
                mushaf_type, chapter_number, verse_number, page_number,
                last_read_at, scroll_position
            ) VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(mushaf_type) DO UPDATE SET
                chapter_number = excluded.chapter_number,
                verse_number = excluded.verse_number,
                page_number = excluded.page_number,
                last_read_at = excluded.last_read_at,
                scroll_position = excluded.scroll_position
            """,
            (
                mushaf_type.value,
                chapter_number,
                verse_number,
                page_number,
                timestamp,
                float(scroll_position),
            ),
        )

    # Sessions

    async def record_reading_session(
        self,
        chapter_number: int,
        verse_number: int,
        page_number: int,
        duration_seconds: int,
        mushaf_type: MushafType = MushafType.HAFS_1441,
        timestamp: Optional[int] = None,
    ) -> None:
        self._execute(
            f"""
            INSERT INTO reading_history ({_HISTORY_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                uuid.uuid4().hex,
                chapter_number,
                verse_number,
                page_number,
                now_millis() if timestamp is None else timestamp,
                duration_seconds,
                mushaf_type.value,
            ),
        )

    async def get_recent_history(self, limit: int = 50) -> List[ReadingHistory]:
        rows = self._fetch_all(
            f"""
            SELECT {_HISTORY_COLUMNS} FROM reading_history
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
            """,
            (limit,),
        )
        return [self._row_to_history(row) for row in rows]

    async def get_history_for_date_range(
        self, start_timestamp: int, end_timestamp: int
    ) -> List[ReadingHistory]:
        """Sessions with ``start <= timestamp <= end``, newest first."""
        return self._history_between(start_timestamp, end_timestamp)

    async def get_history_for_chapter(self, chapter_number: int) -> List[ReadingHistory]:
        rows = self._fetch_all(
            f"""
            SELECT {_HISTORY_COLUMNS} FROM reading_history
            WHERE chapter_number = ?
            ORDER BY timestamp DESC, rowid DESC
            """,
            (chapter_number,),
        )
        return [self._row_to_history(row) for row in rows]

    async def delete_history_older_than(self, timestamp: int) -> None:
        self._execute("DELETE FROM reading_history WHERE timestamp < ?", (timestamp,))

    async def delete_all_history(self) -> None:
        self._execute("DELETE FROM reading_history")

    # Statistics

    async def get_reading_stats(
        self,
        start_timestamp: Optional[int] = None,
        end_timestamp: Optional[int] = None,
        now: Optional[int] = None,
    ) -> ReadingStats:
        """
        Aggregate sessions, optionally restricted to a time range.

        The range applies only when both bounds are given.
        """
        if start_timestamp is not None and end_timestamp is not None:
            history = self._history_between(start_timestamp, end_timestamp)
        else:
            history = self._all_history()

        total_time = sum(h.duration_seconds for h in history)
        chapter_counts = Counter(h.chapter_number for h in history)
        days = {h.timestamp // MILLIS_PER_DAY for h in history}
        average_daily = (total_time // 60) // max(len(days), 1) if history else 0

        return ReadingStats(
            total_reading_time_seconds=total_time,
            total_pages_read=len({h.page_number for h in history}),
            total_chapters_read=len(chapter_counts),
            total_verses_read=len({(h.chapter_number, h.verse_number) for h in history}),
            most_read_chapter=chapter_counts.most_common(1)[0][0] if chapter_counts else None,
            current_streak=self._current_streak(history, now),
            longest_streak=self._longest_streak(history),
            average_daily_minutes=average_daily,
        )

    async def get_total_reading_time(self) -> int:
        """Total seconds across all sessions."""
        return sum(h.duration_seconds for h in self._all_history())

    async def get_read_chapters(self) -> List[int]:
        return sorted({h.chapter_number for h in self._all_history()})

    async def get_current_streak(self, now: Optional[int] = None) -> int:
        return self._current_streak(self._all_history(), now)

    @staticmethod
    def _current_streak(history: Sequence[ReadingHistory], now: Optional[int] = None) -> int:
        """Consecutive reading days ending today or yesterday."""
        if not history:
            return 0
        today = (now_millis() if now is None else now) // MILLIS_PER_DAY
        days = sorted({h.timestamp // MILLIS_PER_DAY for h in history}, reverse=True)
        if days[0] < today - 1:
            return 0

        streak = 0
        expected = days[0]
        for day in days:
            if day != expected:
                break
            streak += 1
            expected = day - 1
        return streak

    @staticmethod
    def _longest_streak(history: Sequence[ReadingHistory]) -> int:
        if not history:
            return 0
        days = sorted({h.timestamp // MILLIS_PER_DAY for h in history})
        longest = current = 1
        for previous, day in zip(days, days[1:]):
            if day == previous + 1:
                current += 1
            else:
                current = 1
            longest = max(longest, current)
        return longest

    def _all_history(self) -> List[ReadingHistory]:
        rows = self._fetch_all(
            f"SELECT {_HISTORY_COLUMNS} FROM reading_history ORDER BY timestamp DESC, rowid DESC"
        )
        return [self._row_to_history(row) for row in rows]

    def _history_between(self, start: int, end: int) -> List[ReadingHistory]:
        rows = self._fetch_all(
            f"""
            SELECT {_HISTORY_COLUMNS} FROM reading_history
            WHERE timestamp >= ? AND timestamp <= ?
            ORDER BY timestamp DESC, rowid DESC
            """,
            (start, end),
        )
        return [self._row_to_history(row) for row in rows]

    def _execute(self, sql: str, params: tuple = ()) -> None:
        try:
            self.connection.execute(sql, params)
            self.connection.commit()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to write reading history: {e}") from e

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            return self.connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to retrieve reading history: {e}") from e

    @staticmethod
    def _row_to_position(row: sqlite3.Row) -> LastReadPosition:
        return LastReadPosition(
            mushaf_type=MushafType(row["mushaf_type"]),
            chapter_number=row["chapter_number"],
            verse_number=row["verse_number"],
            page_number=row["page_number"],
            last_read_at=row["last_read_at"],
            scroll_position=row["scroll_position"],
        )

    @staticmethod
    def _row_to_history(row: sqlite3.Row) -> ReadingHistory:
        return ReadingHistory(
            id=row["id"],
            chapter_number=row["chapter_number"],
            verse_number=row["verse_number"],
            page_number=row["page_number"],
            timestamp=row["timestamp"],
            duration_seconds=row["duration_seconds"],
            mushaf_type=MushafType(row["mushaf_type"]),
        )
