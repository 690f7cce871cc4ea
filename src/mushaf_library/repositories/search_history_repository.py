"""Data access layer for search history and suggestions."""

import sqlite3
import uuid
from typing import Dict, List, Optional

from mushaf_library.core import SearchHistoryEntry, SearchSuggestion, SearchType, now_millis


MAX_HISTORY_ENTRIES = 100

_COLUMNS = "id, query, timestamp, result_count, search_type"


class SearchHistoryRepository:
    """Records searches and derives suggestions from them.

    Only the newest ``MAX_HISTORY_ENTRIES`` entries are kept.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        if connection is None:
            raise RuntimeError("Database connection required")
        self.connection = connection
        self.connection.row_factory = sqlite3.Row

    async def get_recent_searches(self, limit: int = 20) -> List[SearchHistoryEntry]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM search_history ORDER BY timestamp DESC, rowid DESC LIMIT ?",
            (limit,),
        )
        return [self._row_to_entry(row) for row in rows]

    async def record_search(
        self,
        query: str,
        result_count: int,
        search_type: SearchType = SearchType.GENERAL,
        timestamp: Optional[int] = None,
    ) -> None:
        """Store a search. Blank queries are ignored; the query is trimmed.

        Args:
            timestamp: Epoch millis to record; defaults to now.
        """
        if not query or not query.strip():
            return
        self._execute(
            f"INSERT INTO search_history ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            (
                uuid.uuid4().hex,
                query.strip(),
                now_millis() if timestamp is None else timestamp,
                result_count,
                search_type.value,
            ),
        )
        self._trim_history(MAX_HISTORY_ENTRIES)

    async def get_search_suggestions(
        self, prefix: Optional[str] = None, limit: int = 10
    ) -> List[SearchSuggestion]:
        """Past queries grouped case-insensitively, most frequent then most recent first."""
        entries = self._all_entries()
        if prefix and prefix.strip():
            lowered = prefix.lower()
            entries = [e for e in entries if e.query.lower().startswith(lowered)]
        suggestions = self._group(entries)
        suggestions.sort(key=lambda s: (s.frequency, s.last_searched), reverse=True)
        return suggestions[:limit]

    async def get_popular_searches(self, limit: int = 10) -> List[SearchSuggestion]:
        suggestions = self._group(self._all_entries())
        suggestions.sort(key=lambda s: s.frequency, reverse=True)
        return suggestions[:limit]

    async def delete_search(self, entry_id: str) -> None:
        self._execute("DELETE FROM search_history WHERE id = ?", (entry_id,))

    async def delete_searches_older_than(self, timestamp: int) -> None:
        self._execute("DELETE FROM search_history WHERE timestamp < ?", (timestamp,))

    async def clear_search_history(self) -> None:
        self._execute("DELETE FROM search_history")

    async def get_searches_by_type(
        self, search_type: SearchType, limit: int = 20
    ) -> List[SearchHistoryEntry]:
        rows = self._fetch_all(
            f"""
            SELECT {_COLUMNS} FROM search_history
            WHERE search_type = ?
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
            """,
            (search_type.value, limit),
        )
        return [self._row_to_entry(row) for row in rows]

    def _trim_history(self, keep: int) -> None:
        self._execute(
            """
            DELETE FROM search_history WHERE id NOT IN (
                SELECT id FROM search_history
                ORDER BY timestamp DESC, rowid DESC
                LIMIT ?
            )
            """,
            (keep,),
        )

    def _all_entries(self) -> List[SearchHistoryEntry]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM search_history ORDER BY timestamp DESC, rowid DESC"
        )
        return [self._row_to_entry(row) for row in rows]

    @staticmethod
    def _group(entries: List[SearchHistoryEntry]) -> List[SearchSuggestion]:
        # entries arrive newest first, so the first spelling seen is the latest one
        grouped: Dict[str, List[SearchHistoryEntry]] = {}
        for entry in entries:
            grouped.setdefault(entry.query.lower(), []).append(entry)
        return [
            SearchSuggestion(
                query=items[0].query,
                frequency=len(items),
                last_searched=max(item.timestamp for item in items),
            )
            for items in grouped.values()
        ]

    def _execute(self, sql: str, params: tuple = ()) -> None:
        try:
            self.connection.execute(sql, params)
            self.connection.commit()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to write search history: {e}") from e

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            return self.connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to retrieve search history: {e}") from e

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> SearchHistoryEntry:
        return SearchHistoryEntry(
            id=row["id"],
            query=row["query"],
            timestamp=row["timestamp"],
            result_count=row["result_count"],
            search_type=SearchType(row["search_type"]),
        )
