"""Data access layer for verse bookmarks."""

import sqlite3
import uuid
from typing import List, Optional

from mushaf_library.core import Bookmark, now_millis
from mushaf_library.core.quran_constants import is_valid_chapter_number

_COLUMNS = "id, chapter_number, verse_number, page_number, created_at, note, tags"


class BookmarkRepository:
    """Manages persistence of bookmarks in the database.

    At most one bookmark exists per verse: adding a bookmark for a verse that
    already has one updates it in place. Lookups return None when nothing
    matches; database failures raise RuntimeError.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        """Initialize repository with database connection.

        Args:
            connection: SQLite connection with schema created.

        Raises:
            RuntimeError: If connection is None.
        """
        if connection is None:
            raise RuntimeError("Database connection required")
        self.connection = connection
        self.connection.row_factory = sqlite3.Row

    async def get_all_bookmarks(self) -> List[Bookmark]:
        """All bookmarks, newest first."""
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM bookmarks ORDER BY created_at DESC, rowid DESC"
        )
        return [self._row_to_bookmark(row) for row in rows]

    async def get_bookmark_by_id(self, bookmark_id: str) -> Optional[Bookmark]:
        rows = self._fetch_all(f"SELECT {_COLUMNS} FROM bookmarks WHERE id = ?", (bookmark_id,))
        return self._row_to_bookmark(rows[0]) if rows else None

    async def get_bookmarks_for_chapter(self, chapter_number: int) -> List[Bookmark]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM bookmarks WHERE chapter_number = ? ORDER BY verse_number",
            (chapter_number,),
        )
        return [self._row_to_bookmark(row) for row in rows]

    async def get_bookmark_for_verse(
        self, chapter_number: int, verse_number: int
    ) -> Optional[Bookmark]:
        rows = self._fetch_all(
            f"SELECT {_COLUMNS} FROM bookmarks WHERE chapter_number = ? AND verse_number = ?",
            (chapter_number, verse_number),
        )
        return self._row_to_bookmark(rows[0]) if rows else None

    async def add_bookmark(
        self,
        chapter_number: int,
        verse_number: int,
        page_number: int,
        note: str = "",
        tags: Optional[List[str]] = None,
        created_at: Optional[int] = None,
    ) -> Bookmark:
        """Bookmark a verse, or update the existing bookmark of that verse.

        Args:
            chapter_number: Chapter number (1..114).
            verse_number: Verse number (>= 1).
            page_number: Page the verse appears on.
            note: Free-text note.
            tags: Tags; surrounding whitespace is stripped and blanks dropped.
            created_at: Epoch millis to record; defaults to now.

        Returns:
            Bookmark: The stored bookmark.

        Raises:
            ValueError: If the chapter or verse number is invalid.
            RuntimeError: If the database write fails.
        """
        if not is_valid_chapter_number(chapter_number):
            raise ValueError(f"Invalid chapter number: {chapter_number}")
        if verse_number < 1:
            raise ValueError(f"Invalid verse number: {verse_number}")

        timestamp = now_millis() if created_at is None else created_at
        tags_value = self._join_tags(tags or [])
        try:
            self.connection.execute(
                """
                INSERT INTO bookmarks (
                    id, chapter_number, verse_number, page_number, created_at, note, tags
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(chapter_number, verse_number) DO UPDATE SET
                    note = excluded.note,
                    tags = excluded.tags,
                    created_at = excluded.created_at
                """,
                (
                    uuid.uuid4().hex,
                    chapter_number,
                    verse_number,
                    page_number,
                    timestamp,
                    note or "",
                    tags_value,
                ),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to add bookmark: {e}") from e

        return await self.get_bookmark_for_verse(chapter_number, verse_number)

    async def update_bookmark_note(self, bookmark_id: str, note: str) -> None:
        """
        Raises:
            RuntimeError: If the bookmark does not exist or the write fails.
        """
        self._update(bookmark_id, "note", note or "")

    async def update_bookmark_tags(self, bookmark_id: str, tags: List[str]) -> None:
        """
        Raises:
            RuntimeError: If the bookmark does not exist or the write fails.
        """
        self._update(bookmark_id, "tags", self._join_tags(tags))

    async def delete_bookmark(self, bookmark_id: str) -> None:
        """Delete a bookmark. Unknown ids are ignored."""
        self._execute("DELETE FROM bookmarks WHERE id = ?", (bookmark_id,))

    async def delete_bookmark_for_verse(self, chapter_number: int, verse_number: int) -> None:
        self._execute(
            "DELETE FROM bookmarks WHERE chapter_number = ? AND verse_number = ?",
            (chapter_number, verse_number),
        )

    async def delete_all_bookmarks(self) -> None:
        self._execute("DELETE FROM bookmarks")

    async def is_verse_bookmarked(self, chapter_number: int, verse_number: int) -> bool:
        return await self.get_bookmark_for_verse(chapter_number, verse_number) is not None

    async def search_bookmarks(self, query: str) -> List[Bookmark]:
        """Bookmarks whose note or tags contain ``query`` (case-insensitive)."""
        needle = query.lower()
        return [
            bookmark
            for bookmark in await self.get_all_bookmarks()
            if needle in bookmark.note.lower() or needle in ",".join(bookmark.tags).lower()
        ]

    def _update(self, bookmark_id: str, column: str, value: str) -> None:
        try:
            cur = self.connection.execute(
                f"UPDATE bookmarks SET {column} = ? WHERE id = ?", (value, bookmark_id)
            )
            if cur.rowcount == 0:
                raise RuntimeError(f"Bookmark not found: {bookmark_id}")
            self.connection.commit()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to update bookmark: {e}") from e

    def _execute(self, sql: str, params: tuple = ()) -> None:
        try:
            self.connection.execute(sql, params)
            self.connection.commit()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to write bookmarks: {e}") from e

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            return self.connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to retrieve bookmarks: {e}") from e

    @staticmethod
    def _join_tags(tags: List[str]) -> str:
        return ",".join(tag.strip() for tag in tags if tag.strip())

    @staticmethod
    def _row_to_bookmark(row: sqlite3.Row) -> Bookmark:
        """Convert database row to Bookmark entity."""
        tags = row["tags"]
        return Bookmark(
            id=row["id"],
            chapter_number=row["chapter_number"],
            verse_number=row["verse_number"],
            page_number=row["page_number"],
            created_at=row["created_at"],
            note=row["note"],
            tags=[tag.strip() for tag in tags.split(",")] if tags.strip() else [],
        )
