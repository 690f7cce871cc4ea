"""SQLite-backed persistence for Quran content and user data."""

import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from mushaf_library.core import Chapter, MushafType, Page, Part, Quarter, Verse

MEMORY_DB = ":memory:"


class DatabaseManager:
    """Owns SQLite connection, schema, and content insert helpers.

    Content insert helpers do not commit; callers group them in a transaction
    (see ``ContentIngestor``).
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        if str(self.db_path) != MEMORY_DB:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.connection = sqlite3.connect(self.db_path)
        self.connection.row_factory = sqlite3.Row
        self.connection.execute("PRAGMA foreign_keys = ON;")

    def ensure_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        cur = self.connection.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS chapters (
                id INTEGER PRIMARY KEY,
                number INTEGER NOT NULL UNIQUE,
                is_meccan INTEGER NOT NULL,
                title TEXT NOT NULL DEFAULT '',
                arabic_title TEXT NOT NULL DEFAULT '',
                english_title TEXT NOT NULL DEFAULT '',
                title_code_point TEXT NOT NULL DEFAULT '',
                searchable_text TEXT NOT NULL DEFAULT '',
                searchable_keywords TEXT NOT NULL DEFAULT '',
                verses_count INTEGER NOT NULL DEFAULT 0,
                revelation_order INTEGER NOT NULL DEFAULT 0
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS parts (
                id INTEGER PRIMARY KEY,
                number INTEGER NOT NULL UNIQUE,
                arabic_title TEXT NOT NULL DEFAULT '',
                english_title TEXT NOT NULL DEFAULT ''
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS quarters (
                id INTEGER PRIMARY KEY,
                hizb_number INTEGER NOT NULL,
                hizb_fraction INTEGER NOT NULL,
                arabic_title TEXT NOT NULL DEFAULT '',
                english_title TEXT NOT NULL DEFAULT '',
                part_number INTEGER NOT NULL DEFAULT 0,
                UNIQUE(hizb_number, hizb_fraction)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS pages (
                id INTEGER PRIMARY KEY,
                number INTEGER NOT NULL UNIQUE,
                is_right INTEGER NOT NULL DEFAULT 0
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS verses (
                verse_id INTEGER PRIMARY KEY,
                human_readable_id TEXT NOT NULL UNIQUE,
                chapter_number INTEGER NOT NULL,
                number INTEGER NOT NULL,
                text TEXT NOT NULL DEFAULT '',
                text_without_tashkil TEXT NOT NULL DEFAULT '',
                uthmanic_hafs_text TEXT NOT NULL DEFAULT '',
                hafs_smart_text TEXT NOT NULL DEFAULT '',
                searchable_text TEXT NOT NULL DEFAULT '',
                page_number INTEGER NOT NULL DEFAULT 0,
                part_number INTEGER NOT NULL DEFAULT 0,
                hizb_number INTEGER NOT NULL DEFAULT 0,
                hizb_fraction INTEGER,
                UNIQUE(chapter_number, number)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS verse_pages (
                verse_id INTEGER NOT NULL,
                mushaf_type TEXT NOT NULL,
                page_number INTEGER NOT NULL,

                FOREIGN KEY(verse_id) REFERENCES verses(verse_id) ON DELETE CASCADE,
                PRIMARY KEY(verse_id, mushaf_type)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS page_headers (
                page_number INTEGER NOT NULL,
                mushaf_type TEXT NOT NULL,
                part_number INTEGER,
                hizb_number INTEGER,
                hizb_fraction INTEGER,
                PRIMARY KEY(page_number, mushaf_type)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS page_header_chapters (
                page_number INTEGER NOT NULL,
                mushaf_type TEXT NOT NULL,
                chapter_number INTEGER NOT NULL,
                position INTEGER NOT NULL,
                PRIMARY KEY(page_number, mushaf_type, chapter_number)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS bookmarks (
                id TEXT PRIMARY KEY,
                chapter_number INTEGER NOT NULL,
                verse_number INTEGER NOT NULL,
                page_number INTEGER NOT NULL DEFAULT 0,
                created_at INTEGER NOT NULL,
                note TEXT NOT NULL DEFAULT '',
                tags TEXT NOT NULL DEFAULT '',
                UNIQUE(chapter_number, verse_number)
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS last_read_positions (
                mushaf_type TEXT PRIMARY KEY,
                chapter_number INTEGER NOT NULL,
                verse_number INTEGER NOT NULL,
                page_number INTEGER NOT NULL DEFAULT 0,
                last_read_at INTEGER NOT NULL,
                scroll_position REAL NOT NULL DEFAULT 0
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS reading_history (
                id TEXT PRIMARY KEY,
                chapter_number INTEGER NOT NULL,
                verse_number INTEGER NOT NULL,
                page_number INTEGER NOT NULL DEFAULT 0,
                timestamp INTEGER NOT NULL,
                duration_seconds INTEGER NOT NULL DEFAULT 0,
                mushaf_type TEXT NOT NULL
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS search_history (
                id TEXT PRIMARY KEY,
                query TEXT NOT NULL,
                timestamp INTEGER NOT NULL,
                result_count INTEGER NOT NULL DEFAULT 0,
                search_type TEXT NOT NULL
            );
            """
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_verses_page
            ON verses(page_number);
            """
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_verse_pages_page
            ON verse_pages(mushaf_type, page_number);
            """
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_reading_history_timestamp
            ON reading_history(timestamp);
            """
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_search_history_timestamp
            ON search_history(timestamp);
            """
        )
        self.connection.commit()

    def clear_content(self) -> None:
        """Delete all Quran content rows. User data is left untouched."""
        cur = self.connection.cursor()
        for table in (
            "page_header_chapters",
            "page_headers",
            "verse_pages",
            "verses",
            "pages",
            "quarters",
            "parts",
            "chapters",
        ):
            cur.execute(f"DELETE FROM {table}")

    def insert_chapter(self, chapter: Chapter) -> None:
        self.connection.execute(
            """
            INSERT OR REPLACE INTO chapters (
                id, number, is_meccan, title, arabic_title, english_title,
                title_code_point, searchable_text, searchable_keywords,
                verses_count, revelation_order
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                chapter.identifier,
                chapter.number,
                int(chapter.is_meccan),
                chapter.title,
                chapter.arabic_title,
                chapter.english_title,
                chapter.title_code_point,
                chapter.searchable_text,
                chapter.searchable_keywords,
                chapter.verses_count,
                chapter.revelation_order,
            ),
        )

    def insert_part(self, part: Part) -> None:
        self.connection.execute(
            """
            INSERT OR REPLACE INTO parts (id, number, arabic_title, english_title)
            VALUES (?, ?, ?, ?)
            """,
            (part.identifier, part.number, part.arabic_title, part.english_title),
        )

    def insert_quarter(self, quarter: Quarter) -> None:
        self.connection.execute(
            """
            INSERT OR REPLACE INTO quarters (
                id, hizb_number, hizb_fraction, arabic_title, english_title, part_number
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                quarter.identifier,
                quarter.hizb_number,
                quarter.hizb_fraction,
                quarter.arabic_title,
                quarter.english_title,
                quarter.part_number,
            ),
        )

    def insert_page(self, page: Page) -> None:
        self.connection.execute(
            """
            INSERT OR REPLACE INTO pages (id, number, is_right)
            VALUES (?, ?, ?)
            """,
            (page.identifier, page.number, int(page.is_right)),
        )

    def insert_verse(self, verse: Verse, page_1405: Optional[int] = None) -> None:
        """Insert a verse and its page placement for each mushaf layout.

        ``verse.page_number`` is the HAFS_1441 page; ``page_1405`` is the
        HAFS_1405 page when the dataset provides one.
        """
        self.connection.execute(
            """
            INSERT OR REPLACE INTO verses (
                verse_id, human_readable_id, chapter_number, number, text,
                text_without_tashkil, uthmanic_hafs_text, hafs_smart_text,
                searchable_text, page_number, part_number, hizb_number, hizb_fraction
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                verse.verse_id,
                verse.human_readable_id,
                verse.chapter_number,
                verse.number,
                verse.text,
                verse.text_without_tashkil,
                verse.uthmanic_hafs_text,
                verse.hafs_smart_text,
                verse.searchable_text,
                verse.page_number,
                verse.part_number,
                verse.hizb_number,
                verse.hizb_fraction,
            ),
        )
        placements = [(MushafType.HAFS_1441, verse.page_number)]
        if page_1405 is not None:
            placements.append((MushafType.HAFS_1405, page_1405))
        self.connection.executemany(
            """
            INSERT OR REPLACE INTO verse_pages (verse_id, mushaf_type, page_number)
            VALUES (?, ?, ?)
            """,
            [(verse.verse_id, mushaf.value, page) for mushaf, page in placements if page],
        )

    def insert_page_header(
        self,
        page_number: int,
        mushaf_type: MushafType,
        part_number: Optional[int],
        hizb_number: Optional[int],
        hizb_fraction: Optional[int],
        chapter_numbers: Iterable[int],
    ) -> None:
        self.connection.execute(
            """
            INSERT OR REPLACE INTO page_headers (
                page_number, mushaf_type, part_number, hizb_number, hizb_fraction
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (page_number, mushaf_type.value, part_number, hizb_number, hizb_fraction),
        )
        self.connection.execute(
            "DELETE FROM page_header_chapters WHERE page_number = ? AND mushaf_type = ?",
            (page_number, mushaf_type.value),
        )
        self.connection.executemany(
            """
            INSERT INTO page_header_chapters (page_number, mushaf_type, chapter_number, position)
            VALUES (?, ?, ?, ?)
            """,
            [
                (page_number, mushaf_type.value, chapter_number, position)
                for position, chapter_number in enumerate(chapter_numbers)
            ],
        )

    def close(self) -> None:
        self.connection.close()
