"""SQLite implementation of the content store."""

import logging
import sqlite3
from typing import List, Optional, Sequence

from mushaf_library.core import (
    Chapter,
    ChapterInfo,
    MushafType,
    Page,
    PageHeaderInfo,
    Part,
    Quarter,
    Verse,
)
from mushaf_library.core.quran_constants import SAJDA_VERSES, parse_verse_reference

from .database_manager import DatabaseManager
from .store_service import StoreService

logger = logging.getLogger(__name__)

_VERSE_COLUMNS = """
    v.verse_id, v.human_readable_id, v.chapter_number, v.number, v.text,
    v.text_without_tashkil, v.uthmanic_hafs_text, v.hafs_smart_text,
    v.searchable_text, v.page_number, v.part_number, v.hizb_number, v.hizb_fraction
"""


class SqliteStoreService(StoreService):
    """Reads Quran content from the tables owned by ``DatabaseManager``.

    Statements run inline inside the coroutines; a single connection is used
    from the event loop thread only.
    """

    def __init__(self, database: DatabaseManager) -> None:
        if database is None:
            raise RuntimeError("Database manager required")
        self.database = database
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        if self._initialized:
            return
        try:
            self.database.ensure_schema()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to initialize store: {e}") from e
        self._initialized = True
        logger.info("Store initialized at %s", self.database.db_path)

    # Chapters

    async def fetch_all_chapters(self) -> List[Chapter]:
        rows = self._fetch_all("SELECT * FROM chapters ORDER BY number")
        return [self._row_to_chapter(row) for row in rows]

    async def get_chapter(self, number: int) -> Optional[Chapter]:
        row = self._fetch_one("SELECT * FROM chapters WHERE number = ?", (number,))
        return self._row_to_chapter(row) if row else None

    async def get_chapter_for_page(self, page_number: int) -> Optional[Chapter]:
        # A chapter starting on the page wins over the chapter of its first verse.
        row = self._fetch_one(
            """
            SELECT c.* FROM page_header_chapters phc
            JOIN chapters c ON c.number = phc.chapter_number
            WHERE phc.page_number = ? AND phc.mushaf_type = ?
            ORDER BY phc.position
            LIMIT 1
            """,
            (page_number, MushafType.HAFS_1441.value),
        )
        if row is None:
            row = self._fetch_one(
                """
                SELECT c.* FROM verse_pages vp
                JOIN verses v ON v.verse_id = vp.verse_id
                JOIN chapters c ON c.number = v.chapter_number
                WHERE vp.page_number = ? AND vp.mushaf_type = ?
                ORDER BY v.verse_id
                LIMIT 1
                """,
                (page_number, MushafType.HAFS_1441.value),
            )
        return self._row_to_chapter(row) if row else None

    async def get_chapters_on_page(self, page_number: int) -> List[Chapter]:
        rows = self._fetch_all(
            """
            SELECT * FROM chapters WHERE number IN (
                SELECT chapter_number FROM page_header_chapters
                WHERE page_number = ? AND mushaf_type = ?
                UNION
                SELECT v.chapter_number FROM verse_pages vp
                JOIN verses v ON v.verse_id = vp.verse_id
                WHERE vp.page_number = ? AND vp.mushaf_type = ?
            )
            ORDER BY number
            """,
            (
                page_number,
                MushafType.HAFS_1441.value,
                page_number,
                MushafType.HAFS_1441.value,
            ),
        )
        return [self._row_to_chapter(row) for row in rows]

    # Pages

    async def get_page(self, number: int) -> Optional[Page]:
        row = self._fetch_one("SELECT * FROM pages WHERE number = ?", (number,))
        return self._row_to_page(row) if row else None

    async def get_total_pages(self) -> int:
        row = self._fetch_one("SELECT COUNT(*) AS total FROM pages")
        return row["total"] if row else 0

    async def get_page_header_info(
        self, page_number: int, mushaf_type: MushafType = MushafType.HAFS_1441
    ) -> Optional[PageHeaderInfo]:
        header = self._fetch_one(
            """
            SELECT
                ph.part_number,
                ph.hizb_number,
                ph.hizb_fraction,
                p.arabic_title AS part_arabic_title,
                p.english_title AS part_english_title,
                q.arabic_title AS quarter_arabic_title,
                q.english_title AS quarter_english_title
            FROM page_headers ph
            LEFT JOIN parts p ON p.number = ph.part_number
            LEFT JOIN quarters q
                ON q.hizb_number = ph.hizb_number AND q.hizb_fraction = ph.hizb_fraction
            WHERE ph.page_number = ? AND ph.mushaf_type = ?
            """,
            (page_number, mushaf_type.value),
        )
        if header is None:
            return None
        chapter_rows = self._fetch_all(
            """
            SELECT c.number, c.arabic_title, c.english_title
            FROM page_header_chapters phc
            JOIN chapters c ON c.number = phc.chapter_number
            WHERE phc.page_number = ? AND phc.mushaf_type = ?
            ORDER BY phc.position
            """,
            (page_number, mushaf_type.value),
        )
        has_part = header["part_arabic_title"] is not None
        has_quarter = header["quarter_arabic_title"] is not None
        return PageHeaderInfo(
            part_number=header["part_number"] if has_part else None,
            part_arabic_title=header["part_arabic_title"],
            part_english_title=header["part_english_title"],
            hizb_number=header["hizb_number"] if has_quarter else None,
            hizb_fraction=header["hizb_fraction"] if has_quarter else None,
            quarter_arabic_title=header["quarter_arabic_title"],
            quarter_english_title=header["quarter_english_title"],
            chapters=[
                ChapterInfo(
                    number=row["number"],
                    arabic_title=row["arabic_title"],
                    english_title=row["english_title"],
                )
                for row in chapter_rows
            ],
        )

    # Verses

    async def get_verses_for_page(
        self, page_number: int, mushaf_type: MushafType = MushafType.HAFS_1441
    ) -> List[Verse]:
        rows = self._fetch_all(
            f"""
            SELECT {_VERSE_COLUMNS}
            FROM verse_pages vp
            JOIN verses v ON v.verse_id = vp.verse_id
            WHERE vp.page_number = ? AND vp.mushaf_type = ?
            ORDER BY v.verse_id
            """,
            (page_number, mushaf_type.value),
        )
        return [self._row_to_verse(row) for row in rows]

    async def get_verses_for_chapter(self, chapter_number: int) -> List[Verse]:
        rows = self._fetch_all(
            f"SELECT {_VERSE_COLUMNS} FROM verses v WHERE v.chapter_number = ? ORDER BY v.number",
            (chapter_number,),
        )
        return [self._row_to_verse(row) for row in rows]

    async def get_verse(self, chapter_number: int, verse_number: int) -> Optional[Verse]:
        row = self._fetch_one(
            f"SELECT {_VERSE_COLUMNS} FROM verses v WHERE v.chapter_number = ? AND v.number = ?",
            (chapter_number, verse_number),
        )
        return self._row_to_verse(row) if row else None

    async def get_sajda_verses(self) -> List[Verse]:
        verses = []
        for reference in SAJDA_VERSES:
            chapter_number, verse_number = parse_verse_reference(reference)
            verse = await self.get_verse(chapter_number, verse_number)
            if verse is not None:
                verses.append(verse)
        return verses

    # Parts and quarters

    async def fetch_all_parts(self) -> List[Part]:
        rows = self._fetch_all("SELECT * FROM parts ORDER BY number")
        return [self._row_to_part(row) for row in rows]

    async def get_part(self, number: int) -> Optional[Part]:
        row = self._fetch_one("SELECT * FROM parts WHERE number = ?", (number,))
        return self._row_to_part(row) if row else None

    async def get_part_for_page(self, page_number: int) -> Optional[Part]:
        row = self._fetch_one(
            """
            SELECT p.* FROM page_headers ph
            JOIN parts p ON p.number = ph.part_number
            WHERE ph.page_number = ? AND ph.mushaf_type = ?
            """,
            (page_number, MushafType.HAFS_1441.value),
        )
        return self._row_to_part(row) if row else None

    async def get_part_for_verse(self, chapter_number: int, verse_number: int) -> Optional[Part]:
        row = self._fetch_one(
            """
            SELECT p.* FROM verses v
            JOIN parts p ON p.number = v.part_number
            WHERE v.chapter_number = ? AND v.number = ?
            """,
            (chapter_number, verse_number),
        )
        return self._row_to_part(row) if row else None

    async def fetch_all_quarters(self) -> List[Quarter]:
        rows = self._fetch_all("SELECT * FROM quarters ORDER BY hizb_number, hizb_fraction")
        return [self._row_to_quarter(row) for row in rows]

    async def get_quarter(self, hizb_number: int, fraction: int) -> Optional[Quarter]:
        row = self._fetch_one(
            "SELECT * FROM quarters WHERE hizb_number = ? AND hizb_fraction = ?",
            (hizb_number, fraction),
        )
        return self._row_to_quarter(row) if row else None

    async def get_quarter_for_page(self, page_number: int) -> Optional[Quarter]:
        row = self._fetch_one(
            """
            SELECT q.* FROM page_headers ph
            JOIN quarters q
                ON q.hizb_number = ph.hizb_number AND q.hizb_fraction = ph.hizb_fraction
            WHERE ph.page_number = ? AND ph.mushaf_type = ?
            """,
            (page_number, MushafType.HAFS_1441.value),
        )
        return self._row_to_quarter(row) if row else None

    async def get_quarter_for_verse(
        self, chapter_number: int, verse_number: int
    ) -> Optional[Quarter]:
        row = self._fetch_one(
            """
            SELECT q.* FROM verses v
            JOIN quarters q
                ON q.hizb_number = v.hizb_number AND q.hizb_fraction = v.hizb_fraction
            WHERE v.chapter_number = ? AND v.number = ?
            """,
            (chapter_number, verse_number),
        )
        return self._row_to_quarter(row) if row else None

    # Search

    async def search_verses(self, query: str) -> List[Verse]:
        query = (query or "").strip()
        if not query:
            return []
        rows = self._fetch_all(
            f"""
            SELECT {_VERSE_COLUMNS} FROM verses v
            WHERE instr(lower(v.searchable_text), lower(?)) > 0
            ORDER BY v.verse_id
            """,
            (query,),
        )
        return [self._row_to_verse(row) for row in rows]

    async def search_chapters(self, query: str) -> List[Chapter]:
        query = (query or "").strip()
        if not query:
            return []
        rows = self._fetch_all(
            """
            SELECT * FROM chapters
            WHERE instr(lower(searchable_text), lower(?)) > 0
               OR instr(lower(searchable_keywords), lower(?)) > 0
            ORDER BY number
            """,
            (query, query),
        )
        return [self._row_to_chapter(row) for row in rows]

    def _fetch_all(self, sql: str, params: Sequence = ()) -> List[sqlite3.Row]:
        try:
            return self.database.connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to query store: {e}") from e

    def _fetch_one(self, sql: str, params: Sequence = ()) -> Optional[sqlite3.Row]:
        try:
            return self.database.connection.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to query store: {e}") from e

    @staticmethod
    def _row_to_chapter(row: sqlite3.Row) -> Chapter:
        return Chapter(
            identifier=row["id"],
            number=row["number"],
            is_meccan=bool(row["is_meccan"]),
            title=row["title"],
            arabic_title=row["arabic_title"],
            english_title=row["english_title"],
            title_code_point=row["title_code_point"],
            searchable_text=row["searchable_text"],
            searchable_keywords=row["searchable_keywords"],
            verses_count=row["verses_count"],
            revelation_order=row["revelation_order"],
        )

    @staticmethod
    def _row_to_verse(row: sqlite3.Row) -> Verse:
        return Verse(
            verse_id=row["verse_id"],
            human_readable_id=row["human_readable_id"],
            number=row["number"],
            text=row["text"],
            text_without_tashkil=row["text_without_tashkil"],
            uthmanic_hafs_text=row["uthmanic_hafs_text"],
            hafs_smart_text=row["hafs_smart_text"],
            searchable_text=row["searchable_text"],
            chapter_number=row["chapter_number"],
            page_number=row["page_number"],
            part_number=row["part_number"],
            hizb_number=row["hizb_number"],
            hizb_fraction=row["hizb_fraction"],
        )

    @staticmethod
    def _row_to_part(row: sqlite3.Row) -> Part:
        return Part(
            identifier=row["id"],
            number=row["number"],
            arabic_title=row["arabic_title"],
            english_title=row["english_title"],
        )

    @staticmethod
    def _row_to_quarter(row: sqlite3.Row) -> Quarter:
        return Quarter(
            identifier=row["id"],
            hizb_number=row["hizb_number"],
            hizb_fraction=row["hizb_fraction"],
            arabic_title=row["arabic_title"],
            english_title=row["english_title"],
            part_number=row["part_number"],
        )

    @staticmethod
    def _row_to_page(row: sqlite3.Row) -> Page:
        return Page(identifier=row["id"], number=row["number"], is_right=bool(row["is_right"]))
