from mushaf_library.core import Chapter, MushafType, Verse
from mushaf_library.io import DatabaseManager

import pytest


@pytest.fixture
def manager(tmp_path):
    db_path = tmp_path / "data" / "mushaf.db"
    db_manager = DatabaseManager(db_path)
    db_manager.ensure_schema()
    yield db_manager
    db_manager.close()


def test_schema_created(manager):
    cur = manager.connection.cursor()
    cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
    table_names = {row["name"] for row in cur.fetchall()}
    assert {
        "chapters",
        "parts",
        "quarters",
        "pages",
        "verses",
        "verse_pages",
        "page_headers",
        "page_header_chapters",
        "bookmarks",
        "last_read_positions",
        "reading_history",
        "search_history",
    }.issubset(table_names)


def test_parent_directory_is_created(manager, tmp_path):
    assert (tmp_path / "data" / "mushaf.db").exists()


def test_ensure_schema_is_idempotent(manager):
    manager.ensure_schema()
    manager.ensure_schema()


def test_insert_verse_records_page_per_layout(manager):
    verse = Verse(verse_id=10, human_readable_id="2_3", number=3, text="", chapter_number=2,
                  page_number=2)
    manager.insert_verse(verse, page_1405=3)
    manager.connection.commit()

    rows = manager.connection.execute(
        "SELECT mushaf_type, page_number FROM verse_pages WHERE verse_id = 10"
    ).fetchall()
    placements = {row["mushaf_type"]: row["page_number"] for row in rows}
    assert placements == {MushafType.HAFS_1441.value: 2, MushafType.HAFS_1405.value: 3}


def test_insert_page_header_replaces_chapters(manager):
    manager.insert_page_header(1, MushafType.HAFS_1441, 1, 1, 0, [1, 2])
    manager.insert_page_header(1, MushafType.HAFS_1441, 1, 1, 0, [2])
    manager.connection.commit()

    rows = manager.connection.execute(
        "SELECT chapter_number FROM page_header_chapters WHERE page_number = 1"
    ).fetchall()
    assert [row["chapter_number"] for row in rows] == [2]


def test_clear_content_keeps_user_data(manager):
    manager.insert_chapter(Chapter(1, 1, True, "Al-Fatiha", "الفاتحة", "The Opening"))
    manager.connection.execute(
        "INSERT INTO bookmarks (id, chapter_number, verse_number, created_at) "
        "VALUES ('b1', 1, 1, 0)"
    )
    manager.connection.commit()

    manager.clear_content()
    manager.connection.commit()

    cur = manager.connection.cursor()
    assert cur.execute("SELECT COUNT(*) FROM chapters").fetchone()[0] == 0
    assert cur.execute("SELECT COUNT(*) FROM bookmarks").fetchone()[0] == 1
