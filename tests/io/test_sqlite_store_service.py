"""Tests for SqliteStoreService over the sample content dataset."""

import asyncio

import pytest

from mushaf_library.core import MushafType, Verse
from mushaf_library.io import SqliteStoreService


@pytest.fixture
def store(sqlite_store):
    asyncio.run(sqlite_store.initialize())
    return sqlite_store


def test_requires_database():
    with pytest.raises(RuntimeError, match="Database manager required"):
        SqliteStoreService(None)


def test_initialize_sets_flag(sqlite_store):
    assert sqlite_store.is_initialized is False
    asyncio.run(sqlite_store.initialize())
    assert sqlite_store.is_initialized is True


class TestChapters:
    def test_fetch_all_chapters_ordered(self, store):
        chapters = asyncio.run(store.fetch_all_chapters())
        assert [c.number for c in chapters] == [1, 2]
        assert chapters[0].is_meccan is True
        assert chapters[1].english_title == "The Cow"

    def test_get_chapter_missing_returns_none(self, store):
        assert asyncio.run(store.get_chapter(114)) is None

    def test_chapter_for_page_prefers_header_chapter(self, store):
        assert asyncio.run(store.get_chapter_for_page(2)).number == 2

    def test_chapters_on_page(self, store):
        assert [c.number for c in asyncio.run(store.get_chapters_on_page(1))] == [1]
        assert asyncio.run(store.get_chapters_on_page(99)) == []

    def test_search_chapters_matches_keywords(self, store):
        assert [c.number for c in asyncio.run(store.search_chapters("COW"))] == [2]
        assert asyncio.run(store.search_chapters("   ")) == []


class TestPages:
    def test_get_page_and_total(self, store):
        page = asyncio.run(store.get_page(1))
        assert page.is_right is True
        assert asyncio.run(store.get_total_pages()) == 2
        assert asyncio.run(store.get_page(3)) is None

    def test_header_info(self, store):
        header = asyncio.run(store.get_page_header_info(2))

        assert header.part_number == 1
        assert header.part_english_title == "Part 1"
        assert header.hizb_number == 1
        assert header.hizb_fraction == 1
        assert header.quarter_english_title == "Q2"
        assert [c.number for c in header.chapters] == [2]

    def test_header_info_per_layout(self, store):
        header = asyncio.run(store.get_page_header_info(1, MushafType.HAFS_1405))
        assert [c.number for c in header.chapters] == [1, 2]
        assert asyncio.run(store.get_page_header_info(2, MushafType.HAFS_1405)) is None


class TestVerses:
    def test_verses_for_page_per_layout(self, store):
        modern = asyncio.run(store.get_verses_for_page(1))
        older = asyncio.run(store.get_verses_for_page(1, MushafType.HAFS_1405))

        assert [v.verse_id for v in modern] == [1, 2, 3]
        assert [v.verse_id for v in older] == [1, 2, 3, 4]

    def test_verses_for_chapter(self, store):
        verses = asyncio.run(store.get_verses_for_chapter(2))
        assert [v.human_readable_id for v in verses] == ["2_1", "2_2"]
        assert verses[0].hizb_fraction == 1

    def test_get_verse(self, store):
        verse = asyncio.run(store.get_verse(1, 2))
        assert verse.verse_reference == "1:2"
        assert asyncio.run(store.get_verse(1, 99)) is None

    def test_search_verses_case_insensitive(self, store):
        verses = asyncio.run(store.search_verses("AR-RAHMAN"))
        assert [v.verse_id for v in verses] == [1, 3]

    def test_sajda_verses(self, store, database):
        assert asyncio.run(store.get_sajda_verses()) == []

        database.insert_verse(
            Verse(verse_id=1160, human_readable_id="7_206", number=206, text="",
                  chapter_number=7, page_number=176)
        )
        database.connection.commit()

        sajda = asyncio.run(store.get_sajda_verses())
        assert [v.verse_reference for v in sajda] == ["7:206"]


class TestPartsAndQuarters:
    def test_parts(self, store):
        assert [p.number for p in asyncio.run(store.fetch_all_parts())] == [1]
        assert asyncio.run(store.get_part(1)).english_title == "Part 1"
        assert asyncio.run(store.get_part(30)) is None

    def test_part_for_page_and_verse(self, store):
        assert asyncio.run(store.get_part_for_page(2)).number == 1
        assert asyncio.run(store.get_part_for_verse(2, 1)).number == 1
        assert asyncio.run(store.get_part_for_page(9)) is None

    def test_quarters(self, store):
        quarters = asyncio.run(store.fetch_all_quarters())
        assert [(q.hizb_number, q.hizb_fraction) for q in quarters] == [(1, 0), (1, 1)]
        assert asyncio.run(store.get_quarter(1, 1)).english_title == "Q2"
        assert asyncio.run(store.get_quarter(1, 3)) is None

    def test_quarter_for_page_and_verse(self, store):
        assert asyncio.run(store.get_quarter_for_page(1)).hizb_fraction == 0
        assert asyncio.run(store.get_quarter_for_verse(2, 2)).hizb_fraction == 1


def test_query_failure_raises_runtime_error(store, database):
    database.connection.execute("DROP TABLE chapters")

    with pytest.raises(RuntimeError, match="Failed to query store"):
        asyncio.run(store.fetch_all_chapters())
