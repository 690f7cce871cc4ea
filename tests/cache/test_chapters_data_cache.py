"""Tests for ChaptersDataCache - catalogue and grouping loaders."""

import asyncio

import pytest

from mushaf_library.services.caching import ChaptersDataCache


@pytest.fixture
def cache(fake_store):
    return ChaptersDataCache(fake_store)


@pytest.fixture
def loaded_cache(cache):
    asyncio.run(cache.load_and_cache())
    return cache


class TestCatalogue:
    def test_load_and_cache_fetches_chapters(self, cache):
        asyncio.run(cache.load_and_cache())

        assert cache.is_cached is True
        assert [c.number for c in cache.all_chapters] == [1, 2, 3]

    def test_callback_only_fires_on_actual_load(self, cache, fake_store):
        counts = []
        asyncio.run(cache.load_and_cache(counts.append))
        asyncio.run(cache.load_and_cache(counts.append))

        assert counts == [3]
        assert fake_store.calls["fetch_all_chapters"] == 1

    def test_concurrent_loads_fetch_once(self, cache, fake_store):
        async def load_many():
            await asyncio.gather(*(cache.load_and_cache() for _ in range(5)))

        asyncio.run(load_many())

        assert fake_store.calls["fetch_all_chapters"] == 1
        assert len(cache.all_chapters) == 3


class TestPartsGrouping:
    def test_groups_chapters_across_all_their_verses(self, loaded_cache):
        asyncio.run(loaded_cache.load_parts_grouping())

        groups = loaded_cache.all_chapters_by_part
        assert [g.part_number for g in groups] == [1, 2]
        assert [c.number for c in groups[0].chapters] == [1, 2]
        assert [c.number for c in groups[1].chapters] == [2, 3]

    def test_first_verse_and_page(self, loaded_cache):
        asyncio.run(loaded_cache.load_parts_grouping())

        part_one, part_two = loaded_cache.all_chapters_by_part
        assert part_one.first_verse.verse_id == 1
        assert part_one.first_page == 1
        assert part_two.first_verse.verse_id == 5
        assert part_two.first_page == 3
        assert part_two.english_title == "Part 2"

    def test_concurrent_loads_fetch_once(self, loaded_cache, fake_store):
        async def load_many():
            await asyncio.gather(*(loaded_cache.load_parts_grouping() for _ in range(8)))

        asyncio.run(load_many())

        assert fake_store.calls["fetch_all_parts"] == 1
        assert fake_store.calls["get_verses_for_chapter"] == 3
        assert loaded_cache.is_parts_cached is True
        assert len(loaded_cache.all_chapters_by_part) == 2

    def test_loaded_before_catalogue_stays_empty(self, cache):
        asyncio.run(cache.load_parts_grouping())
        asyncio.run(cache.load_and_cache())
        asyncio.run(cache.load_parts_grouping())

        assert cache.is_parts_cached is True
        assert cache.all_chapters_by_part == []


class TestQuartersGrouping:
    def test_drops_empty_slots_and_hizbs(self, loaded_cache):
        asyncio.run(loaded_cache.load_quarters_grouping())

        hizbs = loaded_cache.all_chapters_by_hizb
        assert [h.hizb_number for h in hizbs] == [1, 2]
        assert [q.hizb_fraction for q in hizbs[0].quarters] == [0, 1]
        assert [q.hizb_fraction for q in hizbs[1].quarters] == [0, 1]

    def test_slot_membership_uses_fraction(self, loaded_cache):
        asyncio.run(loaded_cache.load_quarters_grouping())

        hizb_one, hizb_two = loaded_cache.all_chapters_by_hizb
        assert [c.number for c in hizb_one.quarters[0].chapters] == [1]
        assert [c.number for c in hizb_one.quarters[1].chapters] == [1, 2]
        # verse 3:2 has no known fraction, so chapter 3 also lands in slot 0
        assert [c.number for c in hizb_two.quarters[0].chapters] == [2, 3]
        assert [c.number for c in hizb_two.quarters[1].chapters] == [3]

    def test_slot_metadata(self, loaded_cache):
        asyncio.run(loaded_cache.load_quarters_grouping())

        slot = loaded_cache.all_chapters_by_hizb[0].quarters[1]
        assert slot.id == 2
        assert slot.quarter_number == 2
        assert slot.arabic_title == "ربع 2"
        assert slot.first_verse.verse_id == 3
        assert slot.first_page == 2

    def test_loaded_once(self, loaded_cache, fake_store):
        asyncio.run(loaded_cache.load_quarters_grouping())
        asyncio.run(loaded_cache.load_quarters_grouping())

        assert fake_store.calls["fetch_all_quarters"] == 1


class TestTypesGrouping:
    def test_splits_meccan_and_medinan(self, loaded_cache):
        loaded_cache.load_types_grouping()

        meccan, medinan = loaded_cache.all_chapters_by_type
        assert (meccan.id, meccan.type, meccan.arabic_type) == ("meccan", "Meccan", "مكية")
        assert (medinan.id, medinan.type, medinan.arabic_type) == ("medinan", "Medinan", "مدنية")
        assert [c.number for c in meccan.chapters] == [1]
        assert [c.number for c in medinan.chapters] == [2, 3]
        assert meccan.first_page == 1
        assert meccan.first_verse is None

    def test_noop_before_catalogue(self, cache):
        cache.load_types_grouping()

        assert cache.is_type_cached is False
        assert cache.all_chapters_by_type == []


class TestLoaderIndependence:
    def test_groupings_load_side_by_side(self, loaded_cache):
        async def load_both():
            await asyncio.gather(
                loaded_cache.load_parts_grouping(),
                loaded_cache.load_quarters_grouping(),
            )

        asyncio.run(load_both())

        assert loaded_cache.is_parts_cached is True
        assert loaded_cache.is_hizb_cached is True

    def test_clear_cache_resets_everything(self, loaded_cache, fake_store):
        asyncio.run(loaded_cache.load_parts_grouping())
        asyncio.run(loaded_cache.load_quarters_grouping())
        loaded_cache.load_types_grouping()

        asyncio.run(loaded_cache.clear_cache())

        assert loaded_cache.is_cached is False
        assert loaded_cache.is_parts_cached is False
        assert loaded_cache.is_hizb_cached is False
        assert loaded_cache.is_type_cached is False
        assert loaded_cache.all_chapters == []
        assert loaded_cache.all_chapters_by_part == []

        asyncio.run(loaded_cache.load_and_cache())
        assert fake_store.calls["fetch_all_chapters"] == 2


class TestReturnedListsAreCopies:
    def test_mutating_catalogue_keeps_cache(self, loaded_cache):
        loaded_cache.all_chapters.clear()

        assert [c.number for c in loaded_cache.all_chapters] == [1, 2, 3]

    def test_mutating_groupings_keeps_cache(self, loaded_cache):
        asyncio.run(loaded_cache.load_parts_grouping())
        asyncio.run(loaded_cache.load_quarters_grouping())
        loaded_cache.load_types_grouping()

        loaded_cache.all_chapters_by_part.clear()
        loaded_cache.all_chapters_by_hizb.clear()
        loaded_cache.all_chapters_by_type.clear()

        assert [g.part_number for g in loaded_cache.all_chapters_by_part] == [1, 2]
        assert [g.hizb_number for g in loaded_cache.all_chapters_by_hizb] == [1, 2]
        assert len(loaded_cache.all_chapters_by_type) == 2
