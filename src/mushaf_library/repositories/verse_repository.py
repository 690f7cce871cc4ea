"""Verse access with cache-first reads."""

from typing import List, Optional

from mushaf_library.core import MushafType, Verse
from mushaf_library.io.store_service import StoreService
from mushaf_library.services.caching import PageCacheService


class VerseRepository:
    """
    Verses by page, chapter or reference.

    Page and chapter reads return cached lists when present (page reads only
    for the HAFS_1441 layout the cache holds); a miss reads the store and
    leaves the cache untouched.
    """

    def __init__(self, store: StoreService, cache: PageCacheService) -> None:
        self._store = store
        self._cache = cache

    async def get_verses_for_page(
        self, page_number: int, mushaf_type: MushafType = MushafType.HAFS_1441
    ) -> List[Verse]:
        if mushaf_type is MushafType.HAFS_1441:
            cached = await self._cache.get_cached_verses(page_number)
            if cached is not None:
                return cached
        return await self._store.get_verses_for_page(page_number, mushaf_type)

    async def get_verses_for_chapter(self, chapter_number: int) -> List[Verse]:
        cached = await self._cache.get_cached_chapter_verses(chapter_number)
        if cached is not None:
            return cached
        return await self._store.get_verses_for_chapter(chapter_number)

    async def get_verse(self, chapter_number: int, verse_number: int) -> Optional[Verse]:
        return await self._store.get_verse(chapter_number, verse_number)

    async def get_sajda_verses(self) -> List[Verse]:
        return await self._store.get_sajda_verses()

    async def search_verses(self, query: str) -> List[Verse]:
        return await self._store.search_verses(query)

    async def get_cached_verses_for_page(self, page_number: int) -> Optional[List[Verse]]:
        return await self._cache.get_cached_verses(page_number)

    async def get_cached_verses_for_chapter(self, chapter_number: int) -> Optional[List[Verse]]:
        return await self._cache.get_cached_chapter_verses(chapter_number)
