"""Parts, quarters, store lifecycle and cache management."""

from typing import List, Optional

from mushaf_library.core import Part, Quarter
from mushaf_library.io.store_service import StoreService
from mushaf_library.services.caching import CacheStats, ChaptersDataCache, PageCacheService


class QuranRepository:
    def __init__(
        self,
        store: StoreService,
        chapters_cache: ChaptersDataCache,
        page_cache: PageCacheService,
    ) -> None:
        self._store = store
        self._chapters_cache = chapters_cache
        self._page_cache = page_cache

    async def initialize(self) -> None:
        await self._store.initialize()

    def is_initialized(self) -> bool:
        return self._store.is_initialized

    async def get_all_parts(self) -> List[Part]:
        return await self._store.fetch_all_parts()

    async def get_part(self, number: int) -> Optional[Part]:
        return await self._store.get_part(number)

    async def get_part_for_page(self, page_number: int) -> Optional[Part]:
        return await self._store.get_part_for_page(page_number)

    async def get_part_for_verse(self, chapter_number: int, verse_number: int) -> Optional[Part]:
        return await self._store.get_part_for_verse(chapter_number, verse_number)

    async def get_all_quarters(self) -> List[Quarter]:
        return await self._store.fetch_all_quarters()

    async def get_quarter(self, hizb_number: int, fraction: int) -> Optional[Quarter]:
        return await self._store.get_quarter(hizb_number, fraction)

    async def get_quarter_for_page(self, page_number: int) -> Optional[Quarter]:
        return await self._store.get_quarter_for_page(page_number)

    async def get_quarter_for_verse(
        self, chapter_number: int, verse_number: int
    ) -> Optional[Quarter]:
        return await self._store.get_quarter_for_verse(chapter_number, verse_number)

    async def get_cache_stats(self) -> CacheStats:
        return await self._page_cache.get_cache_stats()

    async def clear_all_caches(self) -> None:
        """Reset both the chapter grouping cache and the page/verse cache."""
        await self._chapters_cache.clear_cache()
        await self._page_cache.clear_all_cache()
