"""Chapter catalogue and groupings."""

from typing import Callable, List, Optional

from mushaf_library.core import Chapter, ChaptersByHizb, ChaptersByPart, ChaptersByType
from mushaf_library.io.store_service import StoreService
from mushaf_library.services.caching import ChaptersDataCache


class ChapterRepository:
    """
    Chapters from the catalogue cache when loaded, from the store otherwise.

    Grouping reads load the catalogue first, so they never see an empty
    catalogue because of call order.
    """

    def __init__(self, store: StoreService, cache: ChaptersDataCache) -> None:
        self._store = store
        self._cache = cache

    async def get_all_chapters(self) -> List[Chapter]:
        if self._cache.is_cached and self._cache.all_chapters:
            return self._cache.all_chapters
        return await self._store.fetch_all_chapters()

    async def get_chapter(self, number: int) -> Optional[Chapter]:
        return await self._store.get_chapter(number)

    async def get_chapter_for_page(self, page_number: int) -> Optional[Chapter]:
        return await self._store.get_chapter_for_page(page_number)

    async def get_chapters_on_page(self, page_number: int) -> List[Chapter]:
        return await self._store.get_chapters_on_page(page_number)

    async def search_chapters(self, query: str) -> List[Chapter]:
        return await self._store.search_chapters(query)

    async def get_chapters_by_part(self) -> List[ChaptersByPart]:
        await self._ensure_catalogue()
        if not self._cache.is_parts_cached:
            await self._cache.load_parts_grouping()
        return self._cache.all_chapters_by_part

    async def get_chapters_by_hizb(self) -> List[ChaptersByHizb]:
        await self._ensure_catalogue()
        if not self._cache.is_hizb_cached:
            await self._cache.load_quarters_grouping()
        return self._cache.all_chapters_by_hizb

    async def get_chapters_by_type(self) -> List[ChaptersByType]:
        await self._ensure_catalogue()
        if not self._cache.is_type_cached:
            self._cache.load_types_grouping()
        return self._cache.all_chapters_by_type

    async def load_and_cache_chapters(
        self, on_progress: Optional[Callable[[int], None]] = None
    ) -> None:
        await self._cache.load_and_cache(on_progress)

    async def clear_cache(self) -> None:
        await self._cache.clear_cache()

    async def _ensure_catalogue(self) -> None:
        if not self._cache.is_cached:
            await self._cache.load_and_cache()
