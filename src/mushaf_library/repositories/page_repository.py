"""Page access with cache-first header reads and explicit pre-caching."""

from typing import Optional

from mushaf_library.core import MushafType, Page, PageHeaderInfo
from mushaf_library.io.store_service import StoreService
from mushaf_library.services.caching import PageCacheService


class PageRepository:
    """Pages and page headers. Pre-caching is explicit via ``cache_page``/``cache_page_range``."""

    def __init__(self, store: StoreService, cache: PageCacheService) -> None:
        self._store = store
        self._cache = cache

    async def get_page(self, number: int) -> Optional[Page]:
        return await self._store.get_page(number)

    async def get_total_pages(self) -> int:
        return await self._store.get_total_pages()

    async def get_page_header_info(
        self, page_number: int, mushaf_type: MushafType = MushafType.HAFS_1441
    ) -> Optional[PageHeaderInfo]:
        """Cached header if present, otherwise read from the store without caching it.

        The page cache holds the HAFS_1441 layout only.
        """
        if mushaf_type is MushafType.HAFS_1441:
            cached = await self._cache.get_cached_page_header(page_number)
            if cached is not None:
                return cached
        return await self._store.get_page_header_info(page_number, mushaf_type)

    async def cache_page(self, page_number: int) -> None:
        await self._cache.cache_page_data(page_number)

    async def cache_page_range(self, start_page: int, end_page: int) -> None:
        await self._cache.cache_page_range(start_page, end_page)

    async def is_page_cached(self, page_number: int) -> bool:
        return await self._cache.is_page_cached(page_number)

    async def clear_page_cache(self, page_number: int) -> None:
        await self._cache.clear_page_cache(page_number)

    async def clear_all_page_cache(self) -> None:
        await self._cache.clear_all_cache()
