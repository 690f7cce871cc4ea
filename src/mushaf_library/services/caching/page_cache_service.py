"""In-memory read-through cache of page verses, page headers and chapter verses."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from mushaf_library.core import PageHeaderInfo, Verse
from mushaf_library.io.store_service import StoreService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the cache sizes at the time of the call."""

    cached_pages_count: int
    cached_chapters_count: int
    total_verses_cached: int


class PageCacheService:
    """
    Page- and chapter-scoped verse cache populated on explicit request.

    Store fetches run outside the lock and each map write takes the lock on
    its own, so concurrent ``cache_page_data`` calls for different pages do
    not serialize store I/O. Readers may observe a page whose verses are
    cached but whose header is not yet.
    """

    def __init__(self, store: StoreService):
        self._store = store
        self._lock = asyncio.Lock()
        # page number -> verses
        self._page_verses: Dict[int, List[Verse]] = {}
        # page number -> header
        self._page_headers: Dict[int, PageHeaderInfo] = {}
        # chapter number -> verses
        self._chapter_verses: Dict[int, List[Verse]] = {}

    async def cache_page_data(self, page_number: int) -> None:
        """Fetch and store the verses, header and chapter verses of one page.

        Empty results are not stored. Chapters already cached are not refetched.
        """
        verses = await self._store.get_verses_for_page(page_number)
        if verses:
            async with self._lock:
                self._page_verses[page_number] = list(verses)

        header = await self._store.get_page_header_info(page_number)
        if header is not None:
            async with self._lock:
                self._page_headers[page_number] = header

        chapters = await self._store.get_chapters_on_page(page_number)
        for chapter in chapters:
            async with self._lock:
                already_cached = chapter.number in self._chapter_verses
            if already_cached:
                continue
            chapter_verses = await self._store.get_verses_for_chapter(chapter.number)
            if chapter_verses:
                async with self._lock:
                    self._chapter_verses[chapter.number] = list(chapter_verses)

        logger.debug(
            "Cached page %s: %d verses, header=%s, %d chapters",
            page_number,
            len(verses),
            header is not None,
            len(chapters),
        )

    async def cache_page_range(self, start_page: int, end_page: int) -> None:
        """Cache pages ``start_page`` through ``end_page`` inclusive, in ascending order.

        Nothing is cached when ``start_page > end_page``.
        """
        for page_number in range(start_page, end_page + 1):
            await self.cache_page_data(page_number)

    async def get_cached_verses(self, page_number: int) -> Optional[List[Verse]]:
        async with self._lock:
            verses = self._page_verses.get(page_number)
        return list(verses) if verses is not None else None

    async def get_cached_page_header(self, page_number: int) -> Optional[PageHeaderInfo]:
        async with self._lock:
            return self._page_headers.get(page_number)

    async def get_cached_chapter_verses(self, chapter_number: int) -> Optional[List[Verse]]:
        async with self._lock:
            verses = self._chapter_verses.get(chapter_number)
        return list(verses) if verses is not None else None

    async def is_page_cached(self, page_number: int) -> bool:
        """True only when both the verses and the header of the page are cached."""
        async with self._lock:
            return page_number in self._page_verses and page_number in self._page_headers

    async def clear_page_cache(self, page_number: int) -> None:
        """Drop the page's verses and header. Chapter verse entries are kept."""
        async with self._lock:
            self._page_verses.pop(page_number, None)
            self._page_headers.pop(page_number, None)

    async def clear_chapter_cache(self, chapter_number: int) -> None:
        async with self._lock:
            self._chapter_verses.pop(chapter_number, None)

    async def clear_all_cache(self) -> None:
        async with self._lock:
            self._page_verses.clear()
            self._page_headers.clear()
            self._chapter_verses.clear()

    async def get_cache_stats(self) -> CacheStats:
        async with self._lock:
            return CacheStats(
                cached_pages_count=len(self._page_verses),
                cached_chapters_count=len(self._chapter_verses),
                total_verses_cached=sum(len(v) for v in self._page_verses.values()),
            )
