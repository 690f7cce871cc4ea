"""Caching services - page/verse cache and chapter grouping cache."""

from mushaf_library.services.caching.chapters_data_cache import ChaptersDataCache
from mushaf_library.services.caching.page_cache_service import CacheStats, PageCacheService

__all__ = [
    "CacheStats",
    "ChaptersDataCache",
    "PageCacheService",
]
