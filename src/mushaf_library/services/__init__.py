"""Services layer - caches, audio metadata and configuration."""

from mushaf_library.services.settings_manager import SettingsManager

# Caching services
from mushaf_library.services.caching import CacheStats, ChaptersDataCache, PageCacheService

# Audio services
from mushaf_library.services.audio import AyahTimingService, ReciterService

__all__ = [
    "AyahTimingService",
    "CacheStats",
    "ChaptersDataCache",
    "PageCacheService",
    "ReciterService",
    "SettingsManager",
]
