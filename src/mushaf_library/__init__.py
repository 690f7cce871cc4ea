"""
Mushaf Library - Quran content access, caching and user data.

This package provides the data layer of a mushaf reader:
- Page, verse and chapter access over an async store
- Page and chapter-grouping caches
- Bookmarks, reading history, search history and preferences
- Versioned backup export/import
"""

__version__ = "0.1.0"

from mushaf_library.container import MushafContainer
from mushaf_library.errors import NotInitializedError

__all__ = [
    "MushafContainer",
    "NotInitializedError",
]
