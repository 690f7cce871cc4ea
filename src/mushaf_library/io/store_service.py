"""Store contract - async access to the durable Quran dataset."""

from abc import ABC, abstractmethod
from typing import List, Optional

from mushaf_library.core import (
    Chapter,
    MushafType,
    Page,
    PageHeaderInfo,
    Part,
    Quarter,
    Verse,
)


class StoreService(ABC):
    """
    Abstract interface over the persistent content store.

    Caches and repositories depend on this abstraction, not on a concrete
    database. Lookups return None when nothing matches and bulk fetches
    return an empty list; absence is never reported as an exception.
    """

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Open the underlying storage. Safe to call more than once."""
        pass

    # Chapters

    @abstractmethod
    async def fetch_all_chapters(self) -> List[Chapter]:
        """All chapters ordered by number."""
        pass

    @abstractmethod
    async def get_chapter(self, number: int) -> Optional[Chapter]:
        pass

    @abstractmethod
    async def get_chapter_for_page(self, page_number: int) -> Optional[Chapter]:
        pass

    @abstractmethod
    async def get_chapters_on_page(self, page_number: int) -> List[Chapter]:
        """Chapters with at least one verse or header on the page, ordered by number."""
        pass

    # Pages

    @abstractmethod
    async def get_page(self, number: int) -> Optional[Page]:
        pass

    @abstractmethod
    async def get_total_pages(self) -> int:
        pass

    @abstractmethod
    async def get_page_header_info(
        self, page_number: int, mushaf_type: MushafType = MushafType.HAFS_1441
    ) -> Optional[PageHeaderInfo]:
        pass

    # Verses

    @abstractmethod
    async def get_verses_for_page(
        self, page_number: int, mushaf_type: MushafType = MushafType.HAFS_1441
    ) -> List[Verse]:
        pass

    @abstractmethod
    async def get_verses_for_chapter(self, chapter_number: int) -> List[Verse]:
        """Verses of a chapter ordered by verse number."""
        pass

    @abstractmethod
    async def get_verse(self, chapter_number: int, verse_number: int) -> Optional[Verse]:
        pass

    @abstractmethod
    async def get_sajda_verses(self) -> List[Verse]:
        pass

    # Parts and quarters

    @abstractmethod
    async def fetch_all_parts(self) -> List[Part]:
        pass

    @abstractmethod
    async def get_part(self, number: int) -> Optional[Part]:
        pass

    @abstractmethod
    async def get_part_for_page(self, page_number: int) -> Optional[Part]:
        pass

    @abstractmethod
    async def get_part_for_verse(self, chapter_number: int, verse_number: int) -> Optional[Part]:
        pass

    @abstractmethod
    async def fetch_all_quarters(self) -> List[Quarter]:
        """All quarters ordered by (hizb_number, hizb_fraction)."""
        pass

    @abstractmethod
    async def get_quarter(self, hizb_number: int, fraction: int) -> Optional[Quarter]:
        pass

    @abstractmethod
    async def get_quarter_for_page(self, page_number: int) -> Optional[Quarter]:
        pass

    @abstractmethod
    async def get_quarter_for_verse(
        self, chapter_number: int, verse_number: int
    ) -> Optional[Quarter]:
        pass

    # Search

    @abstractmethod
    async def search_verses(self, query: str) -> List[Verse]:
        pass

    @abstractmethod
    async def search_chapters(self, query: str) -> List[Chapter]:
        pass
