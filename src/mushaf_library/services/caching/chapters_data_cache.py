"""Load-once cache of the chapter catalogue and its part / hizb / type groupings."""

import asyncio
import logging
from typing import Callable, Dict, List, Optional

from mushaf_library.core import (
    Chapter,
    ChaptersByHizb,
    ChaptersByPart,
    ChaptersByQuarter,
    ChaptersByType,
    Verse,
)
from mushaf_library.io.store_service import StoreService

logger = logging.getLogger(__name__)

QUARTERS_PER_HIZB = 4


class ChaptersDataCache:
    """
    Chapter catalogue plus three lazily computed groupings.

    Each loader runs its whole body under its own lock, so repeated or
    concurrent calls to the same loader fetch from the store once, while
    loaders for different groupings may run side by side.

    The part and hizb groupings resolve chapters from the catalogue loaded by
    ``load_and_cache``; calling them first yields empty groupings which stay
    cached until ``clear_cache``.
    """

    def __init__(self, store: StoreService):
        self._store = store
        self._catalogue_lock = asyncio.Lock()
        self._parts_lock = asyncio.Lock()
        self._quarters_lock = asyncio.Lock()

        self._all_chapters: List[Chapter] = []
        self._all_chapters_by_part: List[ChaptersByPart] = []
        self._all_chapters_by_hizb: List[ChaptersByHizb] = []
        self._all_chapters_by_type: List[ChaptersByType] = []

        self._is_cached = False
        self._is_parts_cached = False
        self._is_hizb_cached = False
        self._is_type_cached = False

    @property
    def all_chapters(self) -> List[Chapter]:
        return list(self._all_chapters)

    @property
    def all_chapters_by_part(self) -> List[ChaptersByPart]:
        return list(self._all_chapters_by_part)

    @property
    def all_chapters_by_hizb(self) -> List[ChaptersByHizb]:
        return list(self._all_chapters_by_hizb)

    @property
    def all_chapters_by_type(self) -> List[ChaptersByType]:
        return list(self._all_chapters_by_type)

    @property
    def is_cached(self) -> bool:
        return self._is_cached

    @property
    def is_parts_cached(self) -> bool:
        return self._is_parts_cached

    @property
    def is_hizb_cached(self) -> bool:
        return self._is_hizb_cached

    @property
    def is_type_cached(self) -> bool:
        return self._is_type_cached

    async def load_and_cache(
        self, on_batch_loaded: Optional[Callable[[int], None]] = None
    ) -> None:
        """
        Load the chapter catalogue once.

        Args:
            on_batch_loaded: Called with the number of chapters after a load.
                Not called when the catalogue was already cached.
        """
        async with self._catalogue_lock:
            if self._is_cached and self._all_chapters:
                return

            chapters = await self._store.fetch_all_chapters()
            self._all_chapters = list(chapters)
            if on_batch_loaded is not None:
                on_batch_loaded(len(chapters))
            self._is_cached = True
            logger.info("Loaded %d chapters", len(chapters))

    async def load_parts_grouping(self) -> None:
        """Group catalogue chapters under each part. Parts with no chapters are dropped."""
        async with self._parts_lock:
            if self._is_parts_cached:
                return

            chapters = list(self._all_chapters)
            if not chapters:
                logger.warning("Parts grouping requested before the chapter catalogue was loaded")

            parts = await self._store.fetch_all_parts()
            verses_by_chapter = await self._fetch_chapter_verses(chapters)

            groupings = []
            for part in parts:
                members = [
                    chapter
                    for chapter in chapters
                    if any(v.part_number == part.number for v in verses_by_chapter[chapter.number])
                ]
                if not members:
                    continue
                first_verse = self._first_matching_verse(
                    members, verses_by_chapter, lambda v, n=part.number: v.part_number == n
                )
                groupings.append(
                    ChaptersByPart(
                        id=part.identifier,
                        part_number=part.number,
                        arabic_title=part.arabic_title,
                        english_title=part.english_title,
                        chapters=members,
                        first_page=first_verse.page_number if first_verse else None,
                        first_verse=first_verse,
                    )
                )

            self._all_chapters_by_part = groupings
            self._is_parts_cached = True
            logger.info("Grouped chapters into %d parts", len(groupings))

    async def load_quarters_grouping(self) -> None:
        """
        Group catalogue chapters under each hizb quarter.

        Every hizb gets up to four slots (fractions 0..3). A slot is dropped when
        the quarter is missing from the store or no chapter has a verse in it; a
        hizb with no remaining slots is dropped. Verses without a known fraction
        match every slot of their hizb.
        """
        async with self._quarters_lock:
            if self._is_hizb_cached:
                return

            chapters = list(self._all_chapters)
            if not chapters:
                logger.warning("Hizb grouping requested before the chapter catalogue was loaded")

            quarters = await self._store.fetch_all_quarters()
            verses_by_chapter = await self._fetch_chapter_verses(chapters)

            quarters_by_hizb: Dict[int, dict] = {}
            for quarter in quarters:
                quarters_by_hizb.setdefault(quarter.hizb_number, {})[quarter.hizb_fraction] = quarter

            groupings = []
            for hizb_number in sorted(quarters_by_hizb):
                slots = []
                for fraction in range(QUARTERS_PER_HIZB):
                    quarter = quarters_by_hizb[hizb_number].get(fraction)
                    if quarter is None:
                        continue

                    def in_quarter(verse: Verse, h=hizb_number, f=fraction) -> bool:
                        return verse.hizb_number == h and verse.hizb_fraction in (f, None)

                    members = [
                        chapter
                        for chapter in chapters
                        if any(in_quarter(v) for v in verses_by_chapter[chapter.number])
                    ]
                    if not members:
                        continue
                    first_verse = self._first_matching_verse(members, verses_by_chapter, in_quarter)
                    slots.append(
                        ChaptersByQuarter(
                            id=quarter.identifier,
                            quarter_number=quarter.identifier,
                            hizb_number=hizb_number,
                            hizb_fraction=fraction,
                            arabic_title=quarter.arabic_title,
                            english_title=quarter.english_title,
                            chapters=members,
                            first_page=first_verse.page_number if first_verse else None,
                            first_verse=first_verse,
                        )
                    )
                if slots:
                    groupings.append(
                        ChaptersByHizb(id=hizb_number, hizb_number=hizb_number, quarters=slots)
                    )

            self._all_chapters_by_hizb = groupings
            self._is_hizb_cached = True
            logger.info("Grouped chapters into %d hizbs", len(groupings))

    def load_types_grouping(self) -> None:
        """Split the loaded catalogue into Meccan and Medinan groups.

        No-op until the catalogue is loaded. ``first_page`` is a placeholder (1)
        and ``first_verse`` is None.
        """
        if not self._is_cached or not self._all_chapters:
            return
        if self._is_type_cached:
            return

        meccan = sorted((c for c in self._all_chapters if c.is_meccan), key=lambda c: c.number)
        medinan = sorted((c for c in self._all_chapters if not c.is_meccan), key=lambda c: c.number)

        groupings = []
        if meccan:
            groupings.append(
                ChaptersByType(
                    id="meccan",
                    type="Meccan",
                    arabic_type="مكية",
                    chapters=meccan,
                    first_page=1,
                    first_verse=None,
                )
            )
        if medinan:
            groupings.append(
                ChaptersByType(
                    id="medinan",
                    type="Medinan",
                    arabic_type="مدنية",
                    chapters=medinan,
                    first_page=1,
                    first_verse=None,
                )
            )
        self._all_chapters_by_type = groupings
        self._is_type_cached = True

    async def clear_cache(self) -> None:
        """Reset all collections and flags. Waits for running loaders to finish."""
        async with self._catalogue_lock, self._parts_lock, self._quarters_lock:
            self._all_chapters = []
            self._all_chapters_by_part = []
            self._all_chapters_by_hizb = []
            self._all_chapters_by_type = []
            self._is_cached = False
            self._is_parts_cached = False
            self._is_hizb_cached = False
            self._is_type_cached = False

    async def _fetch_chapter_verses(self, chapters: List[Chapter]) -> Dict[int, List[Verse]]:
        verses_by_chapter = {}
        for chapter in chapters:
            verses_by_chapter[chapter.number] = await self._store.get_verses_for_chapter(
                chapter.number
            )
        return verses_by_chapter

    @staticmethod
    def _first_matching_verse(
        chapters: List[Chapter],
        verses_by_chapter: Dict[int, List[Verse]],
        predicate: Callable[[Verse], bool],
    ) -> Optional[Verse]:
        for chapter in chapters:
            for verse in verses_by_chapter[chapter.number]:
                if predicate(verse):
                    return verse
        return None
