"""Reciter catalogue and selection."""

import logging
from typing import List, Optional

from mushaf_library.core import ReciterInfo

from .ayah_timing_service import AyahTimingService
from .reciter_data import BUILTIN_RECITERS

logger = logging.getLogger(__name__)

DEFAULT_RECITER_ID = 1


class ReciterService:
    """
    Holds the available reciters and the selected one.

    Reciters come from the timing files when any can be read, otherwise from
    the built-in catalogue. The selection is persisted through ``preferences``
    (an object with ``get_selected_reciter_id`` / ``set_selected_reciter_id``).
    """

    def __init__(self, timing_service: AyahTimingService, preferences=None):
        self._timing_service = timing_service
        self._preferences = preferences
        self._reciters: List[ReciterInfo] = []
        self._selected: Optional[ReciterInfo] = None
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def selected_reciter(self) -> Optional[ReciterInfo]:
        return self._selected

    async def load_available_reciters(self) -> List[ReciterInfo]:
        """Build the catalogue once and restore the saved selection."""
        if self._loaded:
            return self._reciters

        reciters = []
        for reciter_id in sorted(self._timing_service.get_available_reciter_ids()):
            timing = await self._timing_service.load_timing_for_reciter(reciter_id)
            if timing is not None:
                reciters.append(timing.to_reciter_info())

        if not reciters:
            logger.warning("No reciters loaded from timing files, using built-in catalogue")
            reciters = list(BUILTIN_RECITERS)

        self._reciters = sorted(reciters, key=lambda r: r.id)
        self._loaded = True
        logger.info("Loaded %d reciters", len(self._reciters))

        saved_id = (
            await self._preferences.get_selected_reciter_id()
            if self._preferences is not None
            else DEFAULT_RECITER_ID
        )
        saved = self.get_reciter_by_id(saved_id)
        if saved is not None:
            self._selected = saved
        elif self._reciters:
            await self.select_reciter(self._reciters[0])
        return self._reciters

    async def get_all_reciters(self) -> List[ReciterInfo]:
        return list(await self.load_available_reciters())

    async def select_reciter(self, reciter: ReciterInfo) -> None:
        self._selected = reciter
        if self._preferences is not None:
            await self._preferences.set_selected_reciter_id(reciter.id)
        logger.info("Selected reciter %s (%s)", reciter.name_english, reciter.id)

    def get_reciter_by_id(self, reciter_id: int) -> Optional[ReciterInfo]:
        return next((r for r in self._reciters if r.id == reciter_id), None)

    def get_chapter_audio_url(self, chapter_number: int) -> Optional[str]:
        return self._selected.get_audio_url(chapter_number) if self._selected else None

    def search_reciters(self, query: str, language_code: str = "en") -> List[ReciterInfo]:
        """Match on the Arabic name for ``"ar"``, on the English name otherwise."""
        normalized = query.strip().lower()
        if language_code == "ar":
            return [r for r in self._reciters if normalized in r.name_arabic.lower()]
        return [r for r in self._reciters if normalized in r.name_english.lower()]

    def get_reciters_by_rewaya(self, rewaya: str) -> List[ReciterInfo]:
        normalized = rewaya.strip().lower()
        return [r for r in self._reciters if normalized in r.rewaya.lower()]

    def get_hafs_reciters(self) -> List[ReciterInfo]:
        return [r for r in self._reciters if r.is_hafs]

    def get_default_reciter(self) -> ReciterInfo:
        """Selected reciter, else the first loaded one, else the first built-in one."""
        if self._selected is not None:
            return self._selected
        if self._reciters:
            return self._reciters[0]
        return BUILTIN_RECITERS[0]

    async def reset_to_default(self) -> None:
        default = self.get_reciter_by_id(DEFAULT_RECITER_ID) or (
            self._reciters[0] if self._reciters else None
        )
        if default is not None:
            await self.select_reciter(default)
