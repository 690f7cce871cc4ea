"""Reciter catalogue and ayah timing lookups. Playback is not handled here."""

from typing import List, Optional

from mushaf_library.core import AyahTiming, ReciterInfo
from mushaf_library.services.audio import AyahTimingService, ReciterService


class AudioRepository:
    def __init__(self, reciter_service: ReciterService, timing_service: AyahTimingService) -> None:
        self._reciters = reciter_service
        self._timing = timing_service

    async def get_all_reciters(self) -> List[ReciterInfo]:
        return await self._reciters.get_all_reciters()

    async def get_reciter_by_id(self, reciter_id: int) -> Optional[ReciterInfo]:
        await self._reciters.load_available_reciters()
        return self._reciters.get_reciter_by_id(reciter_id)

    async def search_reciters(self, query: str, language_code: str = "en") -> List[ReciterInfo]:
        await self._reciters.load_available_reciters()
        return self._reciters.search_reciters(query, language_code)

    async def get_hafs_reciters(self) -> List[ReciterInfo]:
        await self._reciters.load_available_reciters()
        return self._reciters.get_hafs_reciters()

    async def get_default_reciter(self) -> ReciterInfo:
        await self._reciters.load_available_reciters()
        return self._reciters.get_default_reciter()

    async def save_selected_reciter(self, reciter: ReciterInfo) -> None:
        await self._reciters.select_reciter(reciter)

    async def get_ayah_timing(
        self, reciter_id: int, chapter_number: int, ayah_number: int
    ) -> Optional[AyahTiming]:
        return await self._timing.get_timing(reciter_id, chapter_number, ayah_number)

    async def get_current_verse(
        self, reciter_id: int, chapter_number: int, current_time_ms: int
    ) -> Optional[int]:
        return await self._timing.get_current_verse(reciter_id, chapter_number, current_time_ms)

    async def get_chapter_timings(self, reciter_id: int, chapter_number: int) -> List[AyahTiming]:
        return await self._timing.get_chapter_timings(reciter_id, chapter_number)

    def has_timing_for_reciter(self, reciter_id: int) -> bool:
        return self._timing.has_timing_for_reciter(reciter_id)

    async def preload_timing(self, reciter_id: int) -> None:
        await self._timing.preload_timing(reciter_id)
