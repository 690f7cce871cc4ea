"""Ayah timing data for synchronizing recitation audio with verses."""

import json
import logging
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from mushaf_library.core import AyahTiming, ReciterTiming

logger = logging.getLogger(__name__)

# Reciters shipped with a read_<id>.json timing file.
AVAILABLE_RECITER_IDS: FrozenSet[int] = frozenset(
    {1, 5, 9, 10, 31, 32, 51, 53, 60, 62, 67, 74, 78, 106, 112, 118, 159, 256}
)

# Playback positions are shifted back by this much before matching an ayah.
PLAYBACK_CORRECTION_MS = 10


class AyahTimingService:
    """
    Loads per-reciter timing files on demand and keeps them in memory.

    Timing files live in ``timing_dir`` as ``read_<reciter_id>.json``. A missing
    directory, file, or unreadable payload means "no timing" (None / empty list).
    """

    TIMING_FILENAME = "read_{reciter_id}.json"

    def __init__(self, timing_dir: Optional[Path] = None):
        self.timing_dir = Path(timing_dir) if timing_dir else None
        self._cache: Dict[int, ReciterTiming] = {}

    async def load_timing_for_reciter(self, reciter_id: int) -> Optional[ReciterTiming]:
        if reciter_id in self._cache:
            return self._cache[reciter_id]

        if reciter_id not in AVAILABLE_RECITER_IDS:
            logger.warning("No timing data available for reciter %s", reciter_id)
            return None
        if self.timing_dir is None:
            return None

        timing_file = self.timing_dir / self.TIMING_FILENAME.format(reciter_id=reciter_id)
        try:
            data = json.loads(timing_file.read_text(encoding="utf-8"))
            timing = ReciterTiming.from_dict(data)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error("Failed to load timing for reciter %s: %s", reciter_id, e)
            return None

        self._cache[reciter_id] = timing
        logger.info("Loaded timing data for reciter %s", reciter_id)
        return timing

    async def get_timing(
        self, reciter_id: int, chapter_number: int, ayah_number: int
    ) -> Optional[AyahTiming]:
        for timing in await self.get_chapter_timings(reciter_id, chapter_number):
            if timing.ayah == ayah_number:
                return timing
        return None

    async def get_current_verse(
        self, reciter_id: int, chapter_number: int, current_time_ms: int
    ) -> Optional[int]:
        """Ayah number playing at ``current_time_ms``, or None when between/after ayahs."""
        corrected = max(0, current_time_ms - PLAYBACK_CORRECTION_MS)
        for timing in await self.get_chapter_timings(reciter_id, chapter_number):
            if timing.start_time <= corrected <= timing.end_time:
                return timing.ayah
        return None

    async def get_chapter_timings(self, reciter_id: int, chapter_number: int) -> List[AyahTiming]:
        reciter_timing = await self.load_timing_for_reciter(reciter_id)
        if reciter_timing is None:
            return []
        for chapter in reciter_timing.chapters:
            if chapter.id == chapter_number:
                return chapter.aya_timing
        return []

    def has_timing_for_reciter(self, reciter_id: int) -> bool:
        return reciter_id in AVAILABLE_RECITER_IDS

    def get_available_reciter_ids(self) -> FrozenSet[int]:
        return AVAILABLE_RECITER_IDS

    async def preload_timing(self, reciter_id: int) -> None:
        if reciter_id not in self._cache:
            await self.load_timing_for_reciter(reciter_id)

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Timing cache cleared")
