"""Audio services - reciter catalogue and ayah timing (no playback)."""

from mushaf_library.services.audio.ayah_timing_service import (
    AVAILABLE_RECITER_IDS,
    AyahTimingService,
)
from mushaf_library.services.audio.reciter_data import BUILTIN_RECITERS, get_builtin_reciter
from mushaf_library.services.audio.reciter_service import DEFAULT_RECITER_ID, ReciterService

__all__ = [
    "AVAILABLE_RECITER_IDS",
    "AyahTimingService",
    "BUILTIN_RECITERS",
    "DEFAULT_RECITER_ID",
    "ReciterService",
    "get_builtin_reciter",
]
