"""Tests for AyahTimingService - reading and querying reciter timing files."""

import asyncio
import json

import pytest

from mushaf_library.services.audio import AyahTimingService

TIMING_PAYLOAD = {
    "id": 1,
    "name": "عبد الباسط عبد الصمد",
    "name_en": "Abdul Basit Abdul Samad",
    "rewaya": "حفص عن عاصم",
    "folder_url": "https://server6.mp3quran.net/abas_64/",
    "chapters": [
        {
            "id": 1,
            "name": "الفاتحة",
            "aya_timing": [
                {"ayah": 1, "start_time": 0, "end_time": 5000},
                {"ayah": 2, "start_time": 5000, "end_time": 9000},
                {"ayah": 3, "start_time": 9500, "end_time": 12000},
            ],
        }
    ],
}


@pytest.fixture
def timing_dir(tmp_path):
    (tmp_path / "read_1.json").write_text(json.dumps(TIMING_PAYLOAD), encoding="utf-8")
    (tmp_path / "read_5.json").write_text("{broken", encoding="utf-8")
    return tmp_path


@pytest.fixture
def service(timing_dir):
    return AyahTimingService(timing_dir)


class TestLoading:
    def test_loads_and_caches_file(self, service, timing_dir):
        first = asyncio.run(service.load_timing_for_reciter(1))
        (timing_dir / "read_1.json").unlink()
        second = asyncio.run(service.load_timing_for_reciter(1))

        assert first is second
        assert first.name_en == "Abdul Basit Abdul Samad"
        assert first.to_reciter_info().get_audio_url(2).endswith("/abas_64/002.mp3")

    def test_unknown_reciter_returns_none(self, service):
        assert asyncio.run(service.load_timing_for_reciter(4242)) is None

    def test_unreadable_file_returns_none(self, service):
        assert asyncio.run(service.load_timing_for_reciter(5)) is None

    def test_missing_file_returns_none(self, service):
        assert asyncio.run(service.load_timing_for_reciter(9)) is None

    def test_no_directory_returns_none(self):
        assert asyncio.run(AyahTimingService().load_timing_for_reciter(1)) is None

    def test_clear_cache_forces_reload(self, service, timing_dir):
        asyncio.run(service.preload_timing(1))
        service.clear_cache()
        (timing_dir / "read_1.json").unlink()

        assert asyncio.run(service.load_timing_for_reciter(1)) is None


class TestQueries:
    def test_get_timing(self, service):
        timing = asyncio.run(service.get_timing(1, 1, 2))
        assert (timing.start_time, timing.end_time) == (5000, 9000)
        assert asyncio.run(service.get_timing(1, 1, 7)) is None

    def test_chapter_timings(self, service):
        assert len(asyncio.run(service.get_chapter_timings(1, 1))) == 3
        assert asyncio.run(service.get_chapter_timings(1, 2)) == []

    def test_current_verse_applies_correction(self, service):
        # 5005 ms is corrected to 4995 ms, still inside ayah 1
        assert asyncio.run(service.get_current_verse(1, 1, 5005)) == 1
        assert asyncio.run(service.get_current_verse(1, 1, 5011)) == 2
        assert asyncio.run(service.get_current_verse(1, 1, 3)) == 1

    def test_current_verse_between_ayahs(self, service):
        assert asyncio.run(service.get_current_verse(1, 1, 9300)) is None
        assert asyncio.run(service.get_current_verse(1, 1, 60000)) is None

    def test_has_timing_for_reciter(self, service):
        assert service.has_timing_for_reciter(1) is True
        assert service.has_timing_for_reciter(4242) is False
        assert 256 in service.get_available_reciter_ids()
