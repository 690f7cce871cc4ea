"""Reciter catalogue and ayah timing entities."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class ReciterInfo:
    id: int
    name_arabic: str
    name_english: str
    rewaya: str
    folder_url: str

    def get_display_name(self, language_code: str = "en") -> str:
        return self.name_arabic if language_code == "ar" else self.name_english

    def get_audio_url(self, chapter_number: int) -> str:
        """Chapter MP3 URL, e.g. ``<folder_url>002.mp3``."""
        return f"{self.folder_url}{chapter_number:03d}.mp3"

    @property
    def is_hafs(self) -> bool:
        return "حفص" in self.rewaya or "hafs" in self.rewaya.lower()

    @property
    def is_warsh(self) -> bool:
        return "ورش" in self.rewaya or "warsh" in self.rewaya.lower()


@dataclass(frozen=True)
class AyahTiming:
    """Start/end of one ayah in the chapter recording, in milliseconds."""

    ayah: int
    start_time: int
    end_time: int


@dataclass(frozen=True)
class ChapterTiming:
    id: int
    name: str
    aya_timing: List[AyahTiming] = field(default_factory=list)


@dataclass(frozen=True)
class ReciterTiming:
    id: int
    name: str
    name_en: str
    rewaya: str
    folder_url: str
    chapters: List[ChapterTiming] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReciterTiming":
        """Build from a ``read_<id>.json`` payload. Unknown keys are ignored.

        Raises:
            KeyError: If a required key is missing.
        """
        chapters = [
            ChapterTiming(
                id=int(chapter["id"]),
                name=chapter.get("name", ""),
                aya_timing=[
                    AyahTiming(
                        ayah=int(item["ayah"]),
                        start_time=int(item["start_time"]),
                        end_time=int(item["end_time"]),
                    )
                    for item in chapter.get("aya_timing", [])
                ],
            )
            for chapter in data.get("chapters", [])
        ]
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            name_en=data.get("name_en", ""),
            rewaya=data.get("rewaya", ""),
            folder_url=data.get("folder_url", ""),
            chapters=chapters,
        )

    def to_reciter_info(self) -> ReciterInfo:
        return ReciterInfo(
            id=self.id,
            name_arabic=self.name,
            name_english=self.name_en,
            rewaya=self.rewaya,
            folder_url=self.folder_url,
        )
