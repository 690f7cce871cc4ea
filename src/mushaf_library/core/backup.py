"""Backup envelope for user data export/import.

Wire format (JSON, camelCase keys):
{
    "version": 1,
    "timestamp": <epoch-millis>,
    "bookmarks": [{"chapterNumber", "verseNumber", "pageNumber", "createdAt", "note", "tags"}],
    "lastReadPositions": [{"mushafType", "chapterNumber", "verseNumber", "pageNumber",
                           "lastReadAt", "scrollPosition"}],
    "searchHistory": [{"query", "timestamp", "resultCount", "searchType"}],
    "preferences": {...} | null
}

Readers ignore keys they do not know so that newer backups stay importable.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

BACKUP_FORMAT_VERSION = 1


@dataclass(frozen=True)
class BookmarkData:
    chapter_number: int
    verse_number: int
    page_number: int
    created_at: int
    note: str = ""
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chapterNumber": self.chapter_number,
            "verseNumber": self.verse_number,
            "pageNumber": self.page_number,
            "createdAt": self.created_at,
            "note": self.note,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookmarkData":
        return cls(
            chapter_number=int(data["chapterNumber"]),
            verse_number=int(data["verseNumber"]),
            page_number=int(data.get("pageNumber", 0)),
            created_at=int(data.get("createdAt", 0)),
            note=data.get("note") or "",
            tags=[str(tag) for tag in data.get("tags") or []],
        )


@dataclass(frozen=True)
class LastReadPositionData:
    mushaf_type: str
    chapter_number: int
    verse_number: int
    page_number: int
    last_read_at: int
    scroll_position: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mushafType": self.mushaf_type,
            "chapterNumber": self.chapter_number,
            "verseNumber": self.verse_number,
            "pageNumber": self.page_number,
            "lastReadAt": self.last_read_at,
            "scrollPosition": self.scroll_position,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LastReadPositionData":
        return cls(
            mushaf_type=str(data["mushafType"]),
            chapter_number=int(data["chapterNumber"]),
            verse_number=int(data["verseNumber"]),
            page_number=int(data.get("pageNumber", 0)),
            last_read_at=int(data.get("lastReadAt", 0)),
            scroll_position=float(data.get("scrollPosition", 0.0)),
        )


@dataclass(frozen=True)
class SearchHistoryData:
    query: str
    timestamp: int
    result_count: int
    search_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "timestamp": self.timestamp,
            "resultCount": self.result_count,
            "searchType": self.search_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchHistoryData":
        return cls(
            query=str(data["query"]),
            timestamp=int(data.get("timestamp", 0)),
            result_count=int(data.get("resultCount", 0)),
            search_type=str(data.get("searchType", "GENERAL")),
        )


@dataclass(frozen=True)
class PreferencesData:
    """Flattened preference values from the mushaf, reciter and theme stores."""

    mushaf_type: str
    current_page: int
    font_size_multiplier: float
    selected_reciter_id: int
    playback_speed: float
    repeat_mode: bool
    theme_mode: str
    color_scheme: str
    use_amoled: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mushafType": self.mushaf_type,
            "currentPage": self.current_page,
            "fontSizeMultiplier": self.font_size_multiplier,
            "selectedReciterId": self.selected_reciter_id,
            "playbackSpeed": self.playback_speed,
            "repeatMode": self.repeat_mode,
            "themeMode": self.theme_mode,
            "colorScheme": self.color_scheme,
            "useAmoled": self.use_amoled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PreferencesData":
        return cls(
            mushaf_type=str(data["mushafType"]),
            current_page=int(data["currentPage"]),
            font_size_multiplier=float(data["fontSizeMultiplier"]),
            selected_reciter_id=int(data["selectedReciterId"]),
            playback_speed=float(data["playbackSpeed"]),
            repeat_mode=bool(data["repeatMode"]),
            theme_mode=str(data["themeMode"]),
            color_scheme=str(data["colorScheme"]),
            use_amoled=bool(data["useAmoled"]),
        )


@dataclass(frozen=True)
class UserDataBackup:
    version: int
    timestamp: int
    bookmarks: List[BookmarkData] = field(default_factory=list)
    last_read_positions: List[LastReadPositionData] = field(default_factory=list)
    search_history: List[SearchHistoryData] = field(default_factory=list)
    preferences: Optional[PreferencesData] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "timestamp": self.timestamp,
            "bookmarks": [item.to_dict() for item in self.bookmarks],
            "lastReadPositions": [item.to_dict() for item in self.last_read_positions],
            "searchHistory": [item.to_dict() for item in self.search_history],
            "preferences": self.preferences.to_dict() if self.preferences else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserDataBackup":
        """Parse a decoded JSON object.

        Raises:
            ValueError: If the payload is not a JSON object.
            KeyError, TypeError: If a required field is missing or mistyped.
        """
        if not isinstance(data, dict):
            raise ValueError("Backup payload must be a JSON object")
        preferences = data.get("preferences")
        return cls(
            version=int(data.get("version", BACKUP_FORMAT_VERSION)),
            timestamp=int(data.get("timestamp", 0)),
            bookmarks=[BookmarkData.from_dict(item) for item in data.get("bookmarks") or []],
            last_read_positions=[
                LastReadPositionData.from_dict(item)
                for item in data.get("lastReadPositions") or []
            ],
            search_history=[
                SearchHistoryData.from_dict(item) for item in data.get("searchHistory") or []
            ],
            preferences=PreferencesData.from_dict(preferences) if preferences else None,
        )


@dataclass
class ImportResult:
    """Outcome of an import. Failures are collected here, never raised."""

    bookmarks_imported: int = 0
    last_read_positions_imported: int = 0
    search_history_imported: int = 0
    preferences_imported: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def total_imported(self) -> int:
        return (
            self.bookmarks_imported
            + self.last_read_positions_imported
            + self.search_history_imported
        )
