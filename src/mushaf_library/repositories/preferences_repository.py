"""User preferences persisted through QSettings (INI format).

The mushaf, reciter and theme preferences share one settings file, each under
its own group. No QApplication is required.
"""

from pathlib import Path
from typing import Optional, Tuple

from PySide6.QtCore import QSettings

from mushaf_library.core import ColorScheme, MushafType, ThemeConfig, ThemeMode

DEFAULT_PAGE = 1
DEFAULT_FONT_SIZE_MULTIPLIER = 1.0
DEFAULT_RECITER_ID = 1
DEFAULT_PLAYBACK_SPEED = 1.0
MIN_MULTIPLIER = 0.5
MAX_MULTIPLIER = 2.0


def open_settings(path: Path) -> QSettings:
    """Open (creating parent directories) an INI-backed settings file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return QSettings(str(path), QSettings.Format.IniFormat)


def _clamp(value: float) -> float:
    return max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, float(value)))


class _SettingsGroup:
    """Typed access to the keys of one QSettings group."""

    group = ""

    def __init__(self, settings: QSettings) -> None:
        if settings is None:
            raise RuntimeError("Settings store required")
        self.settings = settings

    def _key(self, name: str) -> str:
        return f"{self.group}/{name}"

    def _get(self, name: str, default, value_type):
        return self.settings.value(self._key(name), default, type=value_type)

    def _get_optional_int(self, name: str) -> Optional[int]:
        if not self.settings.contains(self._key(name)):
            return None
        return self._get(name, 0, int)

    def _set(self, **values) -> None:
        for name, value in values.items():
            self.settings.setValue(self._key(name), value)
        self.settings.sync()


class PreferencesRepository(_SettingsGroup):
    """Reading preferences: mushaf edition, current page, font scale, translation."""

    group = "mushaf"

    async def get_mushaf_type(self) -> MushafType:
        name = self._get("mushaf_type", MushafType.HAFS_1441.value, str)
        try:
            return MushafType(name)
        except ValueError:
            return MushafType.HAFS_1441

    async def set_mushaf_type(self, mushaf_type: MushafType) -> None:
        self._set(mushaf_type=mushaf_type.value)

    async def get_current_page(self) -> int:
        return self._get("current_page", DEFAULT_PAGE, int)

    async def set_current_page(self, page_number: int) -> None:
        self._set(current_page=int(page_number))

    async def get_last_read_chapter(self) -> Optional[int]:
        return self._get_optional_int("last_read_chapter")

    async def set_last_read_chapter(self, chapter_number: int) -> None:
        self._set(last_read_chapter=int(chapter_number))

    async def get_last_read_verse(self) -> Optional[Tuple[int, int]]:
        """(chapter, verse) of the last read verse, or None if never set."""
        chapter_number = self._get_optional_int("last_read_chapter_number")
        verse_number = self._get_optional_int("last_read_verse_number")
        if chapter_number is None or verse_number is None:
            return None
        return chapter_number, verse_number

    async def set_last_read_verse(self, chapter_number: int, verse_number: int) -> None:
        self._set(
            last_read_chapter_number=int(chapter_number),
            last_read_verse_number=int(verse_number),
        )

    async def get_font_size_multiplier(self) -> float:
        return self._get("font_size_multiplier", DEFAULT_FONT_SIZE_MULTIPLIER, float)

    async def set_font_size_multiplier(self, multiplier: float) -> None:
        """Store the multiplier clamped to [0.5, 2.0]."""
        self._set(font_size_multiplier=_clamp(multiplier))

    async def get_show_translation(self) -> bool:
        return self._get("show_translation", False, bool)

    async def set_show_translation(self, show: bool) -> None:
        self._set(show_translation=bool(show))

    async def clear_all(self) -> None:
        """Remove every reading preference. Reciter and theme groups are kept."""
        self.settings.remove(self.group)
        self.settings.sync()


class ReciterPreferencesRepository(_SettingsGroup):
    group = "reciter"

    async def get_selected_reciter_id(self) -> int:
        return self._get("selected_reciter_id", DEFAULT_RECITER_ID, int)

    async def set_selected_reciter_id(self, reciter_id: int) -> None:
        self._set(selected_reciter_id=int(reciter_id))

    async def get_playback_speed(self) -> float:
        return self._get("playback_speed", DEFAULT_PLAYBACK_SPEED, float)

    async def set_playback_speed(self, speed: float) -> None:
        """Store the speed clamped to [0.5, 2.0]."""
        self._set(playback_speed=_clamp(speed))

    async def get_repeat_mode(self) -> bool:
        return self._get("repeat_mode", False, bool)

    async def set_repeat_mode(self, enabled: bool) -> None:
        self._set(repeat_mode=bool(enabled))


class ThemeRepository(_SettingsGroup):
    group = "theme"

    async def get_theme_config(self) -> ThemeConfig:
        try:
            mode = ThemeMode(self._get("theme_mode", ThemeMode.SYSTEM.value, str))
        except ValueError:
            mode = ThemeMode.SYSTEM
        try:
            scheme = ColorScheme(self._get("color_scheme", ColorScheme.DEFAULT.value, str))
        except ValueError:
            scheme = ColorScheme.DEFAULT
        return ThemeConfig(
            mode=mode,
            color_scheme=scheme,
            use_amoled=self._get("amoled_mode", False, bool),
        )

    async def set_theme_mode(self, mode: ThemeMode) -> None:
        self._set(theme_mode=mode.value)

    async def set_color_scheme(self, scheme: ColorScheme) -> None:
        self._set(color_scheme=scheme.value)

    async def set_amoled_mode(self, enabled: bool) -> None:
        self._set(amoled_mode=bool(enabled))

    async def update_theme_config(self, config: ThemeConfig) -> None:
        self._set(
            theme_mode=config.mode.value,
            color_scheme=config.color_scheme.value,
            amoled_mode=bool(config.use_amoled),
        )
