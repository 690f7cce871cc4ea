"""Settings Manager - Handles storage locations and runtime configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATA_DIR = Path.home() / ".mushaf_library"


class SettingsManager:
    """
    Manages library settings.

    Reads values from a .env file in the project root; variables already set in
    the process environment win unless ``reload_env`` is called.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = Path(project_root) / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = Path(project_root)

    def get_database_path(self) -> Path:
        """SQLite database file (``MUSHAF_DB_PATH``)."""
        value = self._get("MUSHAF_DB_PATH")
        return Path(value).expanduser() if value else DEFAULT_DATA_DIR / "mushaf.db"

    def get_preferences_path(self) -> Path:
        """INI file backing user preferences (``MUSHAF_PREFERENCES_PATH``)."""
        value = self._get("MUSHAF_PREFERENCES_PATH")
        return Path(value).expanduser() if value else DEFAULT_DATA_DIR / "preferences.ini"

    def get_timing_dir(self) -> Optional[Path]:
        """Directory of ``read_<id>.json`` timing files, or None when not configured."""
        value = self._get("MUSHAF_TIMING_DIR")
        return Path(value).expanduser() if value else None

    def get_log_level(self) -> str:
        value = self._get("MUSHAF_LOG_LEVEL")
        return value.upper() if value else "INFO"

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    @staticmethod
    def _get(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None
