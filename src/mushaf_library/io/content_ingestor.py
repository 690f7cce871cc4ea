"""Content Ingestor - loads a JSON Quran dataset into the database."""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict

from mushaf_library.core import Chapter, MushafType, Page, Part, Quarter, Verse

from .database_manager import DatabaseManager

logger = logging.getLogger(__name__)


class ContentIngestor:
    """Data factory that parses a content dataset file and writes it in one transaction.

    Expected layout (snake_case keys, unknown keys ignored)::

        {
          "chapters": [{"number", "is_meccan", "title", "arabic_title", "english_title", ...}],
          "parts":    [{"number", "arabic_title", "english_title"}],
          "quarters": [{"hizb_number", "hizb_fraction", "arabic_title", "english_title",
                        "part_number"}],
          "pages":    [{"number", "is_right",
                        "headers": {"HAFS_1441": {"part_number", "hizb_number",
                                                  "hizb_fraction", "chapters": [..]}}}],
          "verses":   [{"verse_id", "chapter_number", "number", "text", "page_number",
                        "page_1405", "part_number", "hizb_number", "hizb_fraction", ...}]
        }
    """

    def __init__(self, database: DatabaseManager) -> None:
        self.database = database

    def ingest_file(self, dataset_path: Path) -> Dict[str, int]:
        """
        Replace the stored content with the dataset at ``dataset_path``.

        Args:
            dataset_path: Path to the JSON dataset.

        Returns:
            Number of rows written per content kind.

        Raises:
            RuntimeError: If the file cannot be read, is malformed, or the write fails.
                Nothing is written in that case.
        """
        dataset_path = Path(dataset_path)
        try:
            with open(dataset_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RuntimeError(f"Failed to read content dataset {dataset_path}: {e}") from e
        return self.ingest(data)

    def ingest(self, data: Dict[str, Any]) -> Dict[str, int]:
        """Write an already decoded dataset. See ``ingest_file``."""
        if not isinstance(data, dict):
            raise RuntimeError("Content dataset must be a JSON object")

        counts = {"chapters": 0, "parts": 0, "quarters": 0, "pages": 0, "verses": 0}
        connection = self.database.connection
        try:
            with connection:
                self.database.clear_content()
                for item in data.get("chapters", []):
                    self.database.insert_chapter(self._parse_chapter(item))
                    counts["chapters"] += 1
                for item in data.get("parts", []):
                    self.database.insert_part(self._parse_part(item))
                    counts["parts"] += 1
                for item in data.get("quarters", []):
                    self.database.insert_quarter(self._parse_quarter(item))
                    counts["quarters"] += 1
                for item in data.get("pages", []):
                    self._ingest_page(item)
                    counts["pages"] += 1
                for item in data.get("verses", []):
                    page_1405 = item.get("page_1405")
                    self.database.insert_verse(
                        self._parse_verse(item),
                        int(page_1405) if page_1405 is not None else None,
                    )
                    counts["verses"] += 1
        except (KeyError, TypeError, ValueError) as e:
            raise RuntimeError(f"Malformed content dataset: {e!r}") from e
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to write content dataset: {e}") from e

        logger.info("Ingested content: %s", counts)
        return counts

    def _ingest_page(self, item: Dict[str, Any]) -> None:
        number = int(item["number"])
        self.database.insert_page(
            Page(
                identifier=int(item.get("id", number)),
                number=number,
                is_right=bool(item.get("is_right", number % 2 == 1)),
            )
        )
        for mushaf_name, header in (item.get("headers") or {}).items():
            self.database.insert_page_header(
                page_number=number,
                mushaf_type=MushafType(mushaf_name),
                part_number=header.get("part_number"),
                hizb_number=header.get("hizb_number"),
                hizb_fraction=header.get("hizb_fraction"),
                chapter_numbers=[int(c) for c in header.get("chapters", [])],
            )

    @staticmethod
    def _parse_chapter(item: Dict[str, Any]) -> Chapter:
        number = int(item["number"])
        return Chapter(
            identifier=int(item.get("id", number)),
            number=number,
            is_meccan=bool(item["is_meccan"]),
            title=item.get("title", ""),
            arabic_title=item.get("arabic_title", ""),
            english_title=item.get("english_title", ""),
            title_code_point=item.get("title_code_point", ""),
            searchable_text=item.get("searchable_text", ""),
            searchable_keywords=item.get("searchable_keywords", ""),
            verses_count=int(item.get("verses_count", 0)),
            revelation_order=int(item.get("revelation_order", 0)),
        )

    @staticmethod
    def _parse_part(item: Dict[str, Any]) -> Part:
        number = int(item["number"])
        return Part(
            identifier=int(item.get("id", number)),
            number=number,
            arabic_title=item.get("arabic_title", ""),
            english_title=item.get("english_title", ""),
        )

    @staticmethod
    def _parse_quarter(item: Dict[str, Any]) -> Quarter:
        hizb_number = int(item["hizb_number"])
        hizb_fraction = int(item["hizb_fraction"])
        return Quarter(
            identifier=int(item.get("id", (hizb_number - 1) * 4 + hizb_fraction + 1)),
            hizb_number=hizb_number,
            hizb_fraction=hizb_fraction,
            arabic_title=item.get("arabic_title", ""),
            english_title=item.get("english_title", ""),
            part_number=int(item.get("part_number", 0)),
        )

    @staticmethod
    def _parse_verse(item: Dict[str, Any]) -> Verse:
        chapter_number = int(item["chapter_number"])
        number = int(item["number"])
        fraction = item.get("hizb_fraction")
        return Verse(
            verse_id=int(item["verse_id"]),
            human_readable_id=item.get("human_readable_id", f"{chapter_number}_{number}"),
            number=number,
            text=item.get("text", ""),
            text_without_tashkil=item.get("text_without_tashkil", ""),
            uthmanic_hafs_text=item.get("uthmanic_hafs_text", ""),
            hafs_smart_text=item.get("hafs_smart_text", ""),
            searchable_text=item.get("searchable_text", ""),
            chapter_number=chapter_number,
            page_number=int(item.get("page_number", 0)),
            part_number=int(item.get("part_number", 0)),
            hizb_number=int(item.get("hizb_number", 0)),
            hizb_fraction=int(fraction) if fraction is not None else None,
        )
