"""Fixed facts about the Quran text and reference helpers."""

from typing import Optional, Tuple

TOTAL_CHAPTERS = 114
TOTAL_VERSES = 6236
TOTAL_PAGES = 604
TOTAL_PARTS = 30
TOTAL_HIZB = 60

# Prostration verses as "chapter:verse".
SAJDA_VERSES = (
    "7:206", "13:15", "16:50", "17:109", "19:58",
    "22:18", "22:77", "25:60", "27:26", "32:15",
    "38:24", "41:38", "53:62", "84:21", "96:19",
)


def is_valid_page_number(page_number: int) -> bool:
    return 1 <= page_number <= TOTAL_PAGES


def is_valid_chapter_number(chapter_number: int) -> bool:
    return 1 <= chapter_number <= TOTAL_CHAPTERS


def is_valid_part_number(part_number: int) -> bool:
    return 1 <= part_number <= TOTAL_PARTS


def is_valid_hizb_number(hizb_number: int) -> bool:
    return 1 <= hizb_number <= TOTAL_HIZB


def parse_verse_reference(reference: str) -> Optional[Tuple[int, int]]:
    """Parse ``"2:255"`` into ``(2, 255)``; None if malformed or out of range."""
    parts = reference.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        chapter_number, verse_number = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not is_valid_chapter_number(chapter_number) or verse_number <= 0:
        return None
    return chapter_number, verse_number


def format_verse_reference(chapter_number: int, verse_number: int) -> str:
    return f"{chapter_number}:{verse_number}"
