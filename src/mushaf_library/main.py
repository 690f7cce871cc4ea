"""Command line entry point for maintaining a mushaf library database."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mushaf_library.container import MushafContainer
from mushaf_library.core.result import Error, get_or_none, run_catching
from mushaf_library.io import ContentIngestor
from mushaf_library.log import configure_logging
from mushaf_library.services import SettingsManager

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mushaf-library",
        description="Load Quran content and back up or restore user data.",
    )
    parser.add_argument("--ingest", metavar="FILE", type=Path, help="load a JSON content dataset")
    parser.add_argument("--export", metavar="FILE", type=Path, help="write a user data backup")
    parser.add_argument(
        "--no-history", action="store_true", help="leave search history out of the export"
    )
    parser.add_argument(
        "--import", dest="import_path", metavar="FILE", type=Path, help="restore a backup"
    )
    parser.add_argument(
        "--merge", action="store_true", help="keep existing data when importing"
    )
    parser.add_argument("--stats", action="store_true", help="print cache statistics")
    return parser


async def _run(args: argparse.Namespace, container: MushafContainer) -> int:
    await container.initialize()
    exit_code = 0

    if args.ingest:
        ingestor = ContentIngestor(container.database)
        counts = ingestor.ingest_file(args.ingest)
        await container.quran_repository.clear_all_caches()
        print(", ".join(f"{kind}: {count}" for kind, count in counts.items()))

    if args.export:
        payload = await container.data_export_repository.export_to_json(
            include_history=not args.no_history
        )
        args.export.write_text(payload, encoding="utf-8")
        print(f"Backup written to {args.export}")

    if args.import_path:
        payload = args.import_path.read_text(encoding="utf-8")
        result = await container.data_export_repository.import_from_json(
            payload, merge_with_existing=args.merge
        )
        print(
            f"Imported {result.bookmarks_imported} bookmarks, "
            f"{result.last_read_positions_imported} positions, "
            f"{result.search_history_imported} searches"
            + (", preferences" if result.preferences_imported else "")
        )
        for message in result.errors:
            print(f"  {message}", file=sys.stderr)
        if result.has_errors:
            exit_code = 1

    if args.stats:
        await container.chapter_repository.load_and_cache_chapters()
        chapters = await container.chapter_repository.get_all_chapters()
        total_pages = await container.page_repository.get_total_pages()
        stats = await container.quran_repository.get_cache_stats()
        print(f"Chapters: {len(chapters)}")
        print(f"Pages: {total_pages}")
        print(f"Cached pages: {stats.cached_pages_count}")
        print(f"Cached chapters: {stats.cached_chapters_count}")
        print(f"Cached verses: {stats.total_verses_cached}")

    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the requested commands and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.ingest or args.export or args.import_path or args.stats):
        parser.print_help()
        return 2

    settings = SettingsManager()
    configure_logging(settings.get_log_level())
    container = MushafContainer(settings)

    async def run() -> int:
        try:
            return await _run(args, container)
        finally:
            container.close()

    result = asyncio.run(run_catching(run))
    if isinstance(result, Error):
        logger.error("Command failed: %s", result.message)
        return 1
    return get_or_none(result)


if __name__ == "__main__":
    sys.exit(main())
