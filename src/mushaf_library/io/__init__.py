"""I/O layer - Store contract, SQLite persistence and content ingestion."""

from .content_ingestor import ContentIngestor
from .database_manager import DatabaseManager
from .sqlite_store_service import SqliteStoreService
from .store_service import StoreService

__all__ = ["ContentIngestor", "DatabaseManager", "SqliteStoreService", "StoreService"]
