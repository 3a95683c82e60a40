import logging
from typing import Optional

from fastapi import Request

from .base import Storage
from .database import DatabaseStorage
from .memory import MemoryStorage

logger = logging.getLogger(__name__)

__all__ = ["Storage", "DatabaseStorage", "MemoryStorage", "build_storage", "get_storage"]


def build_storage(database_url: Optional[str]) -> Storage:
    """Pick the backend: a database when a URL is configured, memory otherwise"""
    if not database_url:
        logger.warning(
            "⚠️ DATABASE_URL is not set - using in-memory storage. Data will not survive a restart."
        )
        return MemoryStorage()

    from ..database import create_db_engine

    storage = DatabaseStorage(create_db_engine(database_url))
    try:
        storage.create_tables()
        logger.info("Database tables created successfully")
    except Exception as e:
        # Another worker may have created the tables first
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise
    return storage


def get_storage(request: Request) -> Storage:
    """Dependency returning the storage selected at startup"""
    return request.app.state.storage
