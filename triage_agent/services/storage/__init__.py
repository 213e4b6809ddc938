"""
Storage backends for shared memory.

select_backend() picks the durable Postgres store when connection settings are
present and the in-process store otherwise.
"""

import logging

from ...config import POSTGRES_URL
from .base import StorageBackend
from .in_memory import InMemoryBackend
from .postgres import PostgresBackend, normalize_database_url

logger = logging.getLogger(__name__)


def select_backend(database_url: str = None) -> StorageBackend:
    """Build the storage backend for this process."""
    url = POSTGRES_URL if database_url is None else database_url
    if url:
        logger.info("Using Postgres storage")
        return PostgresBackend(url)
    logger.info("Using in-memory storage (no Postgres connection)")
    return InMemoryBackend()


__all__ = [
    "StorageBackend",
    "InMemoryBackend",
    "PostgresBackend",
    "normalize_database_url",
    "select_backend",
]
