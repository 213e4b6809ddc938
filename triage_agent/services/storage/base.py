"""
Storage backend contract.

Two interchangeable implementations satisfy it: an in-process ephemeral store
and a durable Postgres store. The only observable difference between them is
durability across process restarts.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ...models.memory import LogEntry, MemoryRecord


class StorageBackend(ABC):
    """Key-value persistence for memory records plus an append-only log."""

    name: str = "storage"

    async def initialize(self) -> None:
        """Prepare the backend. Must be safe to call repeatedly."""
        pass

    async def close(self) -> None:
        """Release any held resources."""
        pass

    @abstractmethod
    async def put_record(self, record: MemoryRecord) -> None:
        """Create or fully replace the mapping stored for record.id.

        An existing record keeps its original created_at.
        """
        pass

    @abstractmethod
    async def get_record(self, record_id: str) -> Optional[MemoryRecord]:
        pass

    @abstractmethod
    async def list_records(self) -> List[MemoryRecord]:
        pass

    @abstractmethod
    async def append_log(self, entry: LogEntry) -> None:
        pass

    @abstractmethod
    async def list_logs(self, limit: int) -> List[LogEntry]:
        """Return at most `limit` entries, newest first."""
        pass
