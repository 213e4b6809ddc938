"""
In-process ephemeral storage backend.

Used when no durable storage is configured, and as the fallback tier of
SharedMemory. Nothing survives a process restart.
"""

import copy
from collections import deque
from typing import Dict, List, Optional

from ...config import LOG_BUFFER_SIZE
from ...models.memory import LogEntry, MemoryRecord
from .base import StorageBackend


class InMemoryBackend(StorageBackend):
    """Dict-backed records and a ring buffer of the newest log entries."""

    name = "memory"

    def __init__(self, log_capacity: int = LOG_BUFFER_SIZE):
        self._records: Dict[str, MemoryRecord] = {}
        # Newest entry on the left; the oldest falls off the right end.
        self._logs: deque = deque(maxlen=log_capacity)

    async def put_record(self, record: MemoryRecord) -> None:
        existing = self._records.get(record.id)
        created_at = existing.created_at if existing else record.created_at
        self._records[record.id] = MemoryRecord(
            id=record.id,
            data=copy.deepcopy(record.data),
            created_at=created_at,
        )

    async def get_record(self, record_id: str) -> Optional[MemoryRecord]:
        record = self._records.get(record_id)
        if record is None:
            return None
        return MemoryRecord(
            id=record.id,
            data=copy.deepcopy(record.data),
            created_at=record.created_at,
        )

    async def list_records(self) -> List[MemoryRecord]:
        return [
            MemoryRecord(id=r.id, data=copy.deepcopy(r.data), created_at=r.created_at)
            for r in self._records.values()
        ]

    async def append_log(self, entry: LogEntry) -> None:
        self._logs.appendleft(entry)

    async def list_logs(self, limit: int) -> List[LogEntry]:
        if limit <= 0:
            return []
        return list(self._logs)[:limit]

    def has_record(self, record_id: str) -> bool:
        return record_id in self._records

    async def delete_record(self, record_id: str) -> None:
        self._records.pop(record_id, None)
