"""
Shared memory for the Triage agent system.

SharedMemory is the only component that touches storage. It pairs a primary
backend with an in-process fallback store: when the primary raises, the same
operation is replayed against the fallback and the result is flagged as
degraded. Callers never see a storage error.

Writes are merges: the partial mapping is laid over the stored one, key by
key, so a key is only replaced by a later write that supplies it. The
read-modify-write is not atomic; two concurrent writes to the same session
may lose one of the updates.

A record written during an outage lives in the fallback store, seeded from
the last copy seen in the primary. Reads lay it over the primary's copy until
the next successful primary write folds it in and clears it.
"""

import logging
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from ..config import DEFAULT_LOG_LIMIT, SNAPSHOT_CACHE_SIZE
from ..models.memory import LogEntry, MemoryRecord, MemoryResult
from .storage import InMemoryBackend, StorageBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _combine(record_id: str, *records: Optional[MemoryRecord]) -> Optional[MemoryRecord]:
    """Merge records in order; later keys win, the earliest created_at is kept."""
    present = [r for r in records if r is not None]
    if not present:
        return None
    data: Dict[str, Any] = {}
    for record in present:
        data.update(record.data)
    return MemoryRecord(
        id=record_id,
        data=data,
        created_at=min(r.created_at for r in present),
    )


class SharedMemory:
    """Session records and the agent activity log, with an in-process fallback."""

    def __init__(
        self,
        backend: StorageBackend = None,
        fallback: InMemoryBackend = None,
        snapshot_size: int = SNAPSHOT_CACHE_SIZE,
    ):
        self.fallback = fallback or InMemoryBackend()
        self.backend = backend or self.fallback
        # Last record seen in the primary, per id (oldest evicted first)
        self._snapshots: "OrderedDict[str, MemoryRecord]" = OrderedDict()
        self._snapshot_size = snapshot_size

    @property
    def backend_name(self) -> str:
        return self.backend.name

    @property
    def _tiered(self) -> bool:
        return self.backend is not self.fallback

    async def initialize(self) -> bool:
        """Prepare the primary backend. Returns False if it could not be reached."""
        try:
            await self.backend.initialize()
            return True
        except Exception:
            logger.error(
                "Failed to initialize database, falling back to in-memory storage",
                exc_info=True,
            )
            return False

    async def close(self) -> None:
        await self.backend.close()

    async def _call(
        self,
        operation: str,
        call: Callable[[StorageBackend], Awaitable[T]],
    ) -> MemoryResult[T]:
        try:
            return MemoryResult(await call(self.backend))
        except Exception:
            if not self._tiered:
                raise
            logger.warning(f"Failed to {operation}, using in-memory fallback", exc_info=True)
            return MemoryResult(await call(self.fallback), degraded=True)

    # ---- Records ----

    def _remember(self, record: Optional[MemoryRecord]) -> None:
        if not self._tiered or record is None:
            return
        self._snapshots[record.id] = record
        self._snapshots.move_to_end(record.id)
        while len(self._snapshots) > self._snapshot_size:
            self._snapshots.popitem(last=False)

    async def _pending(self, record_id: str) -> Optional[MemoryRecord]:
        """The outage-time copy of `record_id` not yet folded into the primary."""
        if self._tiered and self.fallback.has_record(record_id):
            return await self.fallback.get_record(record_id)
        return None

    async def write(self, record_id: str, partial: Dict[str, Any]) -> MemoryResult[bool]:
        """Merge `partial` into the record for `record_id`. Always reports success."""
        update = MemoryRecord(id=record_id, data=dict(partial))
        current = None
        try:
            current = await self.backend.get_record(record_id)
            pending = await self._pending(record_id)
            merged = _combine(record_id, current, pending, update)
            await self.backend.put_record(merged)
        except Exception:
            if not self._tiered:
                raise
            logger.warning("Failed to save to memory, using in-memory fallback", exc_info=True)
            merged = _combine(
                record_id,
                current or self._snapshots.get(record_id),
                await self.fallback.get_record(record_id),
                update,
            )
            await self.fallback.put_record(merged)
            return MemoryResult(True, degraded=True)

        self._remember(merged)
        if pending is not None:
            await self.fallback.delete_record(record_id)
        return MemoryResult(True)

    async def read(self, record_id: str) -> MemoryResult[Optional[Dict[str, Any]]]:
        """Return the accumulated mapping for `record_id`, or None if unknown."""
        try:
            record = await self.backend.get_record(record_id)
        except Exception:
            if not self._tiered:
                raise
            logger.warning("Failed to get from memory, using in-memory fallback", exc_info=True)
            record = _combine(
                record_id,
                self._snapshots.get(record_id),
                await self.fallback.get_record(record_id),
            )
            return MemoryResult(dict(record.data) if record else None, degraded=True)

        self._remember(record)
        pending = await self._pending(record_id)
        if pending is not None:
            record = _combine(record_id, record, pending)
        return MemoryResult(dict(record.data) if record else None, pending is not None)

    async def read_all(self) -> MemoryResult[List[MemoryRecord]]:
        """Return every record, newest first."""
        try:
            records = await self.backend.list_records()
            degraded = False
        except Exception:
            if not self._tiered:
                raise
            logger.warning("Failed to get all memory entries, using in-memory fallback", exc_info=True)
            records = list(self._snapshots.values())
            degraded = True

        if self._tiered:
            pending = await self.fallback.list_records()
            if pending:
                by_id = {record.id: record for record in records}
                for record in pending:
                    by_id[record.id] = _combine(record.id, by_id.get(record.id), record)
                records = list(by_id.values())
                degraded = True

        records = sorted(records, key=lambda r: r.created_at, reverse=True)
        return MemoryResult(records, degraded)

    # ---- Activity log ----

    async def log_activity(self, agent: str, action: str, details: str) -> MemoryResult[LogEntry]:
        """Append an entry to the activity log."""
        entry = LogEntry(agent=agent, action=action, details=details)

        async def _append(store: StorageBackend) -> LogEntry:
            await store.append_log(entry)
            return entry

        return await self._call("log agent activity", _append)

    async def read_logs(self, limit: int = DEFAULT_LOG_LIMIT) -> MemoryResult[List[LogEntry]]:
        """Return up to `limit` entries, newest first."""
        return await self._call("get agent logs", lambda store: store.list_logs(limit))
