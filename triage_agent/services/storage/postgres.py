"""
Durable storage backend on Postgres.

Uses SQLAlchemy async Core with two tables:
- agent_memory: session id -> JSON blob + creation timestamp
- agent_logs: append-only activity log

Schema setup is create-if-not-exists and runs at most once per instance, so
it is safe to call repeatedly and from concurrent tasks.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, TypeVar

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    MetaData,
    Table,
    Text,
    insert,
    select,
    update,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.schema import CreateTable

from ...errors import StorageUnavailableError
from ...models.memory import LogEntry, MemoryRecord
from .base import StorageBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")

metadata = MetaData()

agent_memory = Table(
    "agent_memory",
    metadata,
    Column("id", Text, primary_key=True),
    Column("data", JSON().with_variant(JSONB(), "postgresql"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

agent_logs = Table(
    "agent_logs",
    metadata,
    Column("id", Text, primary_key=True),
    Column("agent", Text, nullable=False),
    Column("action", Text, nullable=False),
    Column("details", Text),
    Column("timestamp", DateTime(timezone=True), nullable=False),
)


def normalize_database_url(url: str) -> str:
    """Point plain Postgres URLs at the asyncpg driver.

    Hosted Postgres URLs usually carry ?sslmode=require, which asyncpg spells ssl=require.
    """
    if url.startswith("postgres://"):
        url = "postgresql+asyncpg://" + url[len("postgres://"):]
    elif url.startswith("postgresql://"):
        url = "postgresql+asyncpg://" + url[len("postgresql://"):]

    parsed = make_url(url)
    if parsed.drivername == "postgresql+asyncpg" and "sslmode" in parsed.query:
        sslmode = parsed.query["sslmode"]
        parsed = parsed.difference_update_query(["sslmode"]).update_query_dict({"ssl": sslmode})
        return parsed.render_as_string(hide_password=False)
    return url


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostgresBackend(StorageBackend):
    """Postgres-backed records and logs."""

    name = "postgres"

    def __init__(self, url: str = None, engine: AsyncEngine = None):
        if engine is None:
            if not url:
                raise ValueError("PostgresBackend needs a database url or an engine")
            engine = create_async_engine(normalize_database_url(url), pool_pre_ping=True)
        self._engine = engine
        self._init_lock = asyncio.Lock()
        self._initialized = False

    async def initialize(self) -> None:
        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            try:
                async with self._engine.begin() as conn:
                    for table in (agent_memory, agent_logs):
                        await conn.execute(CreateTable(table, if_not_exists=True))
            except (SQLAlchemyError, OSError) as e:
                raise StorageUnavailableError(f"Failed to initialize database: {e}") from e
            self._initialized = True
            logger.info("Database initialized with Postgres")

    async def close(self) -> None:
        await self._engine.dispose()

    async def _run(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        await self.initialize()
        try:
            return await fn()
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailableError(f"Postgres {operation} failed: {e}") from e

    async def put_record(self, record: MemoryRecord) -> None:
        async def _put():
            async with self._engine.begin() as conn:
                result = await conn.execute(
                    update(agent_memory)
                    .where(agent_memory.c.id == record.id)
                    .values(data=record.data)
                )
                if result.rowcount == 0:
                    await conn.execute(
                        insert(agent_memory).values(
                            id=record.id,
                            data=record.data,
                            created_at=record.created_at,
                        )
                    )

        await self._run("put_record", _put)

    async def get_record(self, record_id: str) -> Optional[MemoryRecord]:
        async def _get():
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    select(agent_memory).where(agent_memory.c.id == record_id)
                )
                row = result.mappings().first()
            if row is None:
                return None
            return MemoryRecord(
                id=row["id"],
                data=dict(row["data"] or {}),
                created_at=_as_utc(row["created_at"]),
            )

        return await self._run("get_record", _get)

    async def list_records(self) -> List[MemoryRecord]:
        async def _list():
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    select(agent_memory).order_by(agent_memory.c.created_at.desc())
                )
                rows = result.mappings().all()
            return [
                MemoryRecord(
                    id=row["id"],
                    data=dict(row["data"] or {}),
                    created_at=_as_utc(row["created_at"]),
                )
                for row in rows
            ]

        return await self._run("list_records", _list)

    async def append_log(self, entry: LogEntry) -> None:
        async def _append():
            async with self._engine.begin() as conn:
                await conn.execute(
                    insert(agent_logs).values(
                        id=entry.id,
                        agent=entry.agent,
                        action=entry.action,
                        details=entry.details,
                        timestamp=entry.timestamp,
                    )
                )

        await self._run("append_log", _append)

    async def list_logs(self, limit: int) -> List[LogEntry]:
        if limit <= 0:
            return []

        async def _list():
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    select(agent_logs)
                    .order_by(agent_logs.c.timestamp.desc())
                    .limit(limit)
                )
                rows = result.mappings().all()
            return [
                LogEntry(
                    id=row["id"],
                    agent=row["agent"],
                    action=row["action"],
                    details=row["details"] or "",
                    timestamp=_as_utc(row["timestamp"]),
                )
                for row in rows
            ]

        return await self._run("list_logs", _list)
