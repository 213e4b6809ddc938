"""
Data models for shared memory records and the agent activity log.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Generic, TypeVar

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MemoryRecord:
    """Accumulated knowledge about one session.

    Attributes:
        id: Session id (e.g. "conversation_1a2b3c4d")
        data: Open mapping of field name to JSON-like value
        created_at: Set once at first write, never changed afterward
    """

    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "data": self.data,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class LogEntry:
    """One observable action taken by one agent."""

    agent: str
    action: str
    details: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "agent": self.agent,
            "action": self.action,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class MemoryResult(Generic[T]):
    """Value returned by a shared memory operation.

    degraded is True when the primary backend failed and the in-process
    fallback store answered instead.
    """

    value: T
    degraded: bool = False
