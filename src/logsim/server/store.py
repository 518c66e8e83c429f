"""
Log entry store used by /api/logs.

Persistence is an external collaborator; the server only needs connect,
create, query and close. InMemoryLogStore is the bundled implementation.
"""

import itertools
from typing import Any, Protocol

from ..events import format_timestamp, utc_now

ENTRY_FIELDS = ("level", "message", "source", "timestamp")


class StoreError(Exception):
    """Raised when the store cannot complete an operation."""

    pass


class StoreUnavailableError(StoreError):
    """Raised when the store cannot be reached."""

    pass


class LogStore(Protocol):
    async def connect(self) -> None: ...

    async def create(self, entry: dict[str, Any]) -> dict[str, Any]: ...

    async def query(self, limit: int = 100) -> list[dict[str, Any]]: ...

    async def close(self) -> None: ...


class InMemoryLogStore:
    """Bounded in-process store; newest entries are returned first."""

    def __init__(self, max_entries: int = 10_000):
        self.max_entries = max_entries
        self._entries: list[dict[str, Any]] = []
        self._ids = itertools.count(1)
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def create(self, entry: dict[str, Any]) -> dict[str, Any]:
        doc: dict[str, Any] = {"id": str(next(self._ids))}
        for key in ENTRY_FIELDS:
            value = entry.get(key)
            if value is not None:
                doc[key] = value if key == "timestamp" else str(value)
        doc.setdefault("timestamp", format_timestamp(utc_now()))
        self._entries.append(doc)
        if len(self._entries) > self.max_entries:
            del self._entries[: len(self._entries) - self.max_entries]
        return dict(doc)

    async def query(self, limit: int = 100) -> list[dict[str, Any]]:
        newest = list(reversed(self._entries[-limit:])) if limit > 0 else []
        return [dict(e) for e in newest]

    async def close(self) -> None:
        self.connected = False
