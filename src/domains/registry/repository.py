"""Storage for entities and audit events.

Routes depend on the ``Repository`` protocol, not on a concrete store. The
default store keeps records in process memory and is lost on restart.
"""

from __future__ import annotations

import time
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel


class EntityNotFoundError(LookupError):
    pass


T = TypeVar("T", bound=BaseModel)


class Repository(Protocol[T]):
    async def get(self, record_id: str) -> T: ...

    async def list(self) -> list[T]: ...

    async def insert(self, record: T) -> T: ...

    async def update(self, record_id: str, changes: dict) -> T: ...


class InMemoryRepository(Generic[T]):
    """Dict-backed store. Only touched from the event loop thread."""

    def __init__(self, kind: str = "record") -> None:
        self._kind = kind
        self._records: dict[str, T] = {}

    async def get(self, record_id: str) -> T:
        record = self._records.get(record_id)
        if record is None:
            raise EntityNotFoundError(f"{self._kind} {record_id} not found")
        return record

    async def list(self) -> list[T]:
        return list(self._records.values())

    async def insert(self, record: T) -> T:
        record_id = record.id  # type: ignore[attr-defined]
        if record_id in self._records:
            raise ValueError(f"{self._kind} {record_id} already exists")
        self._records[record_id] = record
        return record

    async def update(self, record_id: str, changes: dict) -> T:
        current = await self.get(record_id)
        updated = current.model_copy(update=changes)
        self._records[record_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._records)


class IdGenerator:
    """``<prefix>-<epoch ms>`` ids, bumped when two land in the same millisecond."""

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._last = 0

    def __call__(self) -> str:
        now_ms = int(time.time() * 1000)
        value = max(now_ms, self._last + 1)
        self._last = value
        return f"{self._prefix}-{value}"
