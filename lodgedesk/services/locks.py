"""Per-room locks serializing availability checks with room-status writes."""

import asyncio
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class RoomLockRegistry:
    """One ``asyncio.Lock`` per room id, created on first use.

    Guards a single worker process. Across processes the booking workflow also
    takes a row lock (``SELECT ... FOR UPDATE``) on the room.
    """

    def __init__(self) -> None:
        self._locks: dict[uuid.UUID, asyncio.Lock] = {}

    def _lock_for(self, room_id: uuid.UUID) -> asyncio.Lock:
        lock = self._locks.get(room_id)
        if lock is None:
            lock = self._locks[room_id] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, room_id: uuid.UUID | None) -> AsyncIterator[None]:
        """Hold the room's lock for the block. ``None`` means no room, no lock."""
        if room_id is None:
            yield
            return
        async with self._lock_for(room_id):
            yield

    def is_locked(self, room_id: uuid.UUID) -> bool:
        lock = self._locks.get(room_id)
        return lock is not None and lock.locked()


room_locks = RoomLockRegistry()
