"""Tests for per-room locks."""

import asyncio
import uuid

from lodgedesk.services.locks import RoomLockRegistry


class TestRoomLockRegistry:
    async def test_same_room_serialized(self):
        locks = RoomLockRegistry()
        room_id = uuid.uuid4()
        order = []

        async def worker(name: str) -> None:
            async with locks.hold(room_id):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))
        assert order in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])

    async def test_different_rooms_independent(self):
        locks = RoomLockRegistry()
        first, second = uuid.uuid4(), uuid.uuid4()
        async with locks.hold(first):
            assert locks.is_locked(first)
            assert not locks.is_locked(second)
            async with locks.hold(second):
                assert locks.is_locked(second)
        assert not locks.is_locked(first)

    async def test_no_room_no_lock(self):
        locks = RoomLockRegistry()
        async with locks.hold(None):
            pass
