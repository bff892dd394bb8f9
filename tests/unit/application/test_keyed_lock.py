"""Unit tests for KeyedLock."""

from __future__ import annotations

import asyncio

import pytest

from casevault.application.services.keyed_lock import KeyedLock


class TestKeyedLock:
    """Tests for per-key mutual exclusion."""

    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self) -> None:
        """Holders of the same key never overlap."""
        locks = KeyedLock()
        active = 0
        max_active = 0

        async def worker() -> None:
            nonlocal active, max_active
            async with locks.hold("case1"):
                active += 1
                max_active = max(max_active, active)
                await asyncio.sleep(0)
                active -= 1

        await asyncio.gather(*(worker() for _ in range(5)))

        assert max_active == 1

    @pytest.mark.asyncio
    async def test_distinct_keys_run_in_parallel(self) -> None:
        """A held key does not block a different key."""
        locks = KeyedLock()
        release = asyncio.Event()
        entered_b = asyncio.Event()

        async def hold_a() -> None:
            async with locks.hold("A"):
                await release.wait()

        async def hold_b() -> None:
            async with locks.hold("B"):
                entered_b.set()

        task_a = asyncio.create_task(hold_a())
        await asyncio.sleep(0)
        await asyncio.wait_for(hold_b(), timeout=1.0)

        assert entered_b.is_set()
        assert locks.is_locked("A")
        release.set()
        await task_a

    @pytest.mark.asyncio
    async def test_locks_are_discarded_after_use(self) -> None:
        locks = KeyedLock()

        async with locks.hold("case1"):
            assert len(locks) == 1
            assert locks.is_locked("case1")

        assert len(locks) == 0
        assert locks.is_locked("case1") is False

    @pytest.mark.asyncio
    async def test_lock_released_when_block_raises(self) -> None:
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.hold("case1"):
                raise RuntimeError("boom")

        assert len(locks) == 0
