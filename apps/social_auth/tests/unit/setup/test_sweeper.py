"""만료 스위퍼 테스트."""

import asyncio
import contextlib

import pytest

from apps.social_auth.setup.sweeper import run_expiry_sweeper, sweep_once


class TestSweeper:
    @pytest.mark.asyncio
    async def test_sweep_once(self, kv_store, clock) -> None:
        await kv_store.set("expired", {}, 1)
        await kv_store.set("alive", {}, 60)
        clock.advance(5_000)

        assert await sweep_once(kv_store) == 1
        assert len(kv_store) == 1

    @pytest.mark.asyncio
    async def test_run_until_cancelled(self, kv_store, clock) -> None:
        await kv_store.set("expired", {}, 1)
        clock.advance(5_000)

        task = asyncio.create_task(run_expiry_sweeper(kv_store, 0))
        for _ in range(5):
            await asyncio.sleep(0)
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

        assert len(kv_store) == 0
