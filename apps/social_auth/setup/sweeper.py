"""Expiry Sweeper.

인메모리 저장소의 만료 항목을 주기적으로 정리하는 백그라운드 작업입니다.
정확성은 조회 시점의 만료 검사로 보장되며, 이 작업은 메모리 회수용입니다.
"""

from __future__ import annotations

import asyncio
import logging

from apps.social_auth.application.common.ports import KeyValueStore

logger = logging.getLogger(__name__)


async def sweep_once(store: KeyValueStore) -> int:
    removed = await store.sweep_expired()
    if removed:
        logger.debug("Expired entries swept", extra={"removed": removed})
    return removed


async def run_expiry_sweeper(store: KeyValueStore, interval_seconds: float) -> None:
    """취소될 때까지 interval_seconds 마다 sweep 합니다."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await sweep_once(store)
        except Exception:
            logger.warning("Expiry sweep failed", exc_info=True)
