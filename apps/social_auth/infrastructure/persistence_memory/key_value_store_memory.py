"""In-Memory Key-Value Store.

KeyValueStore 포트의 단일 프로세스 구현체입니다.
여러 인스턴스로 배포할 때는 RedisKeyValueStore 를 사용해야 합니다.
"""

from __future__ import annotations

import copy
import time
from typing import Any, Callable


class InMemoryKeyValueStore:
    """TTL 을 가진 dict 기반 저장소.

    이벤트 루프 단일 스레드에서 각 연산은 await 없이 수행되므로 원자적입니다.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, dict[str, Any]]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _live(self, key: str) -> dict[str, Any] | None:
        item = self._entries.get(key)
        if item is None:
            return None
        expires_at, value = item
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return value

    async def get(self, key: str) -> dict[str, Any] | None:
        value = self._live(key)
        return copy.deepcopy(value) if value is not None else None

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        self._entries[key] = (self._clock() + ttl_seconds, copy.deepcopy(value))

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def pop(self, key: str) -> dict[str, Any] | None:
        value = self._live(key)
        if value is None:
            return None
        del self._entries[key]
        return value

    async def sweep_expired(self) -> int:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)
