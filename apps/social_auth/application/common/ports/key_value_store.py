"""Key-Value Store Port.

OAuth state, 일회용 코드, access token 캐시가 공유하는 TTL 저장소 인터페이스입니다.
"""

from __future__ import annotations

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """TTL 기반 key-value 저장소.

    구현체:
        - InMemoryKeyValueStore (단일 프로세스)
        - RedisKeyValueStore (다중 인스턴스)
    """

    async def get(self, key: str) -> dict[str, Any] | None:
        """값 조회. 없거나 만료된 경우 None."""
        ...

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        """값 저장 (TTL 초 후 만료)."""
        ...

    async def delete(self, key: str) -> None:
        """값 삭제."""
        ...

    async def pop(self, key: str) -> dict[str, Any] | None:
        """원자적 조회 후 삭제.

        동시에 같은 key 를 pop 하는 호출 중 하나만 값을 받습니다.
        """
        ...

    async def sweep_expired(self) -> int:
        """만료된 항목 정리. 제거한 개수를 반환합니다."""
        ...
