"""Access Token Cache.

refresh 로 발급받은 단기 access token 을 만료 직전까지 재사용합니다.
"""

from __future__ import annotations

from apps.social_auth.application.common.ports import KeyValueStore
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.value_objects import Clock, now_ms

ACCESS_TOKEN_KEY_PREFIX = "oauth:access:"
DEFAULT_EXPIRY_BUFFER_MS = 5000


class AccessTokenCache:
    """(user_id, provider) 별 access token 캐시."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        expiry_buffer_ms: int = DEFAULT_EXPIRY_BUFFER_MS,
        clock: Clock = now_ms,
    ) -> None:
        self._store = store
        self._expiry_buffer_ms = expiry_buffer_ms
        self._clock = clock

    def _key(self, user_id: str, provider: Provider) -> str:
        return f"{ACCESS_TOKEN_KEY_PREFIX}{provider.value}:{user_id}"

    async def get(self, user_id: str, provider: Provider) -> str | None:
        """만료까지 버퍼 이상 남은 토큰만 반환합니다."""
        entry = await self._store.get(self._key(user_id, provider))
        if not entry:
            return None
        if int(entry.get("expires_at") or 0) <= self._clock() + self._expiry_buffer_ms:
            return None
        return entry.get("access_token")

    async def put(
        self, user_id: str, provider: Provider, access_token: str, expires_in: int
    ) -> None:
        if expires_in <= 0:
            return
        await self._store.set(
            self._key(user_id, provider),
            {"access_token": access_token, "expires_at": self._clock() + expires_in * 1000},
            expires_in,
        )

    async def invalidate(self, user_id: str, provider: Provider) -> None:
        await self._store.delete(self._key(user_id, provider))
