"""One-Time Code Service.

모바일 딥링크로 세션 토큰을 직접 노출하지 않기 위한 60초 일회용 코드입니다.
"""

from __future__ import annotations

import logging
import secrets

from apps.social_auth.application.common.ports import KeyValueStore
from apps.social_auth.application.oauth.dto import OneTimeCodePayload
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.value_objects import Clock, now_ms

logger = logging.getLogger(__name__)

CODE_KEY_PREFIX = "oauth:otc:"
DEFAULT_CODE_TTL_SECONDS = 60
CODE_ENTROPY_BYTES = 32


class OneTimeCodeService:
    """일회용 코드 발급/소비."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_seconds: int = DEFAULT_CODE_TTL_SECONDS,
        clock: Clock = now_ms,
    ) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    async def issue_code(self, token: str, provider: Provider) -> str:
        await self._store.sweep_expired()
        code = secrets.token_hex(CODE_ENTROPY_BYTES)
        await self._store.set(
            f"{CODE_KEY_PREFIX}{code}",
            {
                "token": token,
                "provider": provider.value,
                "expires_at": self._clock() + self._ttl_seconds * 1000,
            },
            self._ttl_seconds,
        )
        return code

    async def consume_code(self, code: str | None) -> OneTimeCodePayload | None:
        """코드를 소비합니다. 조회 즉시 삭제되므로 두 번째 호출은 항상 None."""
        if not code:
            return None

        await self._store.sweep_expired()

        data = await self._store.pop(f"{CODE_KEY_PREFIX}{code}")
        if data is None:
            return None

        if int(data.get("expires_at") or 0) <= self._clock():
            logger.info("One-time code expired", extra={"code_prefix": code[:8]})
            return None

        return OneTimeCodePayload(
            token=data["token"],
            provider=Provider.parse(data.get("provider")),
        )
