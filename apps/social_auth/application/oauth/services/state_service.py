"""OAuth State Service.

CSRF 방지용 state 를 발급하고 한 번만 검증·소비합니다.

소유자 바인딩:
    - 인증된 발급: user_id 에 바인딩 (fingerprint 도 함께 기록 가능)
    - 익명 발급: 요청 fingerprint 에만 바인딩

같은 (provider, 소유자) 에 대해 새 state 를 발급하면 이전 state 는 즉시 무효화됩니다.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from typing import Any, Mapping

from apps.social_auth.application.common.ports import KeyValueStore
from apps.social_auth.application.oauth.dto import OAuthStateEntry
from apps.social_auth.application.oauth.exceptions import StateOwnerRequiredError
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.value_objects import Clock, now_ms

logger = logging.getLogger(__name__)

STATE_KEY_PREFIX = "oauth:state:"
STATE_OWNER_KEY_PREFIX = "oauth:state-owner:"
DEFAULT_STATE_TTL_SECONDS = 5 * 60
STATE_ENTROPY_BYTES = 24


class OAuthStateService:
    """OAuth state 발급/소비 서비스."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_seconds: int = DEFAULT_STATE_TTL_SECONDS,
        clock: Clock = now_ms,
    ) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_ms(self) -> int:
        return self._ttl_seconds * 1000

    async def issue_state(
        self,
        provider: Provider,
        *,
        user_id: str | None = None,
        fingerprint: str | None = None,
        redirect_uri: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> str:
        """state 를 발급합니다.

        Raises:
            StateOwnerRequiredError: user_id 와 fingerprint 가 모두 없는 경우
        """
        if not user_id and not fingerprint:
            raise StateOwnerRequiredError()

        await self._store.sweep_expired()

        owner_key = self._owner_key(provider, user_id, fingerprint)
        previous = await self._store.get(owner_key)
        if previous and previous.get("state"):
            await self._store.delete(self._state_key(previous["state"]))

        state = secrets.token_hex(STATE_ENTROPY_BYTES)
        entry = OAuthStateEntry(
            provider=provider,
            user_id=user_id or None,
            fingerprint=fingerprint or None,
            redirect_uri=redirect_uri,
            metadata=dict(metadata or {}),
            expires_at=self._clock() + self.ttl_ms,
        )
        await self._store.set(self._state_key(state), entry.to_dict(), self._ttl_seconds)
        await self._store.set(owner_key, {"state": state}, self._ttl_seconds)

        logger.debug(
            "OAuth state issued",
            extra={
                "provider": provider.value,
                "bound_to": "user" if user_id else "fingerprint",
                "state_prefix": state[:8],
            },
        )
        return state

    async def consume_state(
        self,
        provider: Provider,
        state: str | None,
        *,
        user_id: str | None = None,
        fingerprint: str | None = None,
    ) -> OAuthStateEntry | None:
        """state 를 검증하고 소비합니다.

        모든 검증을 통과한 경우에만 삭제하므로, 소유자가 아닌 호출자가
        다른 사용자의 state 를 소모시킬 수 없습니다.

        Returns:
            검증된 엔트리, 실패 시 None
        """
        if not state or provider is None:
            return None

        await self._store.sweep_expired()

        key = self._state_key(state)
        raw = await self._store.get(key)
        if raw is None:
            return None

        entry = OAuthStateEntry.from_dict(raw)
        if entry.provider != provider:
            return None

        if entry.expires_at <= self._clock():
            await self._store.delete(key)
            return None

        if entry.user_id:
            if not user_id or entry.user_id != user_id:
                logger.warning(
                    "OAuth state owner mismatch",
                    extra={"provider": provider.value, "state_prefix": state[:8]},
                )
                return None
        elif user_id:
            return None

        if entry.fingerprint and (not fingerprint or entry.fingerprint != fingerprint):
            logger.warning(
                "OAuth state fingerprint mismatch",
                extra={"provider": provider.value, "state_prefix": state[:8]},
            )
            return None

        # 동시 소비 경쟁에서 진 호출자는 None
        claimed = await self._store.pop(key)
        if claimed is None:
            return None

        owner_key = self._owner_key(entry.provider, entry.user_id, entry.fingerprint)
        owner = await self._store.get(owner_key)
        if owner and owner.get("state") == state:
            await self._store.delete(owner_key)

        return entry

    def _state_key(self, state: str) -> str:
        return f"{STATE_KEY_PREFIX}{state}"

    def _owner_key(
        self, provider: Provider, user_id: str | None, fingerprint: str | None
    ) -> str:
        if user_id:
            return f"{STATE_OWNER_KEY_PREFIX}{provider.value}:user:{user_id}"
        digest = hashlib.sha256((fingerprint or "").encode()).hexdigest()
        return f"{STATE_OWNER_KEY_PREFIX}{provider.value}:fp:{digest}"
