"""Social Token Repository.

사용자-프로바이더 별 토큰 레코드를 문서 스토어에 암호화하여 보관합니다.
소셜 로그인(kakao, naver)과 Spotify 는 서로 다른 컬렉션을 사용합니다.
"""

from __future__ import annotations

import asyncio
import logging
import weakref

from apps.social_auth.application.common.ports import DocumentStore, TokenCipher
from apps.social_auth.application.token.dto import DecryptedTokens
from apps.social_auth.domain.entities import SocialToken
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.services import apply_update, create_token, revoke_token
from apps.social_auth.domain.value_objects import Clock, RotationPolicy, TokenUpdate, now_ms

logger = logging.getLogger(__name__)

SOCIAL_TOKENS_COLLECTION = "social_tokens"
SPOTIFY_TOKENS_COLLECTION = "spotify_tokens"


class SocialTokenRepository:
    """토큰 레코드 저장소.

    같은 (user_id, provider) 에 대한 쓰기는 프로세스 내에서 직렬화되므로
    동시 회전이 회전 빈도 제한을 우회하지 못합니다.
    """

    def __init__(
        self,
        store: DocumentStore,
        cipher: TokenCipher,
        *,
        collection: str = SOCIAL_TOKENS_COLLECTION,
        policy: RotationPolicy | None = None,
        clock: Clock = now_ms,
    ) -> None:
        self._store = store
        self._cipher = cipher
        self._collection = collection
        self._policy = policy or RotationPolicy()
        self._clock = clock
        # 대기 중인 코루틴이 없는 락은 자동으로 제거됨
        self._locks: weakref.WeakValueDictionary[tuple[str, Provider], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def collection(self) -> str:
        return self._collection

    def _lock_for(self, user_id: str, provider: Provider) -> asyncio.Lock:
        key = (user_id, provider)
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    async def get_by_user(self, user_id: str, provider: Provider) -> SocialToken | None:
        """가장 최근에 갱신된 레코드를 반환합니다."""
        documents = await self._store.query_by_fields(
            self._collection,
            {"user_id": user_id, "provider": provider.value},
        )
        if not documents:
            return None
        latest = max(documents, key=lambda doc: int(doc.get("updated_at") or 0))
        return SocialToken.from_document(latest)

    async def upsert_token(
        self,
        user_id: str,
        provider: Provider,
        update: TokenUpdate,
        *,
        policy: RotationPolicy | None = None,
    ) -> SocialToken:
        """레코드를 생성하거나 부분 갱신합니다.

        Raises:
            RefreshTokenRequiredError: 최초 연결인데 refresh token 이 없음
            RotationRateLimitedError: 회전 빈도 제한 초과 (레코드 변경 없음)
            TokenRevokedError: 폐기된 레코드에 refresh token 없이 기록
        """
        policy = policy or self._policy
        async with self._lock_for(user_id, provider):
            access_token_enc = (
                self._cipher.encrypt(update.access_token) if update.access_token else None
            )
            refresh_token_enc = (
                self._cipher.encrypt(update.refresh_token) if update.refresh_token else None
            )
            existing = await self.get_by_user(user_id, provider)
            now = self._clock()

            if existing is None:
                record = create_token(
                    user_id=user_id,
                    provider=provider,
                    update=update,
                    access_token_enc=access_token_enc,
                    refresh_token_enc=refresh_token_enc,
                    now=now,
                )
                record.id = await self._store.create(self._collection, record.to_document())
                logger.info(
                    "Token record created",
                    extra={"user_id": user_id, "provider": provider.value},
                )
                return record

            record = apply_update(
                existing,
                update,
                access_token_enc=access_token_enc,
                refresh_token_enc=refresh_token_enc,
                now=now,
                policy=policy,
            )
            await self._store.update(self._collection, existing.id, record.to_document())
            if refresh_token_enc:
                logger.info(
                    "Refresh token rotated",
                    extra={
                        "user_id": user_id,
                        "provider": provider.value,
                        "version": record.version,
                    },
                )
            return record

    async def revoke(self, user_id: str, provider: Provider) -> None:
        """레코드를 폐기합니다. 레코드가 없거나 이미 폐기된 경우 아무 일도 하지 않습니다."""
        async with self._lock_for(user_id, provider):
            existing = await self.get_by_user(user_id, provider)
            if existing is None or existing.revoked:
                return
            record = revoke_token(existing, self._clock())
            await self._store.update(self._collection, existing.id, record.to_document())
            logger.info(
                "Token record revoked",
                extra={"user_id": user_id, "provider": provider.value},
            )

    async def delete(self, record_id: str) -> None:
        """레코드를 물리적으로 삭제합니다 (관리 목적)."""
        await self._store.delete(self._collection, record_id)

    def decrypt_token(self, record: SocialToken | None) -> DecryptedTokens | None:
        """레코드의 토큰을 복호화합니다. record 가 None 이면 None."""
        if record is None:
            return None
        return DecryptedTokens(
            access_token=(
                self._cipher.decrypt(record.access_token_enc) if record.access_token_enc else None
            ),
            refresh_token=(
                self._cipher.decrypt(record.refresh_token_enc)
                if record.refresh_token_enc
                else None
            ),
        )
