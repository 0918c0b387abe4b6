"""Token Refresh Service.

authorization code 교환, refresh token 회전, access token 발급/캐시,
연동 해제를 담당합니다.

업스트림이 invalid_grant 계열 오류를 반환하면 로컬 레코드를 즉시 폐기하고
캐시를 비운 뒤 ReauthRequiredError 를 발생시킵니다.
"""

from __future__ import annotations

import logging

from apps.social_auth.application.common.exceptions import DecryptionError
from apps.social_auth.application.oauth.exceptions import (
    InvalidAuthorizationCodeError,
    InvalidGrantError,
    OAuthError,
    OAuthProviderError,
    ReauthRequiredError,
    RedirectUriMismatchError,
)
from apps.social_auth.application.oauth.ports import (
    OAuthProfile,
    OAuthProviderGateway,
    OAuthTokens,
)
from apps.social_auth.application.token.dto import ExchangeResult, RefreshResult
from apps.social_auth.application.token.exceptions import (
    MissingRefreshTokenError,
    SocialAccountNotLinkedError,
)
from apps.social_auth.application.token.services.access_token_cache import AccessTokenCache
from apps.social_auth.application.token.services.token_repository import SocialTokenRepository
from apps.social_auth.domain.entities import SocialToken
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.value_objects import Clock, TokenUpdate, now_ms

logger = logging.getLogger(__name__)


class TokenRefreshService:
    """프로바이더 토큰 수명주기 서비스."""

    def __init__(
        self,
        gateway: OAuthProviderGateway,
        *,
        social_tokens: SocialTokenRepository,
        spotify_tokens: SocialTokenRepository,
        cache: AccessTokenCache,
        clock: Clock = now_ms,
    ) -> None:
        self._gateway = gateway
        self._social_tokens = social_tokens
        self._spotify_tokens = spotify_tokens
        self._cache = cache
        self._clock = clock

    def repository(self, provider: Provider) -> SocialTokenRepository:
        if provider is Provider.SPOTIFY:
            return self._spotify_tokens
        return self._social_tokens

    async def exchange_code(
        self,
        provider: Provider,
        *,
        user_id: str,
        code: str,
        redirect_uri: str,
        state: str | None = None,
        code_verifier: str | None = None,
        client_id: str | None = None,
    ) -> ExchangeResult:
        """authorization code 를 토큰으로 교환하고 저장합니다.

        Raises:
            InvalidAuthorizationCodeError: 코드 만료/재사용 (레코드는 건드리지 않음)
            RedirectUriMismatchError: redirect URI 불일치
            MissingRefreshTokenError: 최초 연결인데 refresh token 이 없음
            RotationRateLimitedError: 회전 빈도 제한 초과
        """
        repository = self.repository(provider)
        try:
            tokens = await self._gateway.exchange_code(
                provider,
                code=code,
                redirect_uri=redirect_uri,
                state=state,
                code_verifier=code_verifier,
                client_id=client_id,
            )
        except InvalidGrantError as e:
            logger.warning(
                "Authorization code rejected",
                extra={"provider": provider.value, "user_id": user_id},
            )
            raise InvalidAuthorizationCodeError(provider.value) from e
        except OAuthProviderError as e:
            if e.error_code == "redirect_uri_mismatch":
                raise RedirectUriMismatchError(provider.value) from e
            raise

        existing = await repository.get_by_user(user_id, provider)
        if not tokens.refresh_token and (existing is None or not existing.refresh_token_enc):
            raise MissingRefreshTokenError(provider.value)

        profile = None
        if provider.is_social_login:
            profile = await self._gateway.fetch_profile(provider, access_token=tokens.access_token)

        record = await repository.upsert_token(
            user_id,
            provider,
            TokenUpdate(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                token_type=tokens.token_type,
                expires_at=self._expires_at(tokens),
                scope=tokens.scope,
                provider_user_id=profile.provider_user_id if profile else None,
                provider_user_email=profile.email if profile else None,
                provider_user_name=profile.nickname if profile else None,
                provider_user_profile=profile.profile_image_url if profile else None,
                client_id=client_id,
            ),
        )
        await self._cache.put(user_id, provider, tokens.access_token, tokens.expires_in)

        logger.info(
            "Provider account linked",
            extra={"provider": provider.value, "user_id": user_id, "version": record.version},
        )
        return ExchangeResult(
            provider=provider,
            access_token=tokens.access_token,
            expires_in=tokens.expires_in,
            token_type=tokens.token_type,
            version=record.version,
            scope=tokens.scope,
            profile=profile,
        )

    async def refresh(
        self,
        provider: Provider,
        *,
        user_id: str,
        client_id: str | None = None,
    ) -> RefreshResult:
        """저장된 refresh token 으로 access token 을 갱신합니다.

        회전 빈도 제한 초과는 그대로 호출자에게 전달됩니다.
        """
        repository = self.repository(provider)
        record, refresh_token = await self._load_refresh_token(provider, user_id)

        tokens = await self._refresh_upstream(
            provider, user_id, refresh_token, client_id or record.client_id
        )
        record = await repository.upsert_token(
            user_id, provider, self._refresh_update(tokens, refresh_token)
        )
        await self._cache.put(user_id, provider, tokens.access_token, tokens.expires_in)

        return RefreshResult(
            provider=provider,
            access_token=tokens.access_token,
            expires_in=tokens.expires_in,
            token_type=tokens.token_type,
            version=record.version,
            scope=tokens.scope,
        )

    async def get_access_token(self, user_id: str, provider: Provider = Provider.SPOTIFY) -> str:
        """유효한 access token 을 반환합니다.

        캐시가 만료 버퍼 밖이면 캐시를 사용하고, 아니면 refresh 합니다.
        refresh 과정의 회전 저장 실패는 로그만 남기고 새 access token 을 반환합니다.
        """
        cached = await self._cache.get(user_id, provider)
        if cached:
            return cached

        record, refresh_token = await self._load_refresh_token(provider, user_id)
        tokens = await self._refresh_upstream(provider, user_id, refresh_token, record.client_id)

        try:
            await self.repository(provider).upsert_token(
                user_id, provider, self._refresh_update(tokens, refresh_token)
            )
        except Exception:
            logger.warning(
                "Failed to persist refreshed tokens",
                exc_info=True,
                extra={"provider": provider.value, "user_id": user_id},
            )

        await self._cache.put(user_id, provider, tokens.access_token, tokens.expires_in)
        return tokens.access_token

    async def invalidate_access_token(
        self, user_id: str, provider: Provider = Provider.SPOTIFY
    ) -> None:
        await self._cache.invalidate(user_id, provider)

    async def revoke(self, provider: Provider, *, user_id: str) -> None:
        """연동을 해제합니다.

        업스트림 토큰 폐기는 최선 노력(best-effort)이며 실패해도 로컬 폐기는 진행됩니다.
        """
        repository = self.repository(provider)
        record = await repository.get_by_user(user_id, provider)
        if record is not None and not record.revoked and record.access_token_enc:
            try:
                tokens = repository.decrypt_token(record)
                if tokens and tokens.access_token:
                    await self._gateway.revoke_upstream(provider, access_token=tokens.access_token)
            except (OAuthError, DecryptionError) as e:
                logger.warning(
                    "Upstream revoke failed",
                    extra={"provider": provider.value, "user_id": user_id, "error": str(e)},
                )

        await repository.revoke(user_id, provider)
        await self._cache.invalidate(user_id, provider)

    async def fetch_profile(self, provider: Provider, *, user_id: str) -> OAuthProfile:
        """저장된 access token 으로 소셜 프로필을 조회합니다.

        Raises:
            ReauthRequiredError: 토큰 만료 (error=TOKEN_EXPIRED)
        """
        repository = self.repository(provider)
        record = await repository.get_by_user(user_id, provider)
        if record is None or record.revoked:
            raise SocialAccountNotLinkedError(provider.value)
        tokens = repository.decrypt_token(record)
        if not tokens or not tokens.access_token:
            raise SocialAccountNotLinkedError(provider.value, code="TOKEN_MISSING")

        try:
            return await self._gateway.fetch_profile(provider, access_token=tokens.access_token)
        except InvalidGrantError as e:
            raise ReauthRequiredError(
                provider.value, "Access token expired", code="TOKEN_EXPIRED"
            ) from e

    async def _load_refresh_token(
        self, provider: Provider, user_id: str
    ) -> tuple[SocialToken, str]:
        repository = self.repository(provider)
        record = await repository.get_by_user(user_id, provider)
        if record is None:
            raise SocialAccountNotLinkedError(provider.value)
        if record.revoked:
            raise ReauthRequiredError(provider.value, "Token revoked, re-authentication required")
        tokens = repository.decrypt_token(record)
        if not tokens or not tokens.refresh_token:
            raise SocialAccountNotLinkedError(provider.value, code="TOKEN_MISSING")
        return record, tokens.refresh_token

    async def _refresh_upstream(
        self,
        provider: Provider,
        user_id: str,
        refresh_token: str,
        client_id: str | None,
    ) -> OAuthTokens:
        try:
            return await self._gateway.refresh_access_token(
                provider, refresh_token=refresh_token, client_id=client_id
            )
        except InvalidGrantError as e:
            logger.warning(
                "Refresh token rejected by provider, revoking",
                extra={"provider": provider.value, "user_id": user_id, "error": e.error_code},
            )
            await self.repository(provider).revoke(user_id, provider)
            await self._cache.invalidate(user_id, provider)
            raise ReauthRequiredError(
                provider.value, "Token revoked, re-authentication required"
            ) from e

    def _refresh_update(self, tokens: OAuthTokens, current_refresh_token: str) -> TokenUpdate:
        rotated = tokens.refresh_token if tokens.refresh_token != current_refresh_token else None
        return TokenUpdate(
            access_token=tokens.access_token,
            refresh_token=rotated,
            token_type=tokens.token_type,
            expires_at=self._expires_at(tokens),
            scope=tokens.scope,
        )

    def _expires_at(self, tokens: OAuthTokens) -> int:
        return self._clock() + tokens.expires_in * 1000
