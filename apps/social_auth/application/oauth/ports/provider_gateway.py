"""OAuth Provider Gateway Port."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from apps.social_auth.domain.enums import Provider


@dataclass(frozen=True, slots=True)
class OAuthTokens:
    """프로바이더 토큰 응답."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int = 3600
    scope: str | None = None


@dataclass(frozen=True, slots=True)
class OAuthProfile:
    """프로바이더 사용자 프로필."""

    provider: Provider
    provider_user_id: str
    email: str | None = None
    nickname: str | None = None
    profile_image_url: str | None = None
    product: str | None = None


class OAuthProviderGateway(Protocol):
    """프로바이더 HTTP 호출 추상화.

    Raises (공통):
        InvalidGrantError: grant 가 더 이상 유효하지 않음
        OAuthProviderError: 그 외 4xx 거절
        DependencyError: 타임아웃, 네트워크 오류, 5xx
    """

    def get_authorization_url(
        self,
        provider: Provider,
        *,
        redirect_uri: str,
        state: str,
        scope: str | None = None,
        code_verifier: str | None = None,
    ) -> str:
        ...

    async def exchange_code(
        self,
        provider: Provider,
        *,
        code: str,
        redirect_uri: str,
        state: str | None = None,
        code_verifier: str | None = None,
        client_id: str | None = None,
    ) -> OAuthTokens:
        ...

    async def refresh_access_token(
        self,
        provider: Provider,
        *,
        refresh_token: str,
        client_id: str | None = None,
    ) -> OAuthTokens:
        ...

    async def fetch_profile(self, provider: Provider, *, access_token: str) -> OAuthProfile:
        ...

    async def revoke_upstream(self, provider: Provider, *, access_token: str) -> None:
        ...
